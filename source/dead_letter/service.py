# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Serverless service description.

Loads serverless.yml and provides the function list, per-function settings,
physical function names, the stack name and the compiled CloudFormation
template the dead letter resources are written into.
"""
import json
import os
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from dead_letter.powertools_logger import get_logger

logger = get_logger("service")

DEFAULT_CONFIG_PATH = "serverless.yml"
COMPILED_TEMPLATE_PATH = ".serverless/cloudformation-template-update-stack.json"
DEFAULT_STAGE = "dev"
DEFAULT_REGION = "us-east-1"


class ServiceConfigError(Exception):
    pass


@dataclass
class DeployOptions:
    stage: Optional[str] = None
    region: Optional[str] = None
    no_deploy: bool = False


@dataclass
class Service:
    name: str
    provider: dict[str, Any] = field(default_factory=dict)
    functions: dict[str, dict[str, Any]] = field(default_factory=dict)
    options: DeployOptions = field(default_factory=DeployOptions)
    compiled_template: dict[str, Any] = field(
        default_factory=lambda: {"Resources": {}}
    )

    @property
    def stage(self) -> str:
        return self.options.stage or self.provider.get("stage") or DEFAULT_STAGE

    @property
    def region(self) -> str:
        return (
            self.options.region
            or self.provider.get("region")
            or os.getenv("AWS_REGION", DEFAULT_REGION)
        )

    @property
    def stack_name(self) -> str:
        return self.provider.get("stackName") or f"{self.name}-{self.stage}"

    @property
    def template_resources(self) -> dict[str, Any]:
        return self.compiled_template.setdefault("Resources", {})

    def get_all_functions(self) -> list[str]:
        return list(self.functions.keys())

    def get_function(self, function_name: str) -> dict[str, Any]:
        if function_name not in self.functions:
            raise ServiceConfigError(
                f"Function '{function_name}' doesn't exist in this service"
            )
        function_obj = self.functions[function_name] or {}
        if not isinstance(function_obj, dict):
            raise ServiceConfigError(
                f"Function '{function_name}' must be an object, got {type(function_obj).__name__}"
            )
        return function_obj

    def get_physical_name(self, function_name: str) -> str:
        function_obj = self.get_function(function_name)
        return function_obj.get("name") or f"{self.name}-{self.stage}-{function_name}"


def load_service(
    config_path: str = DEFAULT_CONFIG_PATH, options: Optional[DeployOptions] = None
) -> Service:
    """
    Read serverless.yml, substituting ${ENV_VAR} references from the
    environment. Serverless variables like ${self:...} are left untouched.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = string.Template(f.read()).safe_substitute(os.environ)
        cfg = yaml.safe_load(content) or {}
    except FileNotFoundError as e:
        raise ServiceConfigError(f"Service config not found at {config_path}") from e
    except yaml.YAMLError as e:
        raise ServiceConfigError(f"Error parsing service config: {e}") from e

    service_name = cfg.get("service")
    if isinstance(service_name, dict):
        service_name = service_name.get("name")
    if not service_name:
        raise ServiceConfigError(f"Missing 'service' in {config_path}")

    service = Service(
        name=str(service_name),
        provider=cfg.get("provider") or {},
        functions=cfg.get("functions") or {},
        options=options or DeployOptions(),
    )
    logger.info(
        f"Loaded {len(service.functions)} functions from {config_path}",
        extra={"service": service.name, "stage": service.stage},
    )
    return service


def load_compiled_template(service: Service, template_path: str) -> None:
    path = Path(template_path)
    if path.exists():
        try:
            template = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ServiceConfigError(
                f"Error reading compiled template {template_path}: {e}"
            ) from e
        if not isinstance(template, dict):
            raise ServiceConfigError(
                f"Compiled template {template_path} must be a JSON object"
            )
        service.compiled_template = template
    else:
        logger.warning(
            f"Compiled template not found at {template_path}, starting from an empty one"
        )
        service.compiled_template = {"Resources": {}}


def save_compiled_template(service: Service, template_path: str) -> None:
    path = Path(template_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(service.compiled_template, indent=2), encoding="utf-8")
