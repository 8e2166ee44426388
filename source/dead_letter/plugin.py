# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from dead_letter.alarms import compile_dead_letter_alarm
from dead_letter.awsapi_cached_client import AWSCachedClient
from dead_letter.powertools_logger import get_logger
from dead_letter.resource_compiler import compile_managed_queue, compile_managed_topic
from dead_letter.service import Service
from dead_letter.target_resolver import TargetResolver, is_placeholder_arn
from dead_letter.target_spec import ManagedQueue, ManagedTopic, parse_dead_letter

if TYPE_CHECKING:
    from mypy_boto3_lambda.client import LambdaClient
else:
    LambdaClient = object

logger = get_logger("plugin")

DEAD_LETTER_KEY = "deadLetter"


@dataclass
class DeadLetterUpdateRequest:
    function_name: str
    physical_name: str
    target_arn: str

    @property
    def is_placeholder(self) -> bool:
        return is_placeholder_arn(self.target_arn)

    def to_params(self) -> dict[str, Any]:
        return {
            "FunctionName": self.physical_name,
            "DeadLetterConfig": {"TargetArn": self.target_arn},
        }


class DeadLetterPlugin:
    """
    Wires dead letter handling into the deployment lifecycle.

    `package:compileEvents` writes managed queues, topics and alarms into the
    compiled template. `deploy:deploy` assigns every function's
    DeadLetterConfig once the stack is up.
    """

    commands = {
        "setLambdaDeadLetterConfig": {
            "usage": "Sets the DeadLetterConfig of every function declaring deadLetter.",
            "lifecycleEvents": ["setLambdaDeadLetterConfig"],
        }
    }

    def __init__(
        self,
        service: Service,
        aws_client: Optional[AWSCachedClient] = None,
        resolver: Optional[TargetResolver] = None,
    ):
        self.service = service
        self.aws_client = aws_client or AWSCachedClient(service.region)
        self.resolver = resolver or TargetResolver(
            self.aws_client.get_connection("cloudformation"), service.stack_name
        )
        self.hooks: dict[str, Callable[[], Any]] = {
            "package:compileEvents": self.compile_all_function_dead_letter_resources,
            "deploy:deploy": self.set_lambda_dead_letter_config,
            "setLambdaDeadLetterConfig:setLambdaDeadLetterConfig": self.set_lambda_dead_letter_config,
        }

    def run_hook(self, hook: str) -> Any:
        return self.hooks[hook]()

    def get_lambda(self) -> "LambdaClient":
        return self.aws_client.get_connection("lambda")

    def build_update_request(
        self, function_name: str, allow_stack_query: bool
    ) -> Optional[DeadLetterUpdateRequest]:
        function_obj = self.service.get_function(function_name)
        dead_letter = function_obj.get(DEAD_LETTER_KEY)
        if dead_letter is None:
            return None

        target_arn = self.resolver.resolve_target_arn(
            function_name, dead_letter, allow_stack_query
        )
        return DeadLetterUpdateRequest(
            function_name=function_name,
            physical_name=self.service.get_physical_name(function_name),
            target_arn=target_arn,
        )

    def compile_function_dead_letter_resource(self, function_name: str) -> None:
        dead_letter = self.service.get_function(function_name).get(DEAD_LETTER_KEY)
        if dead_letter is None:
            return

        spec = parse_dead_letter(function_name, dead_letter)
        resources = self.service.template_resources
        if isinstance(spec, ManagedQueue):
            compile_managed_queue(resources, function_name, spec.config)
        elif isinstance(spec, ManagedTopic):
            compile_managed_topic(resources, function_name, spec.config)

        compile_dead_letter_alarm(
            resources,
            function_name,
            self.service.get_physical_name(function_name),
            spec,
        )

    def compile_all_function_dead_letter_resources(
        self,
    ) -> list[Optional[DeadLetterUpdateRequest]]:
        """
        Validate and compile each function in declaration order. Stops at the
        first invalid function and raises its error.
        """
        outcomes = []
        for function_name in self.service.get_all_functions():
            request = self.build_update_request(function_name, allow_stack_query=False)
            self.compile_function_dead_letter_resource(function_name)
            outcomes.append(request)
        return outcomes

    def set_lambda_dead_letter_config(self) -> list[DeadLetterUpdateRequest]:
        no_deploy = self.service.options.no_deploy
        requests = []

        for function_name in self.service.get_all_functions():
            request = self.build_update_request(
                function_name, allow_stack_query=not no_deploy
            )
            if request is None:
                continue

            logger.info(
                f"Function: {function_name}, DeadLetterArn: {request.target_arn}",
                extra={
                    "functionName": function_name,
                    "targetArn": request.target_arn,
                    "placeholder": request.is_placeholder,
                },
            )
            requests.append(request)

            if no_deploy:
                continue

            self.get_lambda().update_function_configuration(**request.to_params())
            logger.info(f"Function '{function_name}' DeadLetterConfig assigned.")

        return requests
