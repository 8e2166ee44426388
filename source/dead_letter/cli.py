# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line entry point: validate, compile or deploy dead letter settings."""
import argparse
import sys
from typing import Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from dead_letter.exceptions import DeadLetterError
from dead_letter.plugin import DeadLetterPlugin
from dead_letter.powertools_logger import get_logger
from dead_letter.service import (
    COMPILED_TEMPLATE_PATH,
    DEFAULT_CONFIG_PATH,
    DeployOptions,
    ServiceConfigError,
    load_compiled_template,
    load_service,
    save_compiled_template,
)

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sls-dead-letter",
        description="Configure Lambda dead letter targets for a serverless service.",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Path to serverless.yml."
    )
    parser.add_argument("--stage", default=None, help="Stage of the service.")
    parser.add_argument("--region", default=None, help="AWS region of the stack.")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "validate", help="Check every function's deadLetter settings offline."
    )

    compile_parser = subparsers.add_parser(
        "compile", help="Add managed queues, topics and alarms to the template."
    )
    compile_parser.add_argument(
        "--template",
        default=COMPILED_TEMPLATE_PATH,
        help="Compiled CloudFormation template to update.",
    )

    deploy_parser = subparsers.add_parser(
        "deploy",
        help=DeadLetterPlugin.commands["setLambdaDeadLetterConfig"]["usage"],
    )
    deploy_parser.add_argument(
        "--noDeploy",
        dest="no_deploy",
        action="store_true",
        help="Resolve targets without calling AWS.",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    options = DeployOptions(
        stage=args.stage,
        region=args.region,
        no_deploy=getattr(args, "no_deploy", False),
    )
    service = load_service(args.config, options)
    plugin = DeadLetterPlugin(service)

    if args.command == "validate":
        for function_name in service.get_all_functions():
            request = plugin.build_update_request(function_name, allow_stack_query=False)
            if request is not None:
                logger.info(
                    f"Function: {function_name}, DeadLetterArn: {request.target_arn}",
                    extra={"placeholder": request.is_placeholder},
                )
        return 0

    if args.command == "compile":
        load_compiled_template(service, args.template)
        plugin.run_hook("package:compileEvents")
        save_compiled_template(service, args.template)
        return 0

    plugin.run_hook("setLambdaDeadLetterConfig:setLambdaDeadLetterConfig")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        return run(args)
    except (DeadLetterError, ServiceConfigError) as e:
        logger.error(str(e))
        return 1
    except (ClientError, BotoCoreError) as e:
        logger.error("AWS request failed", extra={"error": str(e)})
        return 2


if __name__ == "__main__":
    sys.exit(main())
