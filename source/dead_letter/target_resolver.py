# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import TYPE_CHECKING, Any, Union

from dead_letter.arns import is_dead_letter_arn, queue_url_to_arn
from dead_letter.exceptions import ConfigurationError, UnsupportedResourceError
from dead_letter.naming import (
    dead_letter_queue_logical_id,
    dead_letter_topic_logical_id,
)
from dead_letter.powertools_logger import get_logger
from dead_letter.resource_compiler import build_queue_properties, build_topic_name
from dead_letter.target_spec import (
    TARGET_ARN_KEY,
    DeadLetterSpec,
    ExplicitTarget,
    ManagedQueue,
    ManagedTopic,
    NullTarget,
    ResourceReference,
    StringArn,
    parse_dead_letter,
    parse_target,
)

if TYPE_CHECKING:
    from mypy_boto3_cloudformation.client import CloudFormationClient
else:
    CloudFormationClient = object

logger = get_logger("target_resolver")

SQS_QUEUE_RESOURCE_TYPE = "AWS::SQS::Queue"
SNS_TOPIC_RESOURCE_TYPE = "AWS::SNS::Topic"


def placeholder_arn(logical_id: str) -> str:
    return "${GetResourceArn: " + logical_id + "}"


def is_placeholder_arn(value: str) -> bool:
    return value.startswith("${GetResourceArn: ")


class TargetResolver:
    """
    Resolves a function's deadLetter setting into the ARN to assign as the
    function's DeadLetterConfig.TargetArn.

    Stack lookups only happen when allow_stack_query is True. Otherwise
    references resolve to a `${GetResourceArn: <LogicalId>}` placeholder.
    """

    def __init__(self, cloudformation: "CloudFormationClient", stack_name: str):
        self.cloudformation = cloudformation
        self.stack_name = stack_name

    def resolve_target_arn(
        self,
        function_name: str,
        dead_letter: Union[DeadLetterSpec, dict[str, Any]],
        allow_stack_query: bool,
    ) -> str:
        spec = parse_dead_letter(function_name, dead_letter)

        if isinstance(spec, ManagedQueue):
            build_queue_properties(function_name, spec.config)
            return self.resolve_from_reference(
                function_name,
                ResourceReference(dead_letter_queue_logical_id(function_name)),
                allow_stack_query,
            )
        if isinstance(spec, ManagedTopic):
            build_topic_name(function_name, spec.config)
            return self.resolve_from_reference(
                function_name,
                ResourceReference(dead_letter_topic_logical_id(function_name)),
                allow_stack_query,
            )

        assert isinstance(spec, ExplicitTarget)
        target = spec.target
        if isinstance(target, NullTarget):
            return ""
        if isinstance(target, StringArn):
            return self.resolve_from_string(function_name, target.text)
        return self.resolve_from_reference(function_name, target, allow_stack_query)

    def resolve_from_string(self, function_name: str, value: str) -> str:
        arn = value.strip()
        if not arn:
            return ""

        if not is_dead_letter_arn(arn):
            raise ConfigurationError(
                function_name,
                TARGET_ARN_KEY,
                f"'{value}' is not a valid sns or sqs arn.",
            )
        return arn

    def resolve_from_reference(
        self,
        function_name: str,
        reference: Union[ResourceReference, dict[str, Any]],
        allow_stack_query: bool,
    ) -> str:
        if not isinstance(reference, ResourceReference):
            parsed = parse_target(function_name, reference)
            if not isinstance(parsed, ResourceReference):
                raise ConfigurationError(
                    function_name, TARGET_ARN_KEY, "must be a resource reference."
                )
            reference = parsed

        logical_id = reference.logical_id
        if not allow_stack_query:
            return placeholder_arn(logical_id)

        logger.debug(
            "Looking up dead letter target in stack",
            extra={
                "functionName": function_name,
                "stackName": self.stack_name,
                "logicalResourceId": logical_id,
            },
        )
        response = self.cloudformation.describe_stack_resource(
            StackName=self.stack_name, LogicalResourceId=logical_id
        )
        detail = response["StackResourceDetail"]
        resource_type = detail["ResourceType"]
        physical_id = detail["PhysicalResourceId"]

        if resource_type == SQS_QUEUE_RESOURCE_TYPE:
            return queue_url_to_arn(physical_id)
        if resource_type == SNS_TOPIC_RESOURCE_TYPE:
            return str(physical_id)

        raise UnsupportedResourceError(function_name, logical_id, resource_type)
