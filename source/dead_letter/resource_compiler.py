# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
CloudFormation resources for managed dead letter queues and topics.

Every function here writes into the `Resources` mapping of the compiled
template it is given. Entries are overwritten, never merged or removed.
"""
from typing import Any

from dead_letter.exceptions import ConfigurationError
from dead_letter.naming import (
    dead_letter_queue_logical_id,
    dead_letter_queue_policy_logical_id,
    dead_letter_topic_logical_id,
    lambda_logical_id,
    normalize_name,
)
from dead_letter.powertools_logger import get_logger
from dead_letter.target_spec import SNS_KEY, SQS_KEY

logger = get_logger("resource_compiler")

POLICY_VERSION = "2012-10-17"
DEFAULT_POLICY_SUFFIX = "/SQSDefaultPolicy"


def build_queue_properties(function_name: str, queue_config: Any) -> dict[str, Any]:
    if isinstance(queue_config, str):
        properties = {"QueueName": queue_config.strip()}
    elif isinstance(queue_config, dict):
        # keys are passed through as CloudFormation properties, unchecked
        properties = {
            normalize_name(key): value for key, value in queue_config.items()
        }
    else:
        raise ConfigurationError(
            function_name, SQS_KEY, "must be a queue name or an object of properties."
        )

    queue_name = properties.get("QueueName")
    if not isinstance(queue_name, str) or not queue_name.strip():
        raise ConfigurationError(function_name, SQS_KEY, "queue name must be defined.")

    return properties


def build_queue_policy(queue_logical_id: str, function_logical_id: str) -> dict[str, Any]:
    queue_arn = {"Fn::GetAtt": [queue_logical_id, "Arn"]}
    return {
        "Type": "AWS::SQS::QueuePolicy",
        "Properties": {
            "PolicyDocument": {
                "Version": POLICY_VERSION,
                "Id": {"Fn::Join": ["", [queue_arn, DEFAULT_POLICY_SUFFIX]]},
                "Statement": [
                    {
                        "Sid": "Allow-Lambda-SendMessage",
                        "Effect": "Allow",
                        "Principal": {"AWS": "*"},
                        "Action": ["SQS:SendMessage"],
                        "Resource": queue_arn,
                        "Condition": {
                            "ArnEquals": {
                                "aws:SourceArn": {
                                    "Fn::GetAtt": [function_logical_id, "Arn"]
                                }
                            }
                        },
                    }
                ],
            },
            "Queues": [{"Ref": queue_logical_id}],
        },
    }


def compile_managed_queue(
    resources: dict[str, Any], function_name: str, queue_config: Any
) -> None:
    properties = build_queue_properties(function_name, queue_config)

    queue_logical_id = dead_letter_queue_logical_id(function_name)
    policy_logical_id = dead_letter_queue_policy_logical_id(function_name)

    resources[queue_logical_id] = {
        "Type": "AWS::SQS::Queue",
        "Properties": properties,
    }
    resources[policy_logical_id] = build_queue_policy(
        queue_logical_id, lambda_logical_id(function_name)
    )

    logger.info(
        "Compiled dead letter queue",
        extra={
            "functionName": function_name,
            "queueLogicalId": queue_logical_id,
            "queueName": properties["QueueName"],
        },
    )


def build_topic_name(function_name: str, topic_config: Any) -> str:
    if not isinstance(topic_config, str):
        raise ConfigurationError(function_name, SNS_KEY, "must be a topic name.")

    topic_name = topic_config.strip()
    if not topic_name:
        raise ConfigurationError(function_name, SNS_KEY, "topic name must be defined.")
    return topic_name


def compile_managed_topic(
    resources: dict[str, Any], function_name: str, topic_config: Any
) -> None:
    topic_name = build_topic_name(function_name, topic_config)

    topic_logical_id = dead_letter_topic_logical_id(function_name)
    resources[topic_logical_id] = {
        "Type": "AWS::SNS::Topic",
        "Properties": {"TopicName": topic_name},
    }

    logger.info(
        "Compiled dead letter topic",
        extra={
            "functionName": function_name,
            "topicLogicalId": topic_logical_id,
            "topicName": topic_name,
        },
    )
