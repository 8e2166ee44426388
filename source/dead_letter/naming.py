# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Logical id naming for the resources written into the compiled template.

Function names are normalized the same way the serverless framework does it
so the ids line up with the `<Name>LambdaFunction` resources it generates.
"""
from typing import Optional

DEAD_LETTER_QUEUE_SUFFIX = "DeadLetterQueue"
DEAD_LETTER_QUEUE_POLICY_SUFFIX = "DeadLetterQueuePolicy"
DEAD_LETTER_TOPIC_SUFFIX = "DeadLetterTopic"
DEAD_LETTER_QUEUE_ALARM_SUFFIX = "DeadLetterQueueAlarm"
DEAD_LETTER_TOPIC_ALARM_SUFFIX = "DeadLetterTopicAlarm"
LAMBDA_FUNCTION_SUFFIX = "LambdaFunction"


def normalize_name(name: Optional[str]) -> str:
    if not name:
        return ""
    return name[0].upper() + name[1:]


def normalize_function_name(function_name: str) -> str:
    return normalize_name(
        function_name.replace("-", "Dash").replace("_", "Underscore")
    )


def lambda_logical_id(function_name: str) -> str:
    return normalize_function_name(function_name) + LAMBDA_FUNCTION_SUFFIX


def dead_letter_queue_logical_id(function_name: str) -> str:
    return normalize_function_name(function_name) + DEAD_LETTER_QUEUE_SUFFIX


def dead_letter_queue_policy_logical_id(function_name: str) -> str:
    return normalize_function_name(function_name) + DEAD_LETTER_QUEUE_POLICY_SUFFIX


def dead_letter_topic_logical_id(function_name: str) -> str:
    return normalize_function_name(function_name) + DEAD_LETTER_TOPIC_SUFFIX


def dead_letter_alarm_logical_id(function_name: str, is_queue: bool) -> str:
    suffix = (
        DEAD_LETTER_QUEUE_ALARM_SUFFIX if is_queue else DEAD_LETTER_TOPIC_ALARM_SUFFIX
    )
    return normalize_function_name(function_name) + suffix
