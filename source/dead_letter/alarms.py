# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
CloudWatch alarms raised when a message lands in a managed dead letter
queue or topic.
"""
from typing import Any, Optional

from dead_letter.naming import (
    dead_letter_alarm_logical_id,
    dead_letter_queue_logical_id,
    dead_letter_topic_logical_id,
)
from dead_letter.powertools_logger import get_logger
from dead_letter.target_spec import AlarmSettings, DeadLetterSpec, ManagedQueue, ManagedTopic

logger = get_logger("alarms")


def base_alarm_properties(
    physical_name: str, kind: str, metric_name: str, namespace: str
) -> dict[str, Any]:
    return {
        "AlarmName": f"[Error] {physical_name}-{kind.upper()}-DLQ",
        "AlarmDescription": (
            f"At least one message was sent to the dead-letter "
            f"{'queue' if kind == 'sqs' else 'topic'} of the function \"{physical_name}\""
        ),
        "MetricName": metric_name,
        "Namespace": namespace,
        "Statistic": "Sum",
        "Period": 60,
        "EvaluationPeriods": 1,
        "Threshold": 1,
        "ComparisonOperator": "GreaterThanOrEqualToThreshold",
        "ActionsEnabled": True,
        "TreatMissingData": "notBreaching",
    }


def sqs_alarm_template(
    function_name: str, physical_name: str, settings: AlarmSettings
) -> dict[str, Any]:
    properties = base_alarm_properties(
        physical_name, "sqs", "NumberOfMessagesSent", "AWS/SQS"
    )
    properties["Dimensions"] = [
        {
            "Name": "QueueName",
            "Value": {
                "Fn::GetAtt": [dead_letter_queue_logical_id(function_name), "QueueName"]
            },
        }
    ]
    properties["AlarmActions"] = list(settings.alerting_topics)
    properties.update(settings.sqs_overrides)
    return {"Type": "AWS::CloudWatch::Alarm", "Properties": properties}


def sns_alarm_template(
    function_name: str, physical_name: str, settings: AlarmSettings
) -> dict[str, Any]:
    properties = base_alarm_properties(
        physical_name, "sns", "NumberOfMessagesPublished", "AWS/SNS"
    )
    properties["Dimensions"] = [
        {
            "Name": "TopicName",
            "Value": {
                "Fn::GetAtt": [dead_letter_topic_logical_id(function_name), "TopicName"]
            },
        }
    ]
    properties["AlarmActions"] = list(settings.alerting_topics)
    properties.update(settings.sns_overrides)
    return {"Type": "AWS::CloudWatch::Alarm", "Properties": properties}


def compile_dead_letter_alarm(
    resources: dict[str, Any],
    function_name: str,
    physical_name: str,
    spec: DeadLetterSpec,
) -> Optional[str]:
    """
    Add the alarm for a managed queue or topic when `alarm.enabled` is set.
    Returns the alarm logical id, or None when nothing was added.
    """
    settings = spec.alarm
    if settings is None or not settings.enabled:
        return None

    if isinstance(spec, ManagedQueue):
        template = sqs_alarm_template(function_name, physical_name, settings)
        logical_id = dead_letter_alarm_logical_id(function_name, is_queue=True)
    elif isinstance(spec, ManagedTopic):
        template = sns_alarm_template(function_name, physical_name, settings)
        logical_id = dead_letter_alarm_logical_id(function_name, is_queue=False)
    else:
        logger.warning(
            "Alarms are only compiled for managed dead letter queues and topics",
            extra={"functionName": function_name},
        )
        return None

    resources[logical_id] = template
    return logical_id
