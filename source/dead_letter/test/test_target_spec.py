# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from dead_letter.exceptions import ConfigurationError
from dead_letter.target_spec import (
    AlarmSettings,
    ExplicitTarget,
    ManagedQueue,
    ManagedTopic,
    NullTarget,
    ResourceReference,
    StringArn,
    parse_dead_letter,
)


def test_parse_managed_queue():
    spec = parse_dead_letter("f1", {"sqs": "my-queue"})

    assert spec == ManagedQueue("my-queue")


def test_parse_managed_topic():
    spec = parse_dead_letter("f1", {"sns": "my-topic"})

    assert spec == ManagedTopic("my-topic")


@pytest.mark.parametrize(
    "target_arn, expected",
    [
        (None, NullTarget()),
        ("arn:aws:sns:us-east-1:123456789012:t", StringArn("arn:aws:sns:us-east-1:123456789012:t")),
        ({"GetResourceArn": "DingBat"}, ResourceReference("DingBat")),
    ],
)
def test_parse_explicit_target(target_arn, expected):
    spec = parse_dead_letter("f1", {"targetArn": target_arn})

    assert spec == ExplicitTarget(expected)


def test_parse_requires_one_variant():
    with pytest.raises(ConfigurationError, match="missing one of: sqs/sns/targetArn"):
        parse_dead_letter("f1", {})


@pytest.mark.parametrize(
    "dead_letter",
    [
        {"sqs": "q", "sns": "t"},
        {"sqs": "q", "targetArn": None},
        {"sqs": "q", "sns": "t", "targetArn": "arn:aws:sns:us-east-1:123456789012:t"},
    ],
)
def test_parse_rejects_more_than_one_variant(dead_letter):
    with pytest.raises(ConfigurationError, match="only one of: sqs/sns/targetArn allowed"):
        parse_dead_letter("f1", dead_letter)


@pytest.mark.parametrize("target_arn", [42, True, ["arn"]])
def test_parse_rejects_unexpected_target_type(target_arn):
    with pytest.raises(ConfigurationError) as exc_info:
        parse_dead_letter("f1", {"targetArn": target_arn})

    assert "must be object or string" in str(exc_info.value)
    assert exc_info.value.function_name == "f1"
    assert exc_info.value.field == "targetArn"


def test_parse_rejects_reference_without_logical_id():
    with pytest.raises(ConfigurationError, match="GetResourceArn"):
        parse_dead_letter("f1", {"targetArn": {"Ref": "DingBat"}})


def test_parse_alarm_settings():
    spec = parse_dead_letter(
        "f1",
        {
            "sqs": "q",
            "alarm": {
                "enabled": True,
                "alertingTopic": "arn:aws:sns:us-east-1:123456789012:ops",
                "sqs": {"Threshold": 5},
            },
        },
    )

    assert spec.alarm == AlarmSettings(
        enabled=True,
        alerting_topics=["arn:aws:sns:us-east-1:123456789012:ops"],
        sqs_overrides={"Threshold": 5},
    )


def test_parse_enabled_alarm_requires_alerting_topic():
    with pytest.raises(ConfigurationError, match="alarm.alertingTopic"):
        parse_dead_letter("f1", {"sns": "t", "alarm": {"enabled": True}})


@pytest.mark.parametrize("enabled", ["false", "true", 1, 0])
def test_parse_alarm_rejects_non_boolean_enabled(enabled):
    with pytest.raises(ConfigurationError) as exc_info:
        parse_dead_letter(
            "f1",
            {
                "sqs": "q",
                "alarm": {
                    "enabled": enabled,
                    "alertingTopic": "arn:aws:sns:us-east-1:123456789012:ops",
                },
            },
        )

    assert exc_info.value.field == "alarm.enabled"
