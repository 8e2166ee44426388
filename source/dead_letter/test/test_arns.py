# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from dead_letter.arns import is_dead_letter_arn, queue_url_to_arn


@pytest.mark.parametrize(
    "arn",
    [
        "arn:aws:sqs:us-west-2:123456789012:my-queue",
        "arn:aws:sqs:eu-central-1:123456789012:my_queue.fifo",
        "arn:aws:sns:us-east-1:123456789012:my-topic",
        "arn:aws:sns:ap-southeast-2:123456789012:Topic_1",
    ],
)
def test_valid_dead_letter_arns(arn):
    assert is_dead_letter_arn(arn) is True


@pytest.mark.parametrize(
    "arn",
    [
        "arn:aws:sqs:us-west-2:12345678901:my-queue",
        "arn:aws:sqs:us-west:123456789012:my-queue",
        "arn:aws:sns:us-east-1:123456789012:my.topic",
        "arn:aws:lambda:us-east-1:123456789012:function:f1",
        "arn:aws:sqs:us-west-2:123456789012:" + "q" * 81,
        "arn:aws:sns:us-east-1:123456789012:",
        "prefix arn:aws:sns:us-east-1:123456789012:my-topic",
        "my-queue",
    ],
)
def test_invalid_dead_letter_arns(arn):
    assert is_dead_letter_arn(arn) is False


def test_topic_name_may_be_256_characters():
    assert is_dead_letter_arn("arn:aws:sns:us-east-1:123456789012:" + "t" * 256)
    assert not is_dead_letter_arn("arn:aws:sns:us-east-1:123456789012:" + "t" * 257)


def test_queue_url_to_arn():
    # ACT
    arn = queue_url_to_arn("https://sqs.us-west-2.amazonaws.com/123456789012/my-queue")

    # ASSERT
    assert arn == "arn:aws:sqs:us-west-2:123456789012:my-queue"


def test_queue_url_to_arn_rejects_malformed_url():
    with pytest.raises(AssertionError):
        queue_url_to_arn("https://sqs.us-west-2.amazonaws.com/my-queue")

    with pytest.raises(AssertionError):
        queue_url_to_arn("https://localhost/123456789012/my-queue")


def test_trailing_newline_is_not_a_valid_arn():
    assert is_dead_letter_arn("arn:aws:sns:us-east-1:123456789012:t\n") is False
    assert is_dead_letter_arn("arn:aws:sqs:us-west-2:123456789012:q\n") is False
