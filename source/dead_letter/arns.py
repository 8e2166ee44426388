# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import re

DEAD_LETTER_ARN_PATTERN = re.compile(
    r"^(arn:aws:sqs:[a-z]{2,}-[a-z]{2,}-[0-9]{1}:[0-9]{12}:[a-zA-Z0-9\-_.]{1,80}"
    r"|arn:aws:sns:[a-z]{2,}-[a-z]{2,}-[0-9]{1}:[0-9]{12}:[a-zA-Z0-9\-_]{1,256})$"
)


def is_dead_letter_arn(value: str) -> bool:
    return DEAD_LETTER_ARN_PATTERN.fullmatch(value) is not None


def queue_url_to_arn(queue_url: str) -> str:
    """
    Convert an SQS queue url into the queue ARN.

    https://sqs.us-west-2.amazonaws.com/123456789012/my-queue
      -> arn:aws:sqs:us-west-2:123456789012:my-queue
    """
    parts = queue_url.replace("https://", "", 1).split("/")
    assert len(parts) >= 3, f"Unexpected queue url: {queue_url}"

    host_parts = parts[0].split(".")
    assert len(host_parts) >= 2, f"Unexpected queue url host: {queue_url}"

    region = host_parts[1]
    account_id = parts[1]
    queue_name = parts[2]
    return f"arn:aws:sqs:{region}:{account_id}:{queue_name}"
