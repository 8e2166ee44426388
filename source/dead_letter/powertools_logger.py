# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os

from aws_lambda_powertools import Logger


def get_logger(service: str) -> Logger:
    """Structured logger for one module, level taken from LOG_LEVEL"""
    return Logger(
        service=service,
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
