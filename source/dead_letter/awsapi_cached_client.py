# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from typing import Any, Optional

import boto3
from botocore.config import Config

USER_AGENT_EXTRA = "sls-dead-letter"


def build_boto_config() -> Config:
    return Config(
        retries={
            "mode": "standard",
            "max_attempts": int(os.getenv("DEAD_LETTER_MAX_ATTEMPTS", "10")),
        },
        user_agent_extra=USER_AGENT_EXTRA,
    )


class AWSCachedClient:
    """
    Maintains a hash of AWS API clients keyed by service and region.
    A client is created on first use and reused for every later request
    for the same service and region.
    """

    client: dict[str, dict[str, Any]] = {}

    def __init__(self, region: str):
        self.region = region
        self.boto_config = build_boto_config()

    def get_connection(self, service: str, region: Optional[str] = None) -> Any:
        """Connect to AWS api"""
        if not region:
            region = self.region

        if service not in self.client:
            self.client[service] = {}

        if region not in self.client[service]:
            self.client[service][region] = boto3.client(
                service, region_name=region, config=self.boto_config
            )

        return self.client[service][region]

    @classmethod
    def clear(cls) -> None:
        cls.client.clear()
