# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from datetime import datetime
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.stub import Stubber
from dead_letter.awsapi_cached_client import AWSCachedClient
from dead_letter.service import DeployOptions, Service

STACK_NAME = "my-service-dev"
ACCOUNT_ID = "123456789012"
REGION = "us-west-2"


@pytest.fixture(scope="module", autouse=True)
def aws_credentials():
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(autouse=True)
def clear_cached_clients():
    AWSCachedClient.clear()
    yield
    AWSCachedClient.clear()


@pytest.fixture
def cloudformation():
    client = boto3.client("cloudformation", region_name=REGION)
    stubber = Stubber(client)
    stubber.activate()
    yield client, stubber
    stubber.deactivate()


def add_stack_resource_response(
    stubber, logical_id, resource_type, physical_id, stack_name=STACK_NAME
):
    stubber.add_response(
        "describe_stack_resource",
        {
            "StackResourceDetail": {
                "StackName": stack_name,
                "LogicalResourceId": logical_id,
                "PhysicalResourceId": physical_id,
                "ResourceType": resource_type,
                "LastUpdatedTimestamp": datetime(2024, 1, 1),
                "ResourceStatus": "CREATE_COMPLETE",
            }
        },
        {"StackName": stack_name, "LogicalResourceId": logical_id},
    )


def make_service(functions, no_deploy=False):
    return Service(
        name="my-service",
        provider={"name": "aws", "stage": "dev", "region": REGION},
        functions=functions,
        options=DeployOptions(no_deploy=no_deploy),
    )


def make_aws_client():
    lambda_client = MagicMock()
    aws_client = MagicMock()
    aws_client.get_connection.return_value = lambda_client
    return aws_client, lambda_client
