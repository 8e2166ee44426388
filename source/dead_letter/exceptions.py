# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class DeadLetterError(Exception):
    pass


class ConfigurationError(DeadLetterError):
    """The declared deadLetter settings of a function are invalid."""

    def __init__(self, function_name: str, field: str, message: str):
        self.function_name = function_name
        self.field = field
        super().__init__(
            f"Function property {function_name}.deadLetter{'.' + field if field else ''}: {message}"
        )


class UnsupportedResourceError(DeadLetterError):
    """A referenced stack resource is neither an SQS queue nor an SNS topic."""

    def __init__(self, function_name: str, logical_id: str, resource_type: str):
        self.function_name = function_name
        self.logical_id = logical_id
        self.resource_type = resource_type
        super().__init__(
            f"Function {function_name}: resource '{logical_id}' has unsupported type "
            f"'{resource_type}'. The dead letter target must be a queue or topic."
        )
