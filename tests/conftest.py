"""
Pytest configuration and shared fixtures for the item gateway.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests.
"""

import os

# Powertools reads these when the shared Tracer/Metrics instances are created,
# and the env modeler must re-parse on every call so tests can patch os.environ;
# all of them must be set before any item_gateway module is imported
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "TABLE_NAME": "test-items-table",
    "POWERTOOLS_SERVICE_NAME": "test-item-gateway",
    "POWERTOOLS_METRICS_NAMESPACE": "TestItemGateway",
    "POWERTOOLS_TRACE_DISABLED": "true",
    "LOG_LEVEL": "DEBUG",
    "LAMBDA_ENV_MODELER_DISABLE_CACHE": "true",
})

import json
from typing import Any, Dict, Optional
from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from item_gateway.dal.dynamodb_handler import DynamoDbItemStore
from item_gateway.handlers.items_handler import get_gateway_config
from item_gateway.handlers.models.gateway_config import GatewayConfig

TABLE_NAME = "test-items-table"


# DynamoDB fixtures
@pytest.fixture
def dynamodb_table():
    """Create a mock DynamoDB table keyed by "id"."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


@pytest.fixture
def item_store(dynamodb_table) -> DynamoDbItemStore:
    """DynamoDB item store backed by the mock table."""
    return DynamoDbItemStore(TABLE_NAME)


@pytest.fixture
def gateway_config(item_store) -> GatewayConfig:
    """Gateway configuration wired to the mock table."""
    return GatewayConfig(store=item_store)


@pytest.fixture
def mock_store() -> Mock:
    """Store double for tests that must observe or fail store calls."""
    store = Mock()
    # Assigned explicitly so the runtime ItemStore protocol check can see them
    store.table_name = TABLE_NAME
    store.scan_items = Mock(return_value=[])
    store.put_item = Mock(return_value=None)
    store.delete_item = Mock(return_value=None)
    return store


@pytest.fixture
def mock_gateway_config(mock_store) -> GatewayConfig:
    return GatewayConfig(store=mock_store)


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-item-gateway"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-item-gateway"
    context.memory_limit_in_mb = 128
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-item-gateway"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def api_gateway_event():
    """Factory for API Gateway REST proxy events."""

    def build(method: str, body: Optional[Any] = None, path: str = "/items") -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return {
            "httpMethod": method,
            "path": path,
            "resource": path,
            "headers": {
                "Content-Type": "application/json",
                "User-Agent": "test-agent/1.0",
            },
            "body": body,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
            },
            "pathParameters": None,
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "stageVariables": None,
            "isBase64Encoded": False,
        }

    return build


# Error simulation fixtures
@pytest.fixture
def mock_dynamodb_error():
    """Build botocore ClientErrors for testing error handling."""

    def create_error(error_code: str, message: str = "Test error", operation_name: str = "TestOperation"):
        return ClientError(
            error_response={
                "Error": {
                    "Code": error_code,
                    "Message": message,
                }
            },
            operation_name=operation_name,
        )

    return create_error


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached configuration so each test sees its own environment."""
    get_gateway_config.cache_clear()
    yield
    get_gateway_config.cache_clear()
