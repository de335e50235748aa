"""
Test configuration and fixtures for the DynamoDB document client.

Unit tests drive a DocumentClient over a Mock low-level client; integration
tests run against moto's in-process DynamoDB.
"""

from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from dynamodb_document_client import DocumentClient, DynamoDBConfig, TableGateway
from dynamodb_document_client import client as client_module


@pytest.fixture(autouse=True)
def reset_shared_client(monkeypatch):
    """Start every test without a process-wide client."""
    monkeypatch.setattr(client_module, "_shared_client", None)


@pytest.fixture
def aws_env(monkeypatch):
    """Fake credentials and region so no real AWS account is touched."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("DYNAMODB_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("DYNAMODB_DEBUG_LOGGING", raising=False)


@pytest.fixture
def dynamodb_config():
    """DynamoDB configuration for testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None
    )


@pytest.fixture
def mock_dynamodb_client():
    """Mock low-level DynamoDB client with empty responses."""
    client = Mock()
    client.get_item.return_value = {}
    client.put_item.return_value = {}
    client.delete_item.return_value = {}
    client.query.return_value = {'Items': []}
    client.scan.return_value = {'Items': []}
    return client


@pytest.fixture
def gateway(mock_dynamodb_client):
    """TableGateway bound to the Widgets table over the mock client."""
    return TableGateway("Widgets", mock_dynamodb_client)


@pytest.fixture
def document_client(gateway):
    """DocumentClient over the mock gateway."""
    return DocumentClient(gateway)


# ===== moto fixtures =====

@pytest.fixture
def mock_dynamodb(aws_env):
    """moto-backed DynamoDB low-level client."""
    with mock_aws():
        yield boto3.client('dynamodb', region_name='us-east-1')


@pytest.fixture
def widgets_table(mock_dynamodb):
    """Create the Widgets table (partition key only)."""
    mock_dynamodb.create_table(
        TableName='Widgets',
        KeySchema=[
            {'AttributeName': 'id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return 'Widgets'


@pytest.fixture
def orders_table(mock_dynamodb):
    """Create the Orders table (partition and sort key)."""
    mock_dynamodb.create_table(
        TableName='Orders',
        KeySchema=[
            {'AttributeName': 'customer_id', 'KeyType': 'HASH'},
            {'AttributeName': 'order_id', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'customer_id', 'AttributeType': 'S'},
            {'AttributeName': 'order_id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return 'Orders'


# ===== Sample data =====

@pytest.fixture
def sample_widget():
    """Sample widget item."""
    return {
        "id": "w1",
        "name": "Sprocket",
        "qty": 5,
        "price": 2.5,
        "tags": ["metal", "small"],
        "in_stock": True
    }
