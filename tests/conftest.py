"""
Test configuration and fixtures for the table store.

Provides a moto-backed DynamoDB resource plus gateway-level doubles for
driving the segmented reader with hand-built segment chains.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add parent directory to path so we can import table_store
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from table_store import (
    PartitionedTableStore,
    Record,
    TableGateway,
    TableStoreConfig,
)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def store_config():
    """Table store configuration for mocked testing."""
    return TableStoreConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="",
        auto_create_tables=True,
        page_size=None
    )


@pytest.fixture
def paged_store_config(store_config):
    """Configuration that forces small segments so walks span several pages."""
    return store_config.model_copy(update={'page_size': 2})


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def store(store_config, mock_dynamodb_resource):
    """PartitionedTableStore over moto."""
    return PartitionedTableStore(store_config, dynamodb=mock_dynamodb_resource)


@pytest.fixture
def paged_store(paged_store_config, mock_dynamodb_resource):
    """PartitionedTableStore over moto returning at most two rows per segment."""
    return PartitionedTableStore(paged_store_config, dynamodb=mock_dynamodb_resource)


@pytest.fixture
def expense_records():
    """Five expenses in one partition plus one in another."""
    records = [
        Record(PartitionKey="checking", RowKey=f"000{i}", description=f"expense {i}", amount=10 * i + 0.5)
        for i in range(1, 6)
    ]
    records.append(Record(PartitionKey="savings", RowKey="0001", description="transfer", amount=100))
    return records


@pytest.fixture
def gateway_double():
    """Gateway double for driving the read/write APIs without a store."""
    gateway = Mock(spec=TableGateway)
    gateway.table_name = "test_expenses"
    gateway.resolve.return_value = Mock()
    gateway.query.return_value = {'Items': []}
    gateway.put_item.return_value = True
    gateway.delete_item.return_value = True
    return gateway
