"""
End-to-end tests for PartitionedTableStore against moto's DynamoDB.
"""

import logging
from unittest.mock import Mock

import pytest

from table_store import (
    PartitionedTableStore,
    Record,
    StoreUnavailableError,
    TableStoreConfig,
    ValidationError,
    create_partitioned_table_store,
)


class TestTableResolution:

    def test_table_created_on_first_access(self, store, mock_dynamodb_resource):
        client = mock_dynamodb_resource.meta.client
        assert "test_expenses" not in client.list_tables()['TableNames']

        store.get_all("expenses", "checking")

        assert "test_expenses" in client.list_tables()['TableNames']
        key_schema = client.describe_table(TableName="test_expenses")['Table']['KeySchema']
        assert {'AttributeName': 'PartitionKey', 'KeyType': 'HASH'} in key_schema
        assert {'AttributeName': 'RowKey', 'KeyType': 'RANGE'} in key_schema

    def test_resolve_is_idempotent(self, store):
        first = store.resolve("expenses")
        second = store.resolve("expenses")

        assert first.name == second.name == "test_expenses"

    def test_auto_create_disabled(self, store_config, mock_dynamodb_resource):
        config = store_config.model_copy(update={'auto_create_tables': False})
        strict_store = PartitionedTableStore(config, dynamodb=mock_dynamodb_resource)

        with pytest.raises(StoreUnavailableError):
            strict_store.get_all("expenses", "checking")


class TestReadWrite:

    def test_insert_then_get_one(self, store):
        record = Record(PartitionKey="P", RowKey="R", description="groceries", amount=42.1, quantity=3)

        assert store.insert("expenses", record) is True

        fetched = store.get_one("expenses", "P", "R")
        assert fetched is not None
        assert fetched.description == "groceries"
        assert fetched.amount == 42.1
        assert fetched.quantity == 3

    def test_duplicate_insert_conflicts(self, store):
        record = {'PartitionKey': 'P', 'RowKey': 'R', 'amount': 1}

        assert store.insert("expenses", record) is True
        assert store.insert("expenses", dict(record, amount=2)) is False
        assert store.get_one("expenses", "P", "R").amount == 1

    def test_non_finite_amount_raises_validation_error(self, store):
        record = Record(PartitionKey="P", RowKey="R", amount=float('nan'))

        with pytest.raises(ValidationError):
            store.insert("expenses", record)

        assert store.get_one("expenses", "P", "R") is None

    def test_get_all_returns_only_partition(self, store, expense_records):
        for record in expense_records:
            assert store.insert("expenses", record) is True

        checking = store.get_all("expenses", "checking")

        assert [r.RowKey for r in checking] == ["0001", "0002", "0003", "0004", "0005"]
        assert all(r.PartitionKey == "checking" for r in checking)

    def test_get_all_empty_partition(self, store):
        assert store.get_all("expenses", "nothing-here") == []

    def test_get_all_across_segments(self, paged_store, expense_records):
        for record in expense_records:
            paged_store.insert("expenses", record)

        checking = paged_store.get_all("expenses", "checking")

        assert len(checking) == 5
        assert [r.RowKey for r in checking] == sorted(r.RowKey for r in checking)

    def test_composite_filter_requires_both_keys(self, store):
        store.insert("expenses", {'PartitionKey': 'P', 'RowKey': 'R1'})
        store.insert("expenses", {'PartitionKey': 'Q', 'RowKey': 'R2'})

        assert store.get_one("expenses", "P", "R2") is None
        assert store.get_one("expenses", "Q", "R1") is None
        assert store.get_one("expenses", "P", "R1").RowKey == "R1"

    def test_tables_are_isolated(self, store):
        store.insert("expenses", {'PartitionKey': 'P', 'RowKey': 'R'})

        assert store.get_all("budgets", "P") == []


class TestDelete:

    def test_delete_absent_key(self, store):
        assert store.delete("T", "P", "R") is False

    def test_delete_existing_key(self, store):
        store.insert("T", {'PartitionKey': 'P', 'RowKey': 'R'})

        assert store.delete("T", "P", "R") is True
        assert store.get_one("T", "P", "R") is None
        assert store.delete("T", "P", "R") is False

    def test_delete_leaves_neighbours(self, store):
        store.insert("T", {'PartitionKey': 'P', 'RowKey': 'R1'})
        store.insert("T", {'PartitionKey': 'P', 'RowKey': 'R2'})

        store.delete("T", "P", "R1")

        assert [r.RowKey for r in store.get_all("T", "P")] == ["R2"]


class TestSanitizedKeys:

    def test_sanitized_partition_key_round_trip(self, store):
        account = store.sanitize_key("joint/acct#1?")
        store.insert("expenses", {'PartitionKey': account, 'RowKey': '0001'})

        assert account == "jointacct1"
        assert len(store.get_all("expenses", account)) == 1

    def test_all_forbidden_key_sanitizes_to_empty(self, store):
        account = store.sanitize_key("///")

        assert account == ""
        assert store.get_all("expenses", account) == []
        assert store.get_one("expenses", account, "0001") is None
        assert store.get_one("expenses", "P", account) is None
        assert store.delete("expenses", account, "0001") is False

    def test_insert_with_empty_key_not_applied(self, store):
        assert store.insert("expenses", {'PartitionKey': '', 'RowKey': '0001'}) is False
        assert store.insert("expenses", {'PartitionKey': 'P', 'RowKey': store.sanitize_key("#?")}) is False
        assert store.get_all("expenses", "P") == []


class TestFactory:

    def test_factory_uses_given_config(self, store_config):
        store = create_partitioned_table_store(store_config)

        assert store.config is store_config

    def test_factory_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")

        store = create_partitioned_table_store()

        assert isinstance(store.config, TableStoreConfig)
        assert store.config.environment == "staging"

    def test_debug_logging_flag(self, store_config):
        config = store_config.model_copy(update={'enable_debug_logging': True})
        logger = logging.getLogger('table_store')
        previous = logger.level
        try:
            PartitionedTableStore(config, dynamodb=Mock())
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)
