"""
PartitionedTableStore facade.

The surface the calling API layer uses: every operation takes a table name,
resolves (and if needed creates) that table, and runs one read or write
against it. Nothing is cached between calls except the boto3 resource used
for connection pooling.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from .config import TableStoreConfig
from .core import create_dynamodb_resource, create_table_gateway, sanitize_key
from .handlers import RecordReadApi, RecordWriteApi
from .models import Record

logger = logging.getLogger(__name__)


class PartitionedTableStore:
    """
    Access layer over a partitioned key-value table store.

    Example:
        store = PartitionedTableStore(TableStoreConfig.from_env())
        account = store.sanitize_key(raw_account)
        store.insert("expenses", {"PartitionKey": account, "RowKey": "0001", "amount": 12.5})
        store.get_all("expenses", account)
    """

    def __init__(self, config: TableStoreConfig, dynamodb=None):
        """Initialize the store.

        Args:
            config: Table store configuration
            dynamodb: Existing boto3 DynamoDB resource to share (optional)
        """
        self.config = config
        self._dynamodb = dynamodb

        if config.enable_debug_logging:
            logging.getLogger('table_store').setLevel(logging.DEBUG)

    @property
    def dynamodb(self):
        """Lazy initialization of the shared DynamoDB resource."""
        if self._dynamodb is None:
            self._dynamodb = create_dynamodb_resource(self.config)
        return self._dynamodb

    @staticmethod
    def sanitize_key(raw: str) -> str:
        """Strip characters the store rejects in key fields."""
        return sanitize_key(raw)

    def resolve(self, table_name: str):
        """Return a handle to the named table, creating it if absent."""
        return create_table_gateway(self.config, table_name, dynamodb=self.dynamodb).resolve()

    def get_all(self, table_name: str, partition_key: str) -> List[Record]:
        """All records in a partition, in store order."""
        return self._reader(table_name).query_all(partition_key)

    def get_one(self, table_name: str, partition_key: str, row_key: str) -> Optional[Record]:
        """The record with the given composite key, or None."""
        return self._reader(table_name).query_one(partition_key, row_key)

    def insert(self, table_name: str, record: Union[Record, Mapping[str, Any]]) -> bool:
        """Insert a record; False on composite-key conflict."""
        return self._writer(table_name).insert(record)

    def delete(self, table_name: str, partition_key: str, row_key: str) -> bool:
        """Delete a record by composite key; False if it was absent."""
        return self._writer(table_name).delete(partition_key, row_key)

    def _reader(self, table_name: str) -> RecordReadApi:
        gateway = create_table_gateway(self.config, table_name, dynamodb=self.dynamodb)
        return RecordReadApi(self.config, table_name, gateway=gateway)

    def _writer(self, table_name: str) -> RecordWriteApi:
        gateway = create_table_gateway(self.config, table_name, dynamodb=self.dynamodb)
        return RecordWriteApi(self.config, table_name, gateway=gateway)


def create_partitioned_table_store(config: Optional[TableStoreConfig] = None) -> PartitionedTableStore:
    """
    Factory function to create a PartitionedTableStore.

    Args:
        config: Table store configuration (read from the environment if None)
    """
    return PartitionedTableStore(config or TableStoreConfig.from_env())
