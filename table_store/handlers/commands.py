"""
Record Write API

Single-record insert and delete-by-composite-key for one partitioned table.

Insert is a conditional PutItem: it only succeeds when no row with the same
PartitionKey/RowKey exists. A conflict is an expected outcome and comes back
as ``False``.

Delete is two sequential operations, not an atomic primitive:
1. Look up the unique row by PartitionKey AND RowKey
2. Delete that row, conditioned on it still being stored

If another caller removes the row between the two steps the conditional
delete fails; that is logged and reported as ``False``.
"""

import logging
from typing import Any, Mapping, Optional, Union

from ..config import TableStoreConfig
from ..core import TableGateway, contains_disallowed_chars, create_table_gateway
from ..models import Record
from ..utils import has_empty_key, row_absent_condition, row_present_condition
from .queries import RecordReadApi

logger = logging.getLogger(__name__)


class RecordWriteApi:
    """
    Write-only API for one partitioned table.

    Data-presence outcomes (conflict, already absent) are boolean results;
    only store failures raise.
    """

    def __init__(
        self,
        config: TableStoreConfig,
        table_name: str,
        gateway: Optional[TableGateway] = None,
        reader: Optional[RecordReadApi] = None
    ):
        """Initialize write API.

        Args:
            config: Table store configuration
            table_name: Logical table name
            gateway: Pre-built gateway (defaults to one created from config)
            reader: Read API used for the delete lookup (shares the gateway by default)
        """
        self.config = config
        self.gateway = gateway or create_table_gateway(config, table_name)
        self.reader = reader or RecordReadApi(config, table_name, gateway=self.gateway)

    def insert(self, record: Union[Record, Mapping[str, Any]]) -> bool:
        """
        Insert a record unless one with the same composite key exists.

        DynamoDB Operation: PutItem with attribute_not_exists(PartitionKey)

        Args:
            record: Record, or a mapping carrying PartitionKey and RowKey

        Returns:
            True if the store accepted the record, False otherwise
            (including a PartitionKey/RowKey conflict and an empty key)

        Raises:
            ValidationError: Record lacks string PartitionKey/RowKey, or holds
                a number the store cannot represent (NaN, infinity, out of range)
            StoreUnavailableError: Store unreachable
        """
        record = Record.from_mapping(record)

        if contains_disallowed_chars(record.PartitionKey) or contains_disallowed_chars(record.RowKey):
            logger.warning(
                f"Inserting unsanitized key {record.PartitionKey!r}/{record.RowKey!r} "
                f"into {self.gateway.table_name}"
            )

        item = record.to_item()
        self.gateway.resolve()

        if has_empty_key(record.PartitionKey, record.RowKey):
            logger.warning(
                f"Insert of {record.PartitionKey!r}/{record.RowKey!r} into {self.gateway.table_name} "
                f"not applied: empty key"
            )
            return False

        inserted = self.gateway.put_item(item, condition_expression=row_absent_condition())
        if not inserted:
            logger.warning(f"Insert of {record.PartitionKey}/{record.RowKey} into {self.gateway.table_name} not applied")
        return inserted

    def delete(self, partition_key: str, row_key: str) -> bool:
        """
        Delete the record with the given composite key.

        Not atomic: the lookup and the delete are separate round trips.

        Returns:
            True if this call removed the record, False if it was absent
        """
        record = self.reader.query_one(partition_key, row_key)

        if record is None:
            logger.warning(f"Record {partition_key}/{row_key} already absent from {self.gateway.table_name}")
            return False

        deleted = self.gateway.delete_item(record.key, condition_expression=row_present_condition())
        if not deleted:
            logger.warning(
                f"Record {partition_key}/{row_key} was removed from {self.gateway.table_name} "
                f"between lookup and delete"
            )
        return deleted
