"""
Record Read API

Segmented reads over one partitioned table. The store answers a Query with
at most one segment of rows plus a continuation token (``LastEvaluatedKey``)
when more rows remain. ``query_all`` and ``query_one`` walk those segments
with an explicit loop:

1. Build an equality key condition
2. Fetch the first segment
3. Append its records in store order
4. While a continuation token came back, fetch again with that token
5. Stop at the first segment without a token

Each call performs its own walk from the start; no cursor is kept between
calls. An empty key (what ``sanitize_key`` returns for an all-forbidden
identifier) cannot be stored, so filters on one match nothing and skip the
round trip.

Segment N+1 needs the token from segment N, so fetches are strictly
sequential. A store that never stops returning tokens is walked forever;
callers needing bounded latency impose their own deadline.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import TableStoreConfig
from ..core import TableGateway, create_table_gateway
from ..exceptions import MalformedFilterError, ValidationError
from ..models import Record, ResultSegment
from ..utils import build_key_condition, has_empty_key

logger = logging.getLogger(__name__)


class RecordReadApi:
    """
    Read-only API for one partitioned table.

    Keys are used exactly as given. Callers passing user-controlled
    identifiers sanitize them first with ``sanitize_key``.
    """

    def __init__(self, config: TableStoreConfig, table_name: str, gateway: Optional[TableGateway] = None):
        """Initialize read API.

        Args:
            config: Table store configuration
            table_name: Logical table name
            gateway: Pre-built gateway (defaults to one created from config)
        """
        self.config = config
        self.gateway = gateway or create_table_gateway(config, table_name)

    def query_segment(
        self,
        partition_key: str,
        row_key: Optional[str] = None,
        continuation_token: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> ResultSegment:
        """
        Fetch a single segment (one round trip after table resolution).

        Args:
            partition_key: PartitionKey to match
            row_key: RowKey to match as well (optional)
            continuation_token: Token from the previous segment, None for the first
            limit: Maximum records in the segment (config.page_size if None)

        Returns:
            ResultSegment; its continuation_token is None on the last segment
        """
        self.gateway.resolve()
        if has_empty_key(partition_key, row_key):
            return ResultSegment()
        return self._fetch_segment(partition_key, row_key, continuation_token, limit)

    def query_all(self, partition_key: str) -> List[Record]:
        """
        Return every record in a partition, flattened across segments.

        Args:
            partition_key: PartitionKey to match

        Returns:
            Records in store order; empty list for an empty partition

        Raises:
            StoreUnavailableError: Store unreachable
            MalformedFilterError: Store rejected the key condition
        """
        self.gateway.resolve()
        records = self._collect(partition_key)
        logger.info(f"Query returned {len(records)} records from {self.gateway.table_name} (partition: {partition_key})")
        return records

    def query_one(self, partition_key: str, row_key: str) -> Optional[Record]:
        """
        Return the record matching both PartitionKey and RowKey.

        Precondition: (PartitionKey, RowKey) is unique within the table. More
        than one match means the stored data is corrupt, and this fails fast.

        Returns:
            Record if found, None otherwise

        Raises:
            ValidationError: More than one record matched the composite key
        """
        self.gateway.resolve()
        records = self._collect(partition_key, row_key)

        if not records:
            return None
        if len(records) > 1:
            raise ValidationError(
                f"Composite key {partition_key}/{row_key} matched {len(records)} records in {self.gateway.table_name}",
                errors={'partition_key': partition_key, 'row_key': row_key, 'matches': len(records)}
            )
        return records[0]

    def _collect(self, partition_key: str, row_key: Optional[str] = None) -> List[Record]:
        if has_empty_key(partition_key, row_key):
            logger.debug(f"Empty key filter on {self.gateway.table_name} matches no stored records")
            return []

        segment = self._fetch_segment(partition_key, row_key)
        records = list(segment.records)
        segment_count = 1

        while segment.continuation_token is not None:
            segment = self._fetch_segment(partition_key, row_key, segment.continuation_token)
            records.extend(segment.records)
            segment_count += 1

        logger.debug(f"Walked {segment_count} segment(s) in {self.gateway.table_name}")
        return records

    def _fetch_segment(
        self,
        partition_key: str,
        row_key: Optional[str] = None,
        continuation_token: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> ResultSegment:
        query_kwargs = {
            'KeyConditionExpression': build_key_condition(partition_key, row_key)
        }
        limit = limit or self.config.page_size
        if limit:
            query_kwargs['Limit'] = limit
        if continuation_token is not None:
            query_kwargs['ExclusiveStartKey'] = continuation_token

        try:
            response = self.gateway.query(**query_kwargs)
        except MalformedFilterError as e:
            raise MalformedFilterError(
                e.message,
                partition_key=partition_key,
                row_key=row_key,
                original_error=e.original_error
            ) from e

        segment = ResultSegment(
            records=[Record.from_item(item) for item in response.get('Items', [])],
            continuation_token=response.get('LastEvaluatedKey')
        )
        logger.debug(
            f"Fetched segment of {len(segment)} record(s) from {self.gateway.table_name} "
            f"(more: {segment.has_more})"
        )
        return segment
