"""
Table Store

A thin access layer over a partitioned key-value table store (DynamoDB via
boto3). Exposes insert, delete-by-composite-key, paginated fetch-all and
fetch-by-key, plus key sanitization for user-controlled partition keys.
"""

from .config import TableStoreConfig
from .exceptions import (
    MalformedFilterError,
    RetryableError,
    StoreUnavailableError,
    TableStoreError,
    ValidationError,
)
from .models import (
    PARTITION_KEY,
    ROW_KEY,
    Record,
    ResultSegment,
)
from .core import (
    DISALLOWED_KEY_CHARS,
    TableGateway,
    create_table_gateway,
    sanitize_key,
)
from .handlers import (
    RecordReadApi,
    RecordWriteApi,
)
from .store import PartitionedTableStore, create_partitioned_table_store

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "TableStoreConfig",

    # Exceptions
    "MalformedFilterError",
    "RetryableError",
    "StoreUnavailableError",
    "TableStoreError",
    "ValidationError",

    # Models
    "PARTITION_KEY",
    "ROW_KEY",
    "Record",
    "ResultSegment",

    # Core
    "DISALLOWED_KEY_CHARS",
    "TableGateway",
    "create_table_gateway",
    "sanitize_key",

    # Read/write APIs
    "RecordReadApi",
    "RecordWriteApi",

    # Facade
    "PartitionedTableStore",
    "create_partitioned_table_store",
]
