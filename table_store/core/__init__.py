"""
Core infrastructure components for table store operations.

- key_sanitizer: strips characters the store rejects in key fields
- TableGateway: thin wrapper over boto3 for one partitioned table
- Factory functions for creating gateways
"""

from .key_sanitizer import DISALLOWED_KEY_CHARS, contains_disallowed_chars, sanitize_key
from .table_gateway import (
    TableGateway,
    create_dynamodb_resource,
    create_table_gateway,
    map_store_error,
)

__all__ = [
    "DISALLOWED_KEY_CHARS",
    "TableGateway",
    "contains_disallowed_chars",
    "create_dynamodb_resource",
    "create_table_gateway",
    "map_store_error",
    "sanitize_key",
]
