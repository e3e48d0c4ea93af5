"""
Table Store Utilities

Condition builders shared by the read and write APIs. Only equality on the
two key fields is supported; there is no general query language.
"""

from typing import Optional

from boto3.dynamodb.conditions import Attr, Key

from .models import PARTITION_KEY, ROW_KEY


def build_key_condition(partition_key: str, row_key: Optional[str] = None):
    """Build an equality KeyConditionExpression on the composite key.

    Args:
        partition_key: PartitionKey value to match
        row_key: RowKey value to match as well (combined with AND)

    Returns:
        KeyConditionExpression for boto3

    Examples:
        All rows in a partition:
        >>> build_key_condition('checking')

        A single row:
        >>> build_key_condition('checking', '0001')
    """
    condition = Key(PARTITION_KEY).eq(partition_key)
    if row_key is not None:
        condition = condition & Key(ROW_KEY).eq(row_key)
    return condition


def has_empty_key(partition_key: str, row_key: Optional[str] = None) -> bool:
    """True when a key value is the empty string, which no stored row can hold."""
    return partition_key == "" or row_key == ""


def row_absent_condition():
    """Condition that holds only when no row with the item's key exists."""
    return Attr(PARTITION_KEY).not_exists()


def row_present_condition():
    """Condition that holds only while the row is still stored."""
    return Attr(PARTITION_KEY).exists()


__all__ = [
    "build_key_condition",
    "has_empty_key",
    "row_absent_condition",
    "row_present_condition",
]
