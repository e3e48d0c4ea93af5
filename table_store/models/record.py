"""
Record and ResultSegment models.

A Record is an open mapping of field name to scalar value with two
distinguished string fields, ``PartitionKey`` and ``RowKey``. Any other
field is carried through as an extra attribute, so callers can store
arbitrary entity shapes without declaring a model per table.

## Storage conversion

DynamoDB has no float type and no datetime type, so ``to_item`` rewrites:

- float -> Decimal (via ``str`` to avoid binary noise)
- datetime -> ISO-8601 string
- None -> dropped

``from_item`` reverses the number conversion: integral Decimals become int,
the rest float. The store keeps no int/float distinction, so a float with an
integral value (``12.0``) is read back as ``12``; the values compare equal.
NaN, infinities and numbers outside DynamoDB's range are rejected by
``to_item``. Strings are never reinterpreted, so an ISO timestamp that
went in as a datetime comes back as a string.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from boto3.dynamodb.types import DYNAMODB_CONTEXT
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

PARTITION_KEY = "PartitionKey"
ROW_KEY = "RowKey"


def _to_store_number(obj: Any) -> Any:
    number = Decimal(str(obj)) if isinstance(obj, float) else obj
    if isinstance(number, Decimal) and not number.is_finite():
        raise ValueError(f"{obj!r} is not a finite number")
    # Same context boto3 serializes with; out-of-range values trap here
    converted = DYNAMODB_CONTEXT.create_decimal(number)
    return obj if isinstance(obj, int) else converted


def _to_store_value(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _to_store_value(v) for k, v in obj.items() if v is not None}
    elif isinstance(obj, list):
        return [_to_store_value(v) for v in obj]
    elif isinstance(obj, bool):
        return obj
    elif isinstance(obj, (int, float, Decimal)):
        return _to_store_number(obj)
    elif isinstance(obj, datetime):
        return obj.isoformat()
    return obj


def _from_store_value(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _from_store_value(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_from_store_value(v) for v in obj]
    elif isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    return obj


class Record(BaseModel):
    """A single row of a partitioned table.

    The pair (PartitionKey, RowKey) is unique within a table.

    Example:
        record = Record(PartitionKey="checking", RowKey="0001", amount=12.5)
        record.amount  # -> 12.5
    """

    model_config = ConfigDict(extra='allow')

    PartitionKey: str = Field(..., description="Grouping dimension; the primary filter")
    RowKey: str = Field(..., description="Identifies the record within its partition")

    @property
    def key(self) -> Dict[str, str]:
        """Composite key of this record as a store key dict."""
        return {PARTITION_KEY: self.PartitionKey, ROW_KEY: self.RowKey}

    @property
    def properties(self) -> Dict[str, Any]:
        """Non-key fields of this record."""
        return dict(self.model_extra or {})

    def to_item(self) -> Dict[str, Any]:
        """Convert the record into a store item ready for PutItem.

        Raises:
            ValidationError: If a number is NaN, infinite, or outside the
                store's 38-digit precision and exponent range
        """
        try:
            return _to_store_value(self.model_dump(exclude_none=True))
        except (ValueError, ArithmeticError) as e:
            raise ValidationError(
                f"Record {self.PartitionKey}/{self.RowKey} holds a number the store cannot represent: {e!r}",
                errors={'partition_key': self.PartitionKey, 'row_key': self.RowKey},
                original_error=e
            ) from e

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> 'Record':
        """Build a record from an item returned by the store.

        Raises:
            ValidationError: If the item lacks valid key fields
        """
        try:
            return cls(**_from_store_value(dict(item)))
        except PydanticValidationError as e:
            logger.error(f"Failed to convert store item to Record: {e}")
            raise ValidationError(
                f"Failed to convert store item to Record: {e}",
                errors={str(err['loc']): err['msg'] for err in e.errors()},
                original_error=e
            ) from e

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'Record':
        """Build a record from caller-supplied data.

        Raises:
            ValidationError: If PartitionKey/RowKey are missing or not strings
        """
        if isinstance(data, Record):
            return data
        try:
            return cls(**dict(data))
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid record: {e}",
                errors={str(err['loc']): err['msg'] for err in e.errors()},
                original_error=e
            ) from e


class ResultSegment(BaseModel):
    """One page of query results plus the token for the next page.

    ``continuation_token`` is None when this is the last segment.
    """

    records: List[Record] = Field(default_factory=list)
    continuation_token: Optional[Dict[str, Any]] = None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None

    def __len__(self) -> int:
        return len(self.records)
