# Base exception class
from .base import TableStoreError

from .domain_exceptions import (
    MalformedFilterError,
    RetryableError,
    StoreUnavailableError,
    ValidationError,
)

__all__ = [
    # Base exception
    "TableStoreError",

    # Domain exceptions (alphabetically ordered)
    "MalformedFilterError",
    "RetryableError",
    "StoreUnavailableError",
    "ValidationError",
]
