"""
Table Store Exceptions

Organized by category:
1. Connectivity Errors (propagated to the caller, never retried here)
2. Query Errors
3. Data Validation Errors

Conflicts on insert and missing rows on get/delete are not represented here:
they are ordinary return values of the read and write APIs.
"""

from typing import Any, Dict, Optional

from .base import TableStoreError


# =============================================================================
# Connectivity Errors
# =============================================================================

class StoreUnavailableError(TableStoreError):
    """Raised when the backing store cannot be reached.

    Used for:
    - Network and endpoint failures
    - Missing or rejected credentials
    - Tables that are missing while auto-creation is disabled
    - Unknown store errors
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(StoreUnavailableError):
    """Raised when the store throttled or briefly failed the request.

    Retry policy belongs to the caller (or botocore's own retry config);
    this component surfaces the failure as-is.
    """

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


# =============================================================================
# Query Errors
# =============================================================================

class MalformedFilterError(TableStoreError):
    """Raised when the store rejects a key condition.

    Keys passed to get/delete are not sanitized automatically; callers that
    accept user-controlled identifiers must run them through ``sanitize_key``
    first.
    """

    def __init__(self, message: str, partition_key: Optional[str] = None, row_key: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        self.partition_key = partition_key
        self.row_key = row_key
        context = {}
        if partition_key is not None:
            context['partition_key'] = partition_key
        if row_key is not None:
            context['row_key'] = row_key
        super().__init__(message, original_error, context)


# =============================================================================
# Data Validation Errors
# =============================================================================

class ValidationError(TableStoreError):
    """Raised when record data is invalid.

    Used for:
    - Records missing PartitionKey/RowKey or carrying non-string keys
    - Items that cannot be converted back into a Record
    - More than one stored row for a single composite key
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)
