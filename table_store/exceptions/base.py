from typing import Any, Dict, Optional


class TableStoreError(Exception):
    """Base exception for all table store errors.

    Data-presence outcomes (a row that already exists on insert, a row that is
    absent on get or delete) are never raised; they come back as ``False`` or
    ``None`` from the read and write APIs. Only failures to talk to the store,
    or data the store cannot accept, surface as a ``TableStoreError``.

    Attributes:
        message: Human-readable error message
        original_error: The underlying boto3/botocore exception, if any
        context: Extra details such as table name or key values
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    @property
    def table_name(self) -> Optional[str]:
        """Table the failing operation targeted, when known."""
        return self.context.get('table_name')

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
