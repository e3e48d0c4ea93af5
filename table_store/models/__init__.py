from .record import (
    PARTITION_KEY,
    ROW_KEY,
    Record,
    ResultSegment,
)

__all__ = [
    "PARTITION_KEY",
    "ROW_KEY",
    "Record",
    "ResultSegment",
]
