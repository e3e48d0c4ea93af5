"""
Handler Layer for the Table Store

Read and write APIs for one partitioned table, split the same way as the
store's access patterns:

- queries.py: RecordReadApi, segmented reads flattened into one sequence
- commands.py: RecordWriteApi, conditional insert and lookup-then-delete

Architecture:
handlers/ (this layer) -> core/ (gateway) -> DynamoDB
handlers/ (this layer) <- models/ (Record, ResultSegment)
"""

from .queries import RecordReadApi
from .commands import RecordWriteApi

__all__ = [
    'RecordReadApi',
    'RecordWriteApi',
]
