"""
Test helpers for the table store.
"""

from .segments import (
    make_items,
    make_segment_responses,
    queue_segments,
)

__all__ = [
    'make_items',
    'make_segment_responses',
    'queue_segments',
]
