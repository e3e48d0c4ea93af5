"""
Segment chain builders.

Build raw Query responses the way the store pages them: each response holds
one segment of items and, except for the last, a LastEvaluatedKey token.
"""

from typing import Any, Dict, List
from unittest.mock import Mock


def make_items(partition_key: str, count: int) -> List[Dict[str, Any]]:
    """Stored items for one partition with zero-padded row keys."""
    return [
        {'PartitionKey': partition_key, 'RowKey': f"{i:04d}", 'position': i}
        for i in range(count)
    ]


def make_segment_responses(items: List[Dict[str, Any]], sizes: List[int]) -> List[Dict[str, Any]]:
    """Split items into Query responses of the given sizes with chained tokens."""
    assert sum(sizes) == len(items), "segment sizes must cover every item"
    responses = []
    start = 0
    for index, size in enumerate(sizes):
        chunk = items[start:start + size]
        start += size
        response = {'Items': chunk, 'Count': len(chunk)}
        if index < len(sizes) - 1:
            response['LastEvaluatedKey'] = {'PartitionKey': 'token', 'RowKey': str(index)}
        responses.append(response)
    return responses


def queue_segments(gateway: Mock, responses: List[Dict[str, Any]]) -> None:
    """Make gateway.query answer with each response in turn."""
    gateway.query.side_effect = list(responses)
