"""
Key field sanitization.

Table stores reject a fixed set of characters in PartitionKey/RowKey values:
the path separators ``/`` and ``\\``, ``#``, ``?`` and the C0/C1 control
ranges [0x00, 0x1F] and [0x7F, 0x9F]. Callers that build keys from
user-controlled identifiers strip them with ``sanitize_key`` first.
"""

DISALLOWED_KEY_CHARS = frozenset(
    ['/', '\\', '#', '?']
    + [chr(c) for c in range(0x00, 0x20)]
    + [chr(c) for c in range(0x7F, 0xA0)]
)


def sanitize_key(raw: str) -> str:
    """Remove every disallowed character from a candidate key.

    Surviving characters keep their relative order. Never raises; a value made
    only of disallowed characters becomes the empty string.

    Example:
        >>> sanitize_key("savings/2024#q1")
        'savings2024q1'
    """
    return "".join(c for c in raw if c not in DISALLOWED_KEY_CHARS)


def contains_disallowed_chars(value: str) -> bool:
    """Return True if ``value`` would be changed by ``sanitize_key``."""
    return any(c in DISALLOWED_KEY_CHARS for c in value)
