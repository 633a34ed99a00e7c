"""Nil-aware value helpers."""

from typing import Any


def is_nil(value: Any) -> bool:
    return value is None


def coalesce(*values: Any) -> Any:
    """Return the first value that is not nil. Falsy values such as False or 0 still win."""
    for value in values:
        if not is_nil(value):
            return value
    return None
