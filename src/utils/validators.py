"""Lightweight validation helpers shared by the business rules."""

from typing import Any, Optional


def is_blank(value: Any) -> bool:
    """True for None, empty and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def exceeds(value: Optional[str], max_length: int) -> bool:
    """True if a string value is longer than max_length."""
    return value is not None and len(value) > max_length
