"""Parsing of externally supplied identifiers."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from modules.core.exceptions import InvalidIdentifier


def parse_identifier(value: Any, label: str = "id") -> UUID:
    """Return *value* as a ``UUID``.

    Raises:
        InvalidIdentifier: if *value* is not a UUID or a UUID string.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier(f"invalid {label}") from None
