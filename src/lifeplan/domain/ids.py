"""Identifier grammar, generation, and normalized uniqueness keys.

All entity IDs are UUIDv4 strings. One canonical pattern is applied to
every reference field (goal IDs, life area IDs, linked goals) so that no
call site accepts a looser shape than another.

Uniqueness of life area names and weekly task titles is case-insensitive:
storage keeps a derived ``lower(trim(value))`` column and lookups compare
against :func:`normalize_key`.
"""

from __future__ import annotations

import re
import uuid

UUID_PATTERN: re.Pattern[str] = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_uuid(value: object) -> bool:
    """Check whether *value* (after trimming) is a UUIDv4 string."""
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.fullmatch(value.strip()) is not None


def generate_id() -> str:
    """Generate a new entity ID."""
    return str(uuid.uuid4())


def normalize_key(value: str) -> str:
    """Case-fold and trim a display value for uniqueness comparison.

    Mirrors the storage-side generated column, so
    ``normalize_key("  Health ")`` and ``normalize_key("health")`` collide.
    """
    return value.strip().lower()
