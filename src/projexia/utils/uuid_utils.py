"""ID utility functions for Projexia.

Provides ID generation, short ID display, and resolution of short IDs or
names typed on the command line.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Sequence
from typing import Protocol

from projexia.exceptions import NotFoundError

# Relaxed UUID pattern (any version)
UUID_RELAXED_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


class Identified(Protocol):
    id: str


def generate_id() -> str:
    """Generate a new collision-resistant ID (UUID4 string)."""
    return str(uuid.uuid4())


def is_valid_uuid(value: str) -> bool:
    """Check if a string is a valid UUID."""
    if not isinstance(value, str):
        return False
    return UUID_RELAXED_PATTERN.match(value) is not None


def shorten_id(value: str, length: int = 8) -> str:
    """Get shortened version of an ID for display."""
    return value[:length]


def resolve_id(candidate: str, items: Sequence[Identified], kind: str = "item") -> str:
    """Resolve a full ID, ID prefix, or name to a full ID.

    Tries in order: exact ID, unique ID prefix, case-insensitive name
    (for records that have a ``name`` or ``display_name``).

    Args:
        candidate: Text typed by the user
        items: Records to search
        kind: Record kind used in error messages

    Returns:
        Full ID string

    Raises:
        NotFoundError: If nothing matches
        ValueError: If the candidate is ambiguous
    """
    needle = candidate.strip()
    if not needle:
        raise NotFoundError(f"{kind.capitalize()} not found: {candidate!r}")

    for item in items:
        if item.id == needle:
            return item.id

    prefixed = [item for item in items if item.id.lower().startswith(needle.lower())]
    if len(prefixed) == 1:
        return prefixed[0].id
    if len(prefixed) > 1:
        matches = ", ".join(shorten_id(item.id) for item in prefixed[:5])
        if len(prefixed) > 5:
            matches += f", ... ({len(prefixed)} total)"
        raise ValueError(
            f"Ambiguous ID '{needle}' matches {len(prefixed)} {kind}s: {matches}"
        )

    named = [
        item
        for item in items
        if (getattr(item, "name", None) or getattr(item, "display_name", None) or "").lower()
        == needle.lower()
    ]
    if len(named) == 1:
        return named[0].id
    if len(named) > 1:
        raise ValueError(
            f"Ambiguous name '{needle}' matches {len(named)} {kind}s; use an ID instead"
        )

    raise NotFoundError(f"{kind.capitalize()} not found: {needle}")
