"""Utility functions for SQLite adapter."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from projexia.exceptions import StoreError


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def dump_json(value: Any) -> str:
    """Serialize a JSON column value."""
    return json.dumps(value, ensure_ascii=False)


def load_json(raw: str | None, default: Any) -> Any:
    """Deserialize a JSON column value, falling back to ``default`` when empty.

    Raises:
        StoreError: If the column does not hold valid JSON
    """
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StoreError(f"Corrupt JSON column: {e}") from e


@contextmanager
def reading(action: str) -> Iterator[None]:
    """Re-raise ``sqlite3.Error`` from a read as ``StoreError``."""
    try:
        yield
    except sqlite3.Error as e:
        raise StoreError(f"Could not {action}: {e}") from e


@contextmanager
def transaction(connection: sqlite3.Connection, action: str) -> Iterator[None]:
    """Run a block as one transaction.

    Commits on success. On failure rolls back, so nothing is partially written,
    and re-raises ``sqlite3.Error`` as ``StoreError``.

    Args:
        connection: Database connection
        action: Short description used in the error message
    """
    try:
        yield
        connection.commit()
    except sqlite3.Error as e:
        connection.rollback()
        raise StoreError(f"Could not {action}: {e}") from e
    except Exception:
        connection.rollback()
        raise
