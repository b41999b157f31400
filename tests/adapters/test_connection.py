"""Unit tests for DatabaseConnection (connection.py)."""

from __future__ import annotations

import sqlite3
from unittest.mock import patch

import pytest

from projexia.adapters.sqlite.connection import (
    DatabaseConnection,
    create_memory_connection,
    default_db_path,
    get_connection,
)


@pytest.fixture(autouse=True)
def reset_singleton():
    """Reset DatabaseConnection singleton state around each test."""
    DatabaseConnection.close_connection()
    DatabaseConnection._instance = None
    yield
    DatabaseConnection.close_connection()
    DatabaseConnection._instance = None


class TestSingleton:
    def test_same_instance_returned_twice(self):
        assert DatabaseConnection() is DatabaseConnection()


class TestGetConnection:
    def test_creates_migrated_database(self, tmp_path):
        db_path = tmp_path / "nested" / "store.db"
        conn = get_connection(db_path)

        assert db_path.exists()
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0] == 0
        assert oct(db_path.stat().st_mode & 0o777) == oct(0o600)

    def test_reuses_connection_for_same_path(self, tmp_path):
        db_path = tmp_path / "store.db"
        assert get_connection(db_path) is get_connection(db_path)
        assert DatabaseConnection.get_db_path() == db_path

    def test_switching_path_opens_new_connection(self, tmp_path):
        first = get_connection(tmp_path / "a.db")
        second = get_connection(tmp_path / "b.db")

        assert first is not second
        with pytest.raises(sqlite3.ProgrammingError):
            first.execute("SELECT 1")

    def test_default_location(self, tmp_path):
        with patch(
            "projexia.adapters.sqlite.connection.user_data_dir", return_value=str(tmp_path)
        ):
            assert default_db_path() == tmp_path / "projexia.db"

    def test_close_resets_state(self, tmp_path):
        get_connection(tmp_path / "store.db")
        DatabaseConnection.close_connection()
        assert DatabaseConnection.get_db_path() is None


def test_memory_connection_is_migrated():
    conn = create_memory_connection()
    assert conn.row_factory is sqlite3.Row
    assert conn.execute("SELECT COUNT(*) FROM companies").fetchone()[0] == 0
