"""Database connection management for the local document store.

This module provides a singleton connection manager for the SQLite vault,
ensuring proper connection lifecycle, WAL mode, and foreign key enforcement.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from projexia.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner


def default_db_path() -> Path:
    """Default vault location inside the user data directory."""
    return Path(user_data_dir("projexia")) / "projexia.db"


class DatabaseConnection:
    """Singleton connection manager for the local SQLite vault.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - Proper file permissions (owner read/write only)
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create the database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection with migrations applied
        """
        instance = cls()

        db_path = default_db_path() if db_path is None else Path(db_path)

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        if instance._connection is not None:
            instance._connection.close()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = sqlite3.connect(
            str(db_path),
            check_same_thread=False,
            timeout=30.0,  # Wait up to 30s for locks
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(db_path, 0o600)

        MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)

        instance._connection = connection
        instance._db_path = db_path

        atexit.register(cls.close_connection)

        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.commit()
                instance._connection.close()
            except sqlite3.Error:
                pass  # Connection already unusable at exit
            finally:
                instance._connection = None
                instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        return cls()._db_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)


def create_memory_connection() -> sqlite3.Connection:
    """Create a migrated in-memory connection (used for tests and dry runs)."""
    connection = sqlite3.connect(":memory:", check_same_thread=False)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection
