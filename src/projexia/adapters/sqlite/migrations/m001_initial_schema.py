"""Initial database schema migration.

Creates companies, users, projects (with embedded task and expense arrays),
timesheets and deliverables.
"""

import sqlite3

from projexia.adapters.sqlite.schema import ALL_INDEXES, ALL_TABLES

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create all initial tables and indexes."""
        for table_sql in ALL_TABLES:
            connection.execute(table_sql)

        for index_sql in ALL_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()
