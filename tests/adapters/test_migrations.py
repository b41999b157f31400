"""Unit tests for the MigrationRunner in migrations/runner.py."""

from __future__ import annotations

import sqlite3

import pytest

from projexia.adapters.sqlite.migrations import ALL_MIGRATIONS, Migration, MigrationRunner
from projexia.adapters.sqlite.migrations.m001_initial_schema import initial_migration


# ---------------------------------------------------------------------------
# Concrete test migrations
# ---------------------------------------------------------------------------


class _Migration1(Migration):
    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create test_table_one"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE test_table_one (id INTEGER PRIMARY KEY, name TEXT)")


class _Migration2(Migration):
    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Create test_table_two"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE test_table_two (id INTEGER PRIMARY KEY, value TEXT)")


class _FailingMigration(Migration):
    @property
    def version(self) -> int:
        return 3

    @property
    def description(self) -> str:
        return "Intentionally fails"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE half_done (id INTEGER)")
        raise sqlite3.OperationalError("boom")


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def _tables(connection: sqlite3.Connection) -> set[str]:
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row[0] for row in rows}


class TestMigrationRunner:
    def test_fresh_database_is_version_zero(self, conn):
        assert MigrationRunner(conn).get_current_version() == 0

    def test_runs_pending_in_order(self, conn):
        runner = MigrationRunner(conn)
        applied = runner.run_migrations([_Migration2(), _Migration1()])

        assert applied == 2
        assert runner.get_current_version() == 2
        assert {"test_table_one", "test_table_two"} <= _tables(conn)

    def test_second_run_is_no_op(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations([_Migration1()])
        assert runner.run_migrations([_Migration1(), _Migration2()]) == 1
        assert runner.run_migrations([_Migration1(), _Migration2()]) == 0

    def test_rejects_old_version(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migration(_Migration1())
        with pytest.raises(ValueError, match="not greater"):
            runner.run_migration(_Migration1())

    def test_failure_does_not_record_version(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migration(_Migration1())
        with pytest.raises(RuntimeError, match="Migration 3 failed"):
            runner.run_migration(_FailingMigration())
        assert runner.get_current_version() == 1


class TestInitialSchema:
    def test_creates_store_tables(self, conn):
        MigrationRunner(conn).run_migrations(ALL_MIGRATIONS)
        assert {"companies", "users", "projects", "timesheets", "deliverables"} <= _tables(conn)

    def test_projects_have_document_columns(self, conn):
        MigrationRunner(conn).run_migrations(ALL_MIGRATIONS)
        columns = {row[1] for row in conn.execute("PRAGMA table_info(projects)")}
        assert {"tasks", "expenses", "version"} <= columns

    def test_fresh_store_reaches_latest_version(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations(ALL_MIGRATIONS)
        assert runner.get_current_version() == max(m.version for m in ALL_MIGRATIONS)


class TestCompanyProfileMigration:
    def test_adds_profile_columns_and_keeps_rows(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations([initial_migration])
        conn.execute(
            "INSERT INTO companies (id, name, created_at) VALUES ('c1', 'Acme', '2024-01-01')"
        )
        conn.commit()

        assert runner.run_migrations(ALL_MIGRATIONS) == 1

        columns = {row[1] for row in conn.execute("PRAGMA table_info(companies)")}
        assert {"creation_year", "country", "currency", "language"} <= columns
        row = conn.execute("SELECT name, country FROM companies WHERE id = 'c1'").fetchone()
        assert row == ("Acme", None)


class TestMigrationLogging:
    def test_applied_migrations_are_logged(self, conn, tmp_path):
        MigrationRunner(conn).run_migrations([_Migration1(), _Migration2()])
        log_text = (tmp_path / "logs" / "projexia.log").read_text()
        assert "migrating store from version 0 to 2" in log_text
        assert "applied migration 1: Create test_table_one" in log_text
        assert "applied migration 2: Create test_table_two" in log_text

    def test_failed_migration_is_logged(self, conn, tmp_path):
        runner = MigrationRunner(conn)
        with pytest.raises(RuntimeError):
            runner.run_migration(_FailingMigration())
        log_text = (tmp_path / "logs" / "projexia.log").read_text()
        assert "migration 3 failed: boom" in log_text
