"""SQLite implementation of TimesheetRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from projexia.adapters.sqlite.connection import get_connection
from projexia.adapters.sqlite.utils import now_iso, reading, row_to_dict, transaction
from projexia.exceptions import NotFoundError
from projexia.models import TimesheetEntry, TimesheetEntryCreate, TimesheetStatus
from projexia.repositories import TimesheetRepository
from projexia.utils.uuid_utils import generate_id


class SqliteTimesheetRepository(TimesheetRepository):
    """SQLite implementation of timesheet repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def add(
        self, company_id: str, user_id: str, entry: TimesheetEntryCreate
    ) -> TimesheetEntry:
        """Record a timesheet entry."""
        entry_id = generate_id()
        data = entry.model_dump(mode="json")

        with transaction(self.connection, "save timesheet entry"):
            self.connection.execute(
                """INSERT INTO timesheets (
                    id, company_id, user_id, project_id, date, duration,
                    task_type, description, deliverable_id, billable, status, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    entry_id,
                    company_id,
                    user_id,
                    data["project_id"],
                    data["date"],
                    data["duration"],
                    data["task_type"],
                    data["description"],
                    data["deliverable_id"],
                    1 if data["billable"] else 0,
                    TimesheetStatus.PENDING.value,
                    now_iso(),
                ),
            )

        return await self.get(company_id, entry_id)

    async def list_entries(
        self,
        company_id: str,
        *,
        user_id: str | None = None,
        project_id: str | None = None,
        limit: int | None = None,
    ) -> list[TimesheetEntry]:
        """List entries with optional filters."""
        query = "SELECT * FROM timesheets WHERE company_id = ?"
        params: list[Any] = [company_id]

        if user_id:
            query += " AND user_id = ?"
            params.append(user_id)

        if project_id:
            query += " AND project_id = ?"
            params.append(project_id)

        query += " ORDER BY date DESC, created_at DESC"

        if limit:
            query += " LIMIT ?"
            params.append(limit)

        with reading("list timesheet entries"):
            rows = self.connection.execute(query, params).fetchall()
        return [TimesheetEntry(**row_to_dict(row)) for row in rows]

    async def get(self, company_id: str, entry_id: str) -> TimesheetEntry:
        """Get an entry by ID."""
        with reading("load timesheet entry"):
            row = self.connection.execute(
                "SELECT * FROM timesheets WHERE id = ? AND company_id = ?",
                (entry_id, company_id),
            ).fetchone()
        if not row:
            raise NotFoundError(f"Timesheet entry not found: {entry_id}")
        return TimesheetEntry(**row_to_dict(row))

    async def delete(self, company_id: str, entry_id: str) -> bool:
        """Delete an entry."""
        await self.get(company_id, entry_id)
        with transaction(self.connection, "delete timesheet entry"):
            self.connection.execute(
                "DELETE FROM timesheets WHERE id = ? AND company_id = ?",
                (entry_id, company_id),
            )
        return True
