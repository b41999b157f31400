"""SQLite implementation of DeliverableRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from projexia.adapters.sqlite.connection import get_connection
from projexia.adapters.sqlite.utils import now_iso, reading, row_to_dict, transaction
from projexia.exceptions import NotFoundError
from projexia.models import Deliverable, DeliverableCreate, DeliverableUpdate
from projexia.repositories import DeliverableRepository
from projexia.utils.uuid_utils import generate_id


class SqliteDeliverableRepository(DeliverableRepository):
    """SQLite implementation of deliverable repository."""

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

    async def create(self, company_id: str, data: DeliverableCreate) -> Deliverable:
        """Create a deliverable."""
        deliverable_id = generate_id()
        now = now_iso()
        values = data.model_dump()

        with transaction(self.connection, "create deliverable"):
            self.connection.execute(
                """INSERT INTO deliverables (
                    id, company_id, project_id, name, status, type, sprint_number,
                    project_phase, acceptance_criteria, validation_status,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    deliverable_id,
                    company_id,
                    values["project_id"],
                    values["name"],
                    values["status"],
                    values["type"],
                    values["sprint_number"],
                    values["project_phase"],
                    values["acceptance_criteria"],
                    values["validation_status"],
                    now,
                    now,
                ),
            )

        return await self.get(company_id, deliverable_id)

    async def get(self, company_id: str, deliverable_id: str) -> Deliverable:
        """Get a deliverable by ID."""
        with reading("load deliverable"):
            row = self.connection.execute(
                "SELECT * FROM deliverables WHERE id = ? AND company_id = ?",
                (deliverable_id, company_id),
            ).fetchone()
        if not row:
            raise NotFoundError(f"Deliverable not found: {deliverable_id}")
        return Deliverable(**row_to_dict(row))

    async def update(
        self, company_id: str, deliverable_id: str, updates: DeliverableUpdate
    ) -> Deliverable:
        """Update a deliverable."""
        update_dict = updates.model_dump(exclude_none=True)

        current = await self.get(company_id, deliverable_id)
        if not update_dict:
            return current

        set_parts = [f"{key} = ?" for key in update_dict]
        params: list[Any] = list(update_dict.values())
        set_parts.append("updated_at = ?")
        params.append(now_iso())
        params.extend([deliverable_id, company_id])

        with transaction(self.connection, "update deliverable"):
            self.connection.execute(
                f"UPDATE deliverables SET {', '.join(set_parts)} WHERE id = ? AND company_id = ?",
                params,
            )

        return await self.get(company_id, deliverable_id)

    async def list_all(
        self, company_id: str, project_id: str | None = None
    ) -> list[Deliverable]:
        """List deliverables, optionally for one project."""
        query = "SELECT * FROM deliverables WHERE company_id = ?"
        params: list[Any] = [company_id]
        if project_id:
            query += " AND project_id = ?"
            params.append(project_id)
        query += " ORDER BY sprint_number IS NULL, sprint_number, name COLLATE NOCASE"

        with reading("list deliverables"):
            rows = self.connection.execute(query, params).fetchall()
        return [Deliverable(**row_to_dict(row)) for row in rows]
