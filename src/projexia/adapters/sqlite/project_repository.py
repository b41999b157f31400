"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from projexia.adapters.sqlite.connection import get_connection
from projexia.adapters.sqlite.utils import (
    dump_json,
    load_json,
    now_iso,
    reading,
    row_to_dict,
    transaction,
)
from projexia.exceptions import ConflictError, NotFoundError
from projexia.models import (
    Expense,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
)
from projexia.repositories import ProjectRepository
from projexia.utils.uuid_utils import generate_id


class SqliteProjectRepository(ProjectRepository):
    """SQLite implementation of the project document repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite project repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional ready connection (takes precedence over db_path)
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    @staticmethod
    def _row_to_project(row: Any) -> Project:
        data = row_to_dict(row)
        data["tasks"] = load_json(data.get("tasks"), [])
        data["expenses"] = load_json(data.get("expenses"), [])
        return Project.model_validate(data)

    async def list_all(self, company_id: str) -> list[Project]:
        """List all projects of a company."""
        with reading("list projects"):
            rows = self.connection.execute(
                "SELECT * FROM projects WHERE company_id = ? ORDER BY name COLLATE NOCASE, id",
                (company_id,),
            ).fetchall()
        return [self._row_to_project(row) for row in rows]

    async def get(self, company_id: str, project_id: str) -> Project:
        """Get a specific project by ID."""
        with reading("load project"):
            row = self.connection.execute(
                "SELECT * FROM projects WHERE id = ? AND company_id = ?",
                (project_id, company_id),
            ).fetchone()

        if not row:
            raise NotFoundError(f"Project not found: {project_id}")

        return self._row_to_project(row)

    async def create(self, company_id: str, project_data: ProjectCreate) -> Project:
        """Create a new project."""
        project_id = generate_id()
        now = now_iso()
        data = project_data.model_dump(mode="json")

        with transaction(self.connection, "create project"):
            self.connection.execute(
                """INSERT INTO projects (
                    id, company_id, name, description, goals, budget,
                    start_date, end_date, status, tasks, expenses,
                    version, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, '[]', '[]', 1, ?, ?)""",
                (
                    project_id,
                    company_id,
                    data["name"],
                    data["description"],
                    data["goals"],
                    data["budget"],
                    data["start_date"],
                    data["end_date"],
                    data["status"],
                    now,
                    now,
                ),
            )

        return await self.get(company_id, project_id)

    async def update(
        self, company_id: str, project_id: str, updates: ProjectUpdate
    ) -> Project:
        """Update an existing project."""
        update_dict = updates.model_dump(mode="json", exclude_none=True)

        current = await self.get(company_id, project_id)
        if not update_dict:
            return current

        set_parts = [f"{key} = ?" for key in update_dict]
        params: list[Any] = list(update_dict.values())
        set_parts.append("updated_at = ?")
        set_parts.append("version = version + 1")
        params.append(now_iso())
        params.extend([project_id, company_id])

        with transaction(self.connection, "update project"):
            self.connection.execute(
                f"UPDATE projects SET {', '.join(set_parts)} WHERE id = ? AND company_id = ?",
                params,
            )

        return await self.get(company_id, project_id)

    async def delete(self, company_id: str, project_id: str) -> bool:
        """Delete a project; its tasks and expenses go with the document."""
        await self.get(company_id, project_id)

        with transaction(self.connection, "delete project"):
            self.connection.execute(
                "DELETE FROM projects WHERE id = ? AND company_id = ?",
                (project_id, company_id),
            )

        return True

    async def replace_tasks(
        self,
        company_id: str,
        project_id: str,
        tasks: list[Task],
        expected_version: int,
    ) -> Project:
        """Write the whole task array back with a version check."""
        payload = [task.to_document() for task in tasks]
        return await self._replace_array(
            "tasks", payload, company_id, project_id, expected_version
        )

    async def replace_expenses(
        self,
        company_id: str,
        project_id: str,
        expenses: list[Expense],
        expected_version: int,
    ) -> Project:
        """Write the whole expense array back with a version check."""
        payload = [expense.model_dump(mode="json") for expense in expenses]
        return await self._replace_array(
            "expenses", payload, company_id, project_id, expected_version
        )

    async def _replace_array(
        self,
        column: str,
        payload: list[dict],
        company_id: str,
        project_id: str,
        expected_version: int,
    ) -> Project:
        with transaction(self.connection, f"save project {column}"):
            cursor = self.connection.execute(
                f"""UPDATE projects
                    SET {column} = ?, updated_at = ?, version = version + 1
                    WHERE id = ? AND company_id = ? AND version = ?""",
                (dump_json(payload), now_iso(), project_id, company_id, expected_version),
            )
            if cursor.rowcount == 0:
                row = self.connection.execute(
                    "SELECT version FROM projects WHERE id = ? AND company_id = ?",
                    (project_id, company_id),
                ).fetchone()
                if row is None:
                    raise NotFoundError(f"Project not found: {project_id}")
                raise ConflictError(
                    f"Project {project_id} was modified concurrently "
                    f"(version {row[0]}, expected {expected_version})"
                )

        return await self.get(company_id, project_id)
