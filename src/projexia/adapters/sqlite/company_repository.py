"""SQLite implementation of CompanyRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from projexia.adapters.sqlite.connection import get_connection
from projexia.adapters.sqlite.utils import now_iso, reading, row_to_dict, transaction
from projexia.exceptions import NotFoundError
from projexia.models import Company, CompanyUpdate
from projexia.repositories import CompanyRepository
from projexia.utils.uuid_utils import generate_id


class SqliteCompanyRepository(CompanyRepository):
    """SQLite implementation of company repository."""

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

    async def create(self, name: str) -> Company:
        """Create a new company."""
        company_id = generate_id()
        with transaction(self.connection, "create company"):
            self.connection.execute(
                "INSERT INTO companies (id, name, created_at) VALUES (?, ?, ?)",
                (company_id, name, now_iso()),
            )
        return await self.get(company_id)

    async def get(self, company_id: str) -> Company:
        """Get a company by ID."""
        with reading("load company"):
            row = self.connection.execute(
                "SELECT * FROM companies WHERE id = ?", (company_id,)
            ).fetchone()
        if not row:
            raise NotFoundError(f"Company not found: {company_id}")
        return Company(**row_to_dict(row))

    async def update(self, company_id: str, updates: CompanyUpdate) -> Company:
        """Update the company profile."""
        update_dict = updates.model_dump(exclude_none=True)

        current = await self.get(company_id)
        if not update_dict:
            return current

        set_parts = [f"{key} = ?" for key in update_dict]
        params: list[Any] = [*update_dict.values(), company_id]

        with transaction(self.connection, "update company"):
            self.connection.execute(
                f"UPDATE companies SET {', '.join(set_parts)} WHERE id = ?", params
            )
        return await self.get(company_id)
