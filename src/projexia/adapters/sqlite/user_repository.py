"""SQLite implementation of UserRepository."""

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
from projexia.exceptions import NotFoundError
from projexia.models import Role, UserCreate, UserProfile
from projexia.repositories import UserRepository
from projexia.utils.uuid_utils import generate_id


class SqliteUserRepository(UserRepository):
    """SQLite implementation of user repository."""

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

    @staticmethod
    def _row_to_user(row: Any) -> UserProfile:
        data = row_to_dict(row)
        data["roles"] = load_json(data.get("roles"), [Role.EMPLOYEE.value])
        return UserProfile.model_validate(data)

    async def create(
        self, company_id: str, user_data: UserCreate, roles: list[Role] | None = None
    ) -> UserProfile:
        """Create a user inside a company."""
        email = str(user_data.email).lower()
        with reading("check user email"):
            existing = self.connection.execute(
                "SELECT id FROM users WHERE email = ?", (email,)
            ).fetchone()
        if existing:
            raise ValueError(f"A user with email '{email}' already exists")

        user_id = generate_id()
        role_values = [role.value for role in (roles or [user_data.role])]

        with transaction(self.connection, "create user"):
            self.connection.execute(
                """INSERT INTO users (id, email, display_name, company_id, roles, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    user_id,
                    email,
                    user_data.display_name,
                    company_id,
                    dump_json(role_values),
                    now_iso(),
                ),
            )

        return await self.get(user_id)

    async def get(self, user_id: str) -> UserProfile:
        """Get a user by ID."""
        with reading("load user"):
            row = self.connection.execute(
                "SELECT * FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        if not row:
            raise NotFoundError(f"User not found: {user_id}")
        return self._row_to_user(row)

    async def list_by_company(self, company_id: str) -> list[UserProfile]:
        """List the users of a company."""
        with reading("list users"):
            rows = self.connection.execute(
                "SELECT * FROM users WHERE company_id = ? ORDER BY display_name COLLATE NOCASE, id",
                (company_id,),
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    async def set_roles(self, user_id: str, roles: list[Role]) -> UserProfile:
        """Replace a user's roles."""
        await self.get(user_id)
        with transaction(self.connection, "update user roles"):
            self.connection.execute(
                "UPDATE users SET roles = ? WHERE id = ?",
                (dump_json([role.value for role in roles]), user_id),
            )
        return await self.get(user_id)
