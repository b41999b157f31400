"""Migration 002: Company profile fields.

Adds the founding year, country, currency and language edited from the
company profile. Existing companies keep NULL until a manager fills them in.
"""

from __future__ import annotations

import sqlite3

from projexia.adapters.sqlite.schema import COMPANY_PROFILE_COLUMNS

from .runner import Migration


class CompanyProfileMigration(Migration):
    """Add company profile columns."""

    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Add company profile (creation year, country, currency, language)"

    def up(self, connection: sqlite3.Connection) -> None:
        for column, sql_type in COMPANY_PROFILE_COLUMNS:
            connection.execute(f"ALTER TABLE companies ADD COLUMN {column} {sql_type}")
