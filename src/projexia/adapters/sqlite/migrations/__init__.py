"""Schema migrations for the local document store."""

from .m001_initial_schema import initial_migration
from .m002_company_profile import CompanyProfileMigration
from .runner import Migration, MigrationRunner

ALL_MIGRATIONS = [initial_migration, CompanyProfileMigration()]

__all__ = ["ALL_MIGRATIONS", "Migration", "MigrationRunner"]
