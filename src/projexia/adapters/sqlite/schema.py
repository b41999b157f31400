"""Database schema definitions for the local document store.

Projects are stored as documents: their ``tasks`` and ``expenses`` columns hold
JSON arrays that are always replaced as a whole.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 2

CREATE_COMPANIES_TABLE = """
CREATE TABLE IF NOT EXISTS companies (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    created_at DATETIME NOT NULL
)
"""

# roles: JSON array of role names
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    display_name TEXT NOT NULL,
    company_id TEXT NOT NULL,
    roles TEXT NOT NULL DEFAULT '["employee"]',
    created_at DATETIME NOT NULL,
    FOREIGN KEY (company_id) REFERENCES companies(id) ON DELETE CASCADE
)
"""

CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    goals TEXT NOT NULL DEFAULT '',
    budget REAL NOT NULL DEFAULT 0,
    start_date DATE,
    end_date DATE,
    status TEXT NOT NULL DEFAULT 'not_started',
    tasks TEXT NOT NULL DEFAULT '[]',
    expenses TEXT NOT NULL DEFAULT '[]',
    version INTEGER NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (company_id) REFERENCES companies(id) ON DELETE CASCADE
)
"""

CREATE_TIMESHEETS_TABLE = """
CREATE TABLE IF NOT EXISTS timesheets (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    project_id TEXT NOT NULL,
    date DATE NOT NULL,
    duration REAL NOT NULL,
    task_type TEXT NOT NULL,
    description TEXT NOT NULL,
    deliverable_id TEXT,
    billable BOOLEAN DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'pending',
    created_at DATETIME NOT NULL,
    FOREIGN KEY (company_id) REFERENCES companies(id) ON DELETE CASCADE,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
)
"""

CREATE_DELIVERABLES_TABLE = """
CREATE TABLE IF NOT EXISTS deliverables (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    project_id TEXT NOT NULL,
    name TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'todo',
    type TEXT,
    sprint_number INTEGER,
    project_phase TEXT,
    acceptance_criteria TEXT,
    validation_status TEXT,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (company_id) REFERENCES companies(id) ON DELETE CASCADE,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
)
"""

# Added by migration 002 (companies created by 001 have none of them)
COMPANY_PROFILE_COLUMNS = [
    ("creation_year", "INTEGER"),
    ("country", "TEXT"),
    ("currency", "TEXT"),
    ("language", "TEXT"),
]

ALL_TABLES = [
    CREATE_COMPANIES_TABLE,
    CREATE_USERS_TABLE,
    CREATE_PROJECTS_TABLE,
    CREATE_TIMESHEETS_TABLE,
    CREATE_DELIVERABLES_TABLE,
]

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_users_company ON users(company_id)",
    "CREATE INDEX IF NOT EXISTS idx_projects_company ON projects(company_id)",
    "CREATE INDEX IF NOT EXISTS idx_timesheets_company_user ON timesheets(company_id, user_id)",
    "CREATE INDEX IF NOT EXISTS idx_timesheets_project ON timesheets(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_deliverables_project ON deliverables(project_id)",
]
