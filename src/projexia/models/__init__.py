"""Projexia domain models.

This package contains Pydantic models that represent the core domain entities
of Projexia. These models are used throughout the application for data
validation, serialization, and type safety.
"""

from .config_models import AIConfig, AppConfig, OutputConfig, StoreConfig
from .core import (
    IMPACT_MIN_DESCRIPTION_LENGTH,
    Company,
    CompanyUpdate,
    Deliverable,
    DeliverableCreate,
    DeliverableUpdate,
    Expense,
    ExpenseCreate,
    ImpactIndicators,
    ImpactRequest,
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    Role,
    Task,
    TaskCreate,
    TaskPatch,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetStatus,
    UserCreate,
    UserProfile,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskPatch",
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectStatus",
    "ProjectUpdate",
    "Expense",
    "ExpenseCreate",
    # Tenant and user models
    "Company",
    "CompanyUpdate",
    "Role",
    "UserCreate",
    "UserProfile",
    # Timesheets and deliverables
    "TimesheetEntry",
    "TimesheetEntryCreate",
    "TimesheetStatus",
    "Deliverable",
    "DeliverableCreate",
    "DeliverableUpdate",
    # Impact indicators
    "IMPACT_MIN_DESCRIPTION_LENGTH",
    "ImpactIndicators",
    "ImpactRequest",
    # Config models
    "AIConfig",
    "AppConfig",
    "OutputConfig",
    "StoreConfig",
]
