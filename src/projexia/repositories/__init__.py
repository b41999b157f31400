"""Repository interfaces for Projexia.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal
Architecture.

Implementations (Adapters) are in:
- projexia.adapters.sqlite (local document store)
"""

from .repository import (
    CompanyRepository,
    DeliverableRepository,
    ProjectRepository,
    TimesheetRepository,
    UserRepository,
)

__all__ = [
    "CompanyRepository",
    "UserRepository",
    "ProjectRepository",
    "TimesheetRepository",
    "DeliverableRepository",
]
