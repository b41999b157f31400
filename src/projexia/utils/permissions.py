"""Role-based permission checks.

Managers (admins and scrum-masters) may perform every operation; employees
may only work the tasks assigned to them.
"""

from __future__ import annotations

from projexia.exceptions import PermissionDeniedError
from projexia.models import Role, Task, UserProfile

MANAGER_ROLES = frozenset({Role.ADMIN, Role.SCRUM_MASTER})


def is_manager(user: UserProfile) -> bool:
    """Return True if the user is an admin or a scrum-master."""
    return any(role in MANAGER_ROLES for role in user.roles)


def can_toggle_task(user: UserProfile, task: Task) -> bool:
    """Managers and the task's assignee may mark it done or not done."""
    return is_manager(user) or task.assignee_id == user.id


def can_add_subtask(user: UserProfile, parent: Task) -> bool:
    """Managers and the parent task's assignee may add subtasks under it."""
    return is_manager(user) or parent.assignee_id == user.id


def require_manager(user: UserProfile, action: str) -> None:
    """Raise PermissionDeniedError unless the user is a manager.

    Args:
        user: Acting user
        action: Description of the attempted action, used in the message
    """
    if not is_manager(user):
        raise PermissionDeniedError(
            f"Only admins and scrum-masters can {action}"
        )
