"""Task service - Business logic for task operations.

Tasks live inside their project document, so every mutation reads the
project, computes the new task array with the pure functions in
``projexia.utils.task_tree`` and writes the whole array back. The write is
guarded by the project's ``version``; when another writer got there first the
mutation is re-applied on a fresh read.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from projexia.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from projexia.models import Project, Task, TaskCreate, TaskPatch, UserProfile
from projexia.repositories import ProjectRepository, UserRepository
from projexia.utils.logger import get_logger
from projexia.utils.permissions import (
    can_add_subtask,
    can_toggle_task,
    is_manager,
    require_manager,
)
from projexia.utils.task_tree import (
    TaskNode,
    apply_add,
    apply_remove,
    apply_update,
    build_task_tree,
    collect_descendant_ids,
)
from projexia.utils.uuid_utils import generate_id

Mutation = Callable[[list[Task]], list[Task]]


def _find_task(tasks: list[Task], task_id: str) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


class TaskService:
    """Service for task business logic on behalf of one acting user."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        user: UserProfile,
        *,
        user_repository: UserRepository | None = None,
        conflict_retries: int = 3,
    ):
        """Initialize the task service.

        Args:
            project_repository: ProjectRepository implementation for data access
            user: Acting user; scopes every read to their company
            user_repository: Used to check that assignees exist in the company
            conflict_retries: Attempts per mutation before a ConflictError surfaces
        """
        self.repository = project_repository
        self.user = user
        self.user_repository = user_repository
        self.conflict_retries = max(1, conflict_retries)
        self.logger = get_logger()

    @property
    def company_id(self) -> str:
        return self.user.company_id

    async def get_project(self, project_id: str) -> Project:
        return await self.repository.get(self.company_id, project_id)

    async def list_tree(self, project_id: str) -> list[TaskNode]:
        """Get the project's tasks as a depth-first, indented tree."""
        project = await self.get_project(project_id)
        return build_task_tree(project.tasks)

    async def _mutate(self, project_id: str, mutation: Mutation, action: str) -> Project:
        """Apply a mutation through read-modify-write with retry on conflict.

        ``mutation`` receives the freshly read task list and returns the new
        one; it may raise to abort. When it returns the list unchanged nothing
        is written.
        """
        for attempt in range(1, self.conflict_retries + 1):
            project = await self.get_project(project_id)
            new_tasks = mutation(project.tasks)
            if new_tasks == project.tasks:
                self.logger.debug("%s: nothing to change in project %s", action, project_id)
                return project

            try:
                saved = await self.repository.replace_tasks(
                    self.company_id, project_id, new_tasks, project.version
                )
            except ConflictError:
                self.logger.warning(
                    "%s: version conflict on project %s (attempt %d/%d)",
                    action,
                    project_id,
                    attempt,
                    self.conflict_retries,
                )
                if attempt == self.conflict_retries:
                    raise
                continue

            self.logger.info("%s: project %s now at version %d", action, project_id, saved.version)
            return saved

        raise ConflictError(f"Could not {action} in project {project_id}")

    async def _check_assignee(self, assignee_id: str | None) -> None:
        if assignee_id is None or self.user_repository is None:
            return
        assignee = await self.user_repository.get(assignee_id)
        if assignee.company_id != self.company_id:
            raise NotFoundError(f"User not found: {assignee_id}")

    async def _build_task(
        self,
        name: str,
        due_date: date | None,
        assignee_id: str | None,
        parent_id: str | None,
    ) -> Task:
        form = TaskCreate(
            name=name, due_date=due_date, assignee_id=assignee_id, parent_id=parent_id
        )

        assignee = form.assignee_id
        if not is_manager(self.user):
            if assignee is not None and assignee != self.user.id:
                raise PermissionDeniedError(
                    "Only admins and scrum-masters can assign tasks to other users"
                )
            assignee = self.user.id
        await self._check_assignee(assignee)

        return Task(
            id=generate_id(),
            name=form.name,
            completed=False,
            due_date=form.due_date or date.today(),
            assignee_id=assignee,
            parent_id=form.parent_id,
        )

    async def add_task(
        self,
        project_id: str,
        name: str,
        *,
        due_date: date | None = None,
        assignee_id: str | None = None,
    ) -> Task:
        """Add a root task to a project.

        Args:
            project_id: Project to add the task to
            name: Task name (must not be blank)
            due_date: Due date, today when omitted
            assignee_id: Assignee; non-managers always get the task themselves

        Returns:
            The created Task
        """
        new_task = await self._build_task(name, due_date, assignee_id, None)
        await self._mutate(
            project_id, lambda tasks: apply_add(tasks, new_task), "add task"
        )
        return new_task

    async def add_subtask(
        self,
        project_id: str,
        parent_id: str,
        name: str,
        *,
        due_date: date | None = None,
        assignee_id: str | None = None,
    ) -> Task:
        """Add a task under an existing parent task.

        Raises:
            NotFoundError: If the parent task is not in the project
            PermissionDeniedError: If the user may not add subtasks under the parent
        """
        new_task = await self._build_task(name, due_date, assignee_id, parent_id)

        def mutation(tasks: list[Task]) -> list[Task]:
            parent = _find_task(tasks, parent_id)
            if parent is None:
                raise NotFoundError(f"Parent task not found: {parent_id}")
            if not can_add_subtask(self.user, parent):
                raise PermissionDeniedError(
                    "Only managers and the task's assignee can add subtasks to it"
                )
            return apply_add(tasks, new_task)

        await self._mutate(project_id, mutation, "add subtask")
        return new_task

    async def set_completed(
        self, project_id: str, task_id: str, completed: bool
    ) -> Task | None:
        """Mark a task done or not done.

        Returns:
            The updated Task, or None if no task has this id
        """

        def mutation(tasks: list[Task]) -> list[Task]:
            task = _find_task(tasks, task_id)
            if task is None:
                return tasks
            if not can_toggle_task(self.user, task):
                raise PermissionDeniedError(
                    "Only managers and the task's assignee can change its status"
                )
            return apply_update(tasks, task_id, TaskPatch(completed=completed))

        project = await self._mutate(project_id, mutation, "update task status")
        return _find_task(project.tasks, task_id)

    async def toggle_task(self, project_id: str, task_id: str) -> Task | None:
        """Flip a task's completion status.

        Returns:
            The updated Task, or None if no task has this id
        """

        def mutation(tasks: list[Task]) -> list[Task]:
            task = _find_task(tasks, task_id)
            if task is None:
                return tasks
            if not can_toggle_task(self.user, task):
                raise PermissionDeniedError(
                    "Only managers and the task's assignee can change its status"
                )
            return apply_update(tasks, task_id, TaskPatch(completed=not task.completed))

        project = await self._mutate(project_id, mutation, "toggle task")
        return _find_task(project.tasks, task_id)

    async def assign_task(
        self, project_id: str, task_id: str, assignee_id: str | None
    ) -> Task | None:
        """Assign a task to a user, or unassign it with ``assignee_id=None``."""
        require_manager(self.user, "assign tasks")
        await self._check_assignee(assignee_id)

        project = await self._mutate(
            project_id,
            lambda tasks: apply_update(tasks, task_id, TaskPatch(assignee_id=assignee_id)),
            "assign task",
        )
        return _find_task(project.tasks, task_id)

    async def rename_task(self, project_id: str, task_id: str, name: str) -> Task | None:
        """Rename a task."""
        require_manager(self.user, "rename tasks")
        name = name.strip()
        if not name:
            raise ValueError("Task name must not be empty")

        project = await self._mutate(
            project_id,
            lambda tasks: apply_update(tasks, task_id, TaskPatch(name=name)),
            "rename task",
        )
        return _find_task(project.tasks, task_id)

    async def remove_task(self, project_id: str, task_id: str) -> set[str]:
        """Remove a task together with all of its descendants.

        Returns:
            IDs that were removed (empty if the task did not exist)
        """
        require_manager(self.user, "remove tasks")

        removed: set[str] = set()

        def mutation(tasks: list[Task]) -> list[Task]:
            removed.clear()
            if _find_task(tasks, task_id) is None:
                return tasks
            removed.update(collect_descendant_ids(task_id, tasks))
            return apply_remove(tasks, task_id)

        await self._mutate(project_id, mutation, "remove task")
        return removed


async def get_task_service() -> TaskService:
    """Factory function to get a TaskService for the active user."""
    from projexia.services.config_service import get_config_service

    config_service = get_config_service()
    context = config_service.storage_strategy_context
    user = await config_service.get_current_user()
    return TaskService(
        context.project_repository,
        user,
        user_repository=context.user_repository,
        conflict_retries=config_service.config.store.conflict_retries,
    )
