"""Task hierarchy utilities.

A project's tasks are stored as one flat array where each task may point at
its parent through ``parent_id``. This module turns that array into an
indented, depth-first view and computes the new array for every mutation.
All functions are pure: they never modify their input and never raise for
well-typed input.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from projexia.models import Task, TaskPatch


class TaskNode(NamedTuple):
    """A task together with its nesting level in the flattened tree."""

    task: Task
    level: int


def _collation_key(name: str) -> str:
    """Case- and accent-insensitive form of a name ('École' sorts as 'ecole')."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _sibling_key(task: Task) -> tuple[str, str, str]:
    """Sort key for siblings: collated name, then raw name, then id."""
    name = task.name or ""
    return (_collation_key(name), name, task.id)


def build_task_tree(tasks: Iterable[Task]) -> list[TaskNode]:
    """Flatten a task list into a depth-first, name-sorted tree view.

    Roots are tasks without a ``parent_id`` or whose ``parent_id`` does not
    match any task in the list. Siblings are ordered by name (then id) at every
    level, and each child directly follows its parent with ``level + 1``.

    When the same id appears more than once the last occurrence wins.

    Tasks caught in a ``parent_id`` cycle are never reachable from a root. They
    are emitted after the regular forest: the first unvisited task in sibling
    order is promoted to level 0 together with its subtree, until every task
    has been emitted once.

    Args:
        tasks: Tasks in any order (may be empty)

    Returns:
        List of TaskNode in display order
    """
    by_id: dict[str, Task] = {}
    for task in tasks:
        by_id[task.id] = task

    children: dict[str, list[Task]] = {task_id: [] for task_id in by_id}
    roots: list[Task] = []
    for task in by_id.values():
        if task.parent_id is not None and task.parent_id in by_id:
            children[task.parent_id].append(task)
        else:
            roots.append(task)

    nodes: list[TaskNode] = []
    visited: set[str] = set()

    def emit(start: Task) -> None:
        # Explicit stack: deep chains must not hit the recursion limit
        stack = [(start, 0)]
        while stack:
            task, level = stack.pop()
            if task.id in visited:
                continue
            visited.add(task.id)
            nodes.append(TaskNode(task, level))
            for child in sorted(children[task.id], key=_sibling_key, reverse=True):
                stack.append((child, level + 1))

    for root in sorted(roots, key=_sibling_key):
        emit(root)

    if len(visited) < len(by_id):
        for task in sorted(by_id.values(), key=_sibling_key):
            if task.id not in visited:
                emit(task)

    return nodes


def collect_descendant_ids(target_id: str, tasks: Iterable[Task]) -> set[str]:
    """Collect a task id together with the ids of all its descendants.

    Uses fixed-point iteration over the flat list, so no tree has to be built
    and the loop ends even when ``parent_id`` links form a cycle.

    Args:
        target_id: ID of the task being removed
        tasks: Full flat task list of the project

    Returns:
        Set of ids to remove; always contains ``target_id``
    """
    task_list = list(tasks)
    result = {target_id}

    changed = True
    while changed:
        changed = False
        for task in task_list:
            if task.id not in result and task.parent_id in result:
                result.add(task.id)
                changed = True

    return result


def _patch_values(patch: TaskPatch | Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(patch, TaskPatch):
        patch = TaskPatch.model_validate(dict(patch))
    return patch.model_dump(exclude_unset=True)


def apply_add(tasks: Iterable[Task], new_task: Task) -> list[Task]:
    """Return a new task list with ``new_task`` appended.

    The caller is responsible for giving ``new_task`` a unique id.
    """
    return [*tasks, new_task]


def apply_update(
    tasks: Iterable[Task],
    task_id: str,
    patch: TaskPatch | Mapping[str, Any],
) -> list[Task]:
    """Return a new task list with the matching task merged with ``patch``.

    Args:
        tasks: Current task list
        task_id: ID of the task to update
        patch: TaskPatch or mapping (snake_case or camelCase keys); only the
            fields present are applied

    Returns:
        New task list; equal to the input when ``task_id`` is not found
    """
    values = _patch_values(patch)
    return [
        task.model_copy(update=values) if task.id == task_id else task
        for task in tasks
    ]


def apply_remove(tasks: Iterable[Task], task_id: str) -> list[Task]:
    """Return a new task list without the task and all of its descendants."""
    task_list = list(tasks)
    doomed = collect_descendant_ids(task_id, task_list)
    return [task for task in task_list if task.id not in doomed]


def calculate_progress(tasks: Iterable[Task]) -> float:
    """Percentage of completed tasks (0.0 for an empty list)."""
    task_list = list(tasks)
    if not task_list:
        return 0.0
    completed = sum(1 for task in task_list if task.completed)
    return completed / len(task_list) * 100
