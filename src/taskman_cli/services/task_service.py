"""Task service - Business logic for task operations.

This service layer sits between commands and the task store. It keeps the
whole collection in memory, applies every business rule there, and writes the
full collection back to the store after each mutation.

Every public operation returns a ``Result``; no exception crosses the service
boundary. When a save fails the in-memory change is kept and the caller gets
a failure result, so memory and disk can disagree until the next successful
save.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from taskman_cli.models import (
    ErrorCode,
    Result,
    Task,
    TaskCreate,
    TaskFilters,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)
from taskman_cli.repositories import TaskStore, TaskStoreError
from taskman_cli.utils.dates import utc_now
from taskman_cli.utils.id_utils import generate_task_id
from taskman_cli.utils.logger import get_logger

if TYPE_CHECKING:
    from taskman_cli.adapters.json_file import JsonTaskStore


class ServiceState(Enum):
    """Load state of a TaskService."""

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


def is_task_overdue(task: Task, now: datetime | None = None) -> bool:
    """A task is overdue when it has a due date strictly in the past and is
    not completed."""
    return task.is_overdue(now)


def apply_filters(
    tasks: list[Task], filters: TaskFilters, now: datetime | None = None
) -> list[Task]:
    """Return the tasks matching every provided criterion.

    Tasks without a due date are never excluded by ``due_before`` or
    ``due_after``.
    """
    now = now or utc_now()
    matched = []
    for task in tasks:
        if filters.status is not None and task.status != filters.status:
            continue
        if (
            filters.has_description is not None
            and task.has_description() != filters.has_description
        ):
            continue
        if filters.due_before and task.due_date and task.due_date > filters.due_before:
            continue
        if filters.due_after and task.due_date and task.due_date < filters.due_after:
            continue
        if filters.overdue and not task.is_overdue(now):
            continue
        matched.append(task)
    return matched


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip() or None


class TaskService:
    """Service for task business logic.

    Instances own their in-memory collection and a handle to the store. The
    collection is loaded lazily, once, by the first operation.
    """

    def __init__(self, store: TaskStore):
        """Initialize the task service.

        Args:
            store: TaskStore implementation for persistence
        """
        self.store = store
        self.tasks: list[Task] = []
        self.state = ServiceState.UNINITIALIZED
        self.logger = get_logger()

    async def initialize(self) -> None:
        """Load tasks from the store unless already loaded."""
        if self.state is ServiceState.LOADED:
            return
        self.tasks = await self.store.load()
        self.state = ServiceState.LOADED

    async def _persist(self) -> None:
        if not await self.store.save(self.tasks):
            raise TaskStoreError("Failed to save tasks")

    def _failure(self, message: str, error: Exception) -> Result:
        self.logger.error("%s: %s", message, error, exc_info=error)
        return Result.fail(message, error=str(error) or type(error).__name__)

    def _find_index(self, task_id: str) -> int:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return -1

    async def create_task(self, task_data: TaskCreate) -> Result[Task]:
        """Create a new task.

        Args:
            task_data: Title (required), description and due date

        Returns:
            Result carrying the created Task, or INVALID_TITLE for a blank
            title
        """
        try:
            await self.initialize()

            title = task_data.title.strip()
            if not title:
                return Result.fail("Task title cannot be empty", ErrorCode.INVALID_TITLE)

            now = utc_now()
            task = Task(
                id=generate_task_id(),
                title=title,
                description=_clean_description(task_data.description),
                status=TaskStatus.TODO,
                created_at=now,
                updated_at=now,
                due_date=task_data.due_date,
            )
            self.tasks.append(task)
            await self._persist()

            self.logger.info("created task %s", task.id)
            return Result.ok("Task created successfully", task)
        except Exception as e:
            return self._failure("Error when creating task", e)

    async def get_all_tasks(self, filters: TaskFilters | None = None) -> Result[list[Task]]:
        """List tasks, newest first.

        Args:
            filters: Optional criteria, all of which must match

        Returns:
            Result carrying a new list; the stored collection is not touched
        """
        try:
            await self.initialize()

            tasks = list(self.tasks)
            if filters is not None:
                tasks = apply_filters(tasks, filters)
            tasks.sort(key=lambda t: t.created_at, reverse=True)

            return Result.ok(f"Found {len(tasks)} tasks", tasks)
        except Exception as e:
            return self._failure("Error when getting all tasks", e)

    async def get_task_by_id(self, task_id: str) -> Result[Task]:
        """Get a specific task by ID.

        Returns:
            Result carrying the Task, or TASK_NOT_FOUND
        """
        try:
            await self.initialize()

            index = self._find_index(task_id)
            if index == -1:
                return Result.fail("Cannot find specified task", ErrorCode.TASK_NOT_FOUND)
            return Result.ok("Successfully got the task", self.tasks[index])
        except Exception as e:
            return self._failure("Error when getting task by ID", e)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Result[Task]:
        """Update an existing task.

        Only the fields set on ``updates`` are changed. Title and description
        are trimmed; ``updated_at`` is always refreshed.

        Args:
            task_id: Task ID to update
            updates: Fields to change

        Returns:
            Result carrying the updated Task, TASK_NOT_FOUND for an unknown
            ID, or INVALID_TITLE for a blank title
        """
        try:
            await self.initialize()

            index = self._find_index(task_id)
            if index == -1:
                return Result.fail("Cannot find specified task", ErrorCode.TASK_NOT_FOUND)

            changes = updates.model_dump(exclude_unset=True)
            if "title" in changes:
                title = (changes["title"] or "").strip()
                if not title:
                    return Result.fail(
                        "Task title cannot be empty", ErrorCode.INVALID_TITLE
                    )
                changes["title"] = title
            if "description" in changes:
                changes["description"] = _clean_description(changes["description"])
            if "status" in changes and changes["status"] is None:
                del changes["status"]
            changes["updated_at"] = utc_now()

            current = self.tasks[index]
            updated = current.model_validate({**current.model_dump(), **changes})
            self.tasks[index] = updated
            await self._persist()

            self.logger.info("updated task %s (%s)", task_id, ", ".join(sorted(changes)))
            return Result.ok("Task updated successfully", updated)
        except Exception as e:
            return self._failure("Error when updating task", e)

    async def delete_task(self, task_id: str) -> Result[bool]:
        """Delete a task.

        Returns:
            Result carrying True, or TASK_NOT_FOUND
        """
        try:
            await self.initialize()

            index = self._find_index(task_id)
            if index == -1:
                return Result.fail("Cannot find specified task", ErrorCode.TASK_NOT_FOUND)

            deleted = self.tasks.pop(index)
            await self._persist()

            self.logger.info("deleted task %s", task_id)
            return Result.ok(f'Task "{deleted.title}" has been deleted', True)
        except Exception as e:
            return self._failure("Error when deleting task", e)

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Result[Task]:
        """Change only the status of a task."""
        return await self.update_task(task_id, TaskUpdate(status=status))

    async def get_task_stats(self) -> Result[TaskStats]:
        """Count tasks by status and how many are overdue."""
        try:
            await self.initialize()

            now = utc_now()
            stats = TaskStats(
                total=len(self.tasks),
                todo=sum(1 for t in self.tasks if t.status == TaskStatus.TODO),
                in_progress=sum(
                    1 for t in self.tasks if t.status == TaskStatus.IN_PROGRESS
                ),
                completed=sum(1 for t in self.tasks if t.status == TaskStatus.COMPLETED),
                overdue=sum(1 for t in self.tasks if is_task_overdue(t, now)),
            )
            return Result.ok("Successfully got task stats", stats)
        except Exception as e:
            return self._failure("Error when getting task stats", e)


def get_task_store() -> JsonTaskStore:
    """Build the JSON file store at the configured path."""
    from taskman_cli.adapters.json_file import JsonTaskStore
    from taskman_cli.services.config_service import get_config_service

    return JsonTaskStore(get_config_service().tasks_file)


def get_task_service() -> TaskService:
    """Build a TaskService backed by the configured store."""
    return TaskService(get_task_store())
