"""Task data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from taskman_cli.utils.dates import ensure_utc, utc_now


class TaskStatus(str, Enum):
    """Lifecycle status of a task. Transitions are unrestricted."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        """Human readable name."""
        return _STATUS_LABELS[self]

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


_STATUS_LABELS = {
    TaskStatus.TODO: "Todo",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
}


class Task(BaseModel):
    """Task model representing a complete task entity.

    Serialized with camelCase keys (``createdAt``, ``dueDate``) so the data
    file keeps its established shape; Python code uses snake_case names.

    Attributes:
        id: Unique identifier, immutable once generated
        title: Trimmed, non-blank title
        description: Optional detailed description
        status: Current status, ``todo`` on creation
        created_at: Creation timestamp
        updated_at: Last mutation timestamp
        due_date: Optional due date
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime
    updated_at: datetime
    due_date: datetime | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value: object) -> object:
        # Files written by hand or older versions store "" for "no due date"
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("created_at", "updated_at", "due_date")
    @classmethod
    def _normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    def has_description(self) -> bool:
        """True when the task carries a non-blank description."""
        return bool(self.description and self.description.strip())

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Due strictly before ``now`` and not completed."""
        if self.due_date is None or self.status == TaskStatus.COMPLETED:
            return False
        return self.due_date < (now or utc_now())

    def to_json_dict(self) -> dict:
        """Return the on-disk representation of this task."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required, validated by the service)
        description: Optional detailed description
        due_date: Optional due date
    """

    title: str
    description: str | None = None
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only fields that were explicitly provided are
    merged over the stored task. Passing ``due_date=None`` explicitly clears
    the due date.
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class TaskFilters(BaseModel):
    """Filters for querying tasks. All provided criteria must match.

    Attributes:
        status: Exact status match
        has_description: Require (True) or forbid (False) a non-blank description
        due_before: Exclude tasks due strictly later than this
        due_after: Exclude tasks due strictly earlier than this
        overdue: Keep only overdue tasks when True
    """

    status: TaskStatus | None = None
    has_description: bool | None = None
    due_before: datetime | None = None
    due_after: datetime | None = None
    overdue: bool = False

    @field_validator("due_before", "due_after")
    @classmethod
    def _normalize_bounds(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class TaskStats(BaseModel):
    """Aggregate counts over the task collection."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completion_rate(self) -> int:
        """Completed tasks as a rounded percentage of all tasks."""
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)


class FileInfo(BaseModel):
    """Metadata about the task data file."""

    path: str
    exists: bool
    size: int
    last_modified: datetime
    task_count: int
