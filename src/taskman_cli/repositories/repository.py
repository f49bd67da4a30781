"""Repository abstraction layer for taskman-cli.

The task store is treated as a blob store for the whole collection: it loads
every task at once and saves every task at once. The service layer owns all
business rules; stores only move bytes.

Stores never raise for I/O problems. ``load`` degrades to an empty list and
the remaining operations report failure through their return value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskman_cli.models import FileInfo, Task


class TaskStoreError(Exception):
    """Raised by the service layer when the store reports a failed write."""


class TaskStore(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def load(self) -> list[Task]:
        """Load the full task collection.

        Returns:
            All stored tasks, or an empty list if the data cannot be read

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.load() must be implemented by adapter")

    @abstractmethod
    async def save(self, tasks: list[Task]) -> bool:
        """Replace the stored collection with ``tasks``.

        Args:
            tasks: The complete collection to persist

        Returns:
            True if the write succeeded

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.save() must be implemented by adapter")

    @abstractmethod
    async def backup(self) -> bool:
        """Copy the current data to a timestamped backup.

        Returns:
            True on success, including when there is nothing to back up

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.backup() must be implemented by adapter")

    @abstractmethod
    async def check_health(self) -> bool:
        """Verify the backing data is accessible and parseable.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.check_health() must be implemented by adapter"
        )

    @abstractmethod
    async def get_file_info(self) -> FileInfo | None:
        """Describe the backing data, or None if it cannot be inspected.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.get_file_info() must be implemented by adapter"
        )
