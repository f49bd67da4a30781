"""JSON file implementation of TaskStore.

The whole collection lives in one pretty-printed JSON array. Every save
rewrites the file; concurrent processes writing the same file race and the
last writer wins.
"""

from __future__ import annotations

import json
import os
import shutil
from datetime import UTC, datetime
from pathlib import Path

from pydantic import TypeAdapter

from taskman_cli.models import FileInfo, Task
from taskman_cli.repositories import TaskStore
from taskman_cli.utils.dates import utc_now
from taskman_cli.utils.logger import get_logger

_TASK_LIST = TypeAdapter(list[Task])

BACKUP_PREFIX = "tasks_backup_"


class JsonTaskStore(TaskStore):
    """Task store backed by a single JSON file."""

    def __init__(self, path: str | Path):
        """Initialize the store.

        Args:
            path: Location of the tasks file. The parent directory and the
                file itself are created on first access.
        """
        self.path = Path(path)
        self.logger = get_logger()

    def _ensure_file(self) -> None:
        """Create the data directory and an empty task list if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text("[]", encoding="utf-8")

    async def load(self) -> list[Task]:
        try:
            self._ensure_file()
            data = self.path.read_text(encoding="utf-8")
            tasks = _TASK_LIST.validate_json(data)
        except (OSError, ValueError) as e:
            self.logger.error("failed to load tasks from %s: %s", self.path, e)
            return []
        self.logger.debug("loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    async def save(self, tasks: list[Task]) -> bool:
        try:
            self._ensure_file()
            data = _TASK_LIST.dump_json(
                tasks, indent=2, by_alias=True, exclude_none=True
            )
            self.path.write_bytes(data)
        except (OSError, ValueError) as e:
            self.logger.error("failed to save tasks to %s: %s", self.path, e)
            return False
        self.logger.debug("saved %d tasks to %s", len(tasks), self.path)
        return True

    def backup_path(self, when: datetime | None = None) -> Path:
        """Path of the backup file for a given moment."""
        stamp = (when or utc_now()).isoformat().replace(":", "-").replace(".", "-")
        return self.path.parent / f"{BACKUP_PREFIX}{stamp}.json"

    async def backup(self) -> bool:
        if not self.path.exists():
            return True

        try:
            target = self.backup_path()
            shutil.copy2(self.path, target)
        except OSError as e:
            self.logger.error("failed to back up %s: %s", self.path, e)
            return False
        self.logger.info("backed up tasks to %s", target)
        return True

    async def check_health(self) -> bool:
        try:
            self._ensure_file()
            if not os.access(self.path, os.R_OK | os.W_OK):
                raise PermissionError(f"{self.path} is not readable and writable")
            json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.error("health check failed for %s: %s", self.path, e)
            return False
        return True

    async def get_file_info(self) -> FileInfo | None:
        try:
            self._ensure_file()
            stat = self.path.stat()
        except OSError as e:
            self.logger.error("failed to stat %s: %s", self.path, e)
            return None

        tasks = await self.load()
        return FileInfo(
            path=str(self.path),
            exists=True,
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, UTC),
            task_count=len(tasks),
        )
