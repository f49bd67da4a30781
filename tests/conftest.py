"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories.
"""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
from datetime import datetime

import pytest

from taskman_cli.adapters.json_file import JsonTaskStore
from taskman_cli.models import Task, TaskStatus
from taskman_cli.services.task_service import TaskService


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _reset_logger() -> None:
    import taskman_cli.utils.logger as logger_mod

    logger_mod._logger = None
    existing = logging.getLogger("taskman_cli")
    for handler in list(existing.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            existing.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point platformdirs at *tmp_path* and reset cached singletons.

    Config lands in tmp_path/config, data in tmp_path/data and logs in
    tmp_path/logs.
    """
    from taskman_cli.services.config_service import TASKS_FILE_ENV, get_config_service
    from taskman_cli.utils.ui.console import apply_color_setting

    monkeypatch.setattr(
        "taskman_cli.services.config_service.user_config_dir",
        lambda *args, **kwargs: str(tmp_path / "config"),
    )
    monkeypatch.setattr(
        "taskman_cli.services.config_service.user_data_dir",
        lambda *args, **kwargs: str(tmp_path / "data"),
    )
    monkeypatch.setattr(
        "taskman_cli.utils.logger.user_log_dir",
        lambda *args, **kwargs: str(tmp_path / "logs"),
    )
    monkeypatch.delenv(TASKS_FILE_ENV, raising=False)
    # Wide terminal so Rich does not wrap asserted lines
    monkeypatch.setenv("COLUMNS", "200")

    _reset_logger()
    get_config_service.cache_clear()
    yield tmp_path
    get_config_service.cache_clear()
    _reset_logger()
    apply_color_setting(True)


# ---------------------------------------------------------------------------
# Task helpers
# ---------------------------------------------------------------------------


def build_task(
    task_id: str = "task_abc_001",
    title: str = "Buy milk",
    *,
    description: str | None = None,
    status: TaskStatus = TaskStatus.TODO,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
    due_date: datetime | None = None,
) -> Task:
    created_at = created_at or datetime(2024, 1, 1, 12, 0, 0)
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        created_at=created_at,
        updated_at=updated_at or created_at,
        due_date=due_date,
    )


@pytest.fixture()
def tasks_file(tmp_path):
    """Path of the tasks file the CLI uses under the isolated data dir."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def store(tasks_file):
    return JsonTaskStore(tasks_file)


@pytest.fixture()
def service(store):
    return TaskService(store)


@pytest.fixture()
def seed(store):
    """Write tasks to the isolated tasks file from synchronous tests."""

    def _seed(*tasks: Task) -> list[Task]:
        assert asyncio.run(store.save(list(tasks)))
        return list(tasks)

    return _seed


@pytest.fixture()
def stored_tasks(store):
    """Read back the isolated tasks file from synchronous tests."""

    def _read() -> list[Task]:
        return asyncio.run(store.load())

    return _read


@pytest.fixture()
def make_task():
    """Factory for Task objects with sensible defaults."""
    return build_task
