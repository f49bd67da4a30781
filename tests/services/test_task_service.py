"""Unit tests for TaskService.

The service runs against a real JsonTaskStore in a temp directory, except
where a failing store is simulated with AsyncMock.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskman_cli.models import ErrorCode, TaskCreate, TaskFilters, TaskStatus, TaskUpdate
from taskman_cli.services.task_service import (
    ServiceState,
    TaskService,
    apply_filters,
    is_task_overdue,
)
from taskman_cli.utils.id_utils import is_valid_task_id

PAST = datetime(2020, 1, 1, tzinfo=UTC)
FUTURE = datetime(2999, 1, 1, tzinfo=UTC)


def _mock_store(tasks=None, save_result=True):
    store = MagicMock()
    store.load = AsyncMock(return_value=list(tasks or []))
    store.save = AsyncMock(return_value=save_result)
    return store


# ---------------------------------------------------------------------------
# initialize
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_initialize_loads_once(make_task):
    store = _mock_store([make_task()])
    service = TaskService(store)
    assert service.state is ServiceState.UNINITIALIZED

    await service.get_all_tasks()
    await service.get_task_stats()
    await service.get_task_by_id("task_abc_001")

    store.load.assert_awaited_once()
    assert service.state is ServiceState.LOADED
    assert len(service.tasks) == 1


# ---------------------------------------------------------------------------
# create_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_then_get_returns_same_task(service):
    due = datetime(2024, 7, 1, tzinfo=UTC)
    created = await service.create_task(
        TaskCreate(title="  Write report  ", description=" Q3 numbers ", due_date=due)
    )

    assert created.success
    task = created.data
    assert task.title == "Write report"
    assert task.description == "Q3 numbers"
    assert task.status == TaskStatus.TODO
    assert task.due_date == due
    assert task.created_at == task.updated_at
    assert is_valid_task_id(task.id)

    fetched = await service.get_task_by_id(task.id)
    assert fetched.success
    assert fetched.data == task


@pytest.mark.asyncio
async def test_create_persists_full_collection(service, store):
    await service.create_task(TaskCreate(title="One"))
    await service.create_task(TaskCreate(title="Two"))

    reloaded = await store.load()
    assert [t.title for t in reloaded] == ["One", "Two"]


@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
async def test_create_blank_title_fails_without_changes(service, store, title):
    result = await service.create_task(TaskCreate(title=title))

    assert not result.success
    assert result.error == ErrorCode.INVALID_TITLE
    assert result.error_code is ErrorCode.INVALID_TITLE
    assert service.tasks == []
    assert await store.load() == []


@pytest.mark.asyncio
async def test_create_blank_description_is_dropped(service):
    result = await service.create_task(TaskCreate(title="Task", description="   "))
    assert result.data.description is None


@pytest.mark.asyncio
async def test_create_save_failure_keeps_task_in_memory():
    store = _mock_store(save_result=False)
    service = TaskService(store)

    result = await service.create_task(TaskCreate(title="Unsaved"))

    assert not result.success
    assert result.message == "Error when creating task"
    assert result.error == "Failed to save tasks"
    # No rollback: memory and disk now disagree
    assert [t.title for t in service.tasks] == ["Unsaved"]


@pytest.mark.asyncio
async def test_unexpected_store_error_becomes_failure_result():
    store = MagicMock()
    store.load = AsyncMock(side_effect=RuntimeError("disk on fire"))
    service = TaskService(store)

    result = await service.get_all_tasks()

    assert not result.success
    assert result.message == "Error when getting all tasks"
    assert result.error == "disk on fire"
    assert result.error_code is None


# ---------------------------------------------------------------------------
# get_all_tasks / filters
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_all_tasks_sorts_newest_first(make_task):
    tasks = [
        make_task("task_a_001", "Old", created_at=datetime(2024, 1, 1)),
        make_task("task_c_001", "New", created_at=datetime(2024, 3, 1)),
        make_task("task_b_001", "Mid", created_at=datetime(2024, 2, 1)),
    ]
    service = TaskService(_mock_store(tasks))

    result = await service.get_all_tasks()

    assert result.success
    assert result.message == "Found 3 tasks"
    assert [t.title for t in result.data] == ["New", "Mid", "Old"]
    # The stored order is untouched
    assert [t.title for t in service.tasks] == ["Old", "New", "Mid"]


@pytest.mark.asyncio
async def test_get_all_tasks_returns_a_copy(make_task):
    service = TaskService(_mock_store([make_task()]))
    result = await service.get_all_tasks()
    result.data.clear()
    assert len(service.tasks) == 1


@pytest.mark.asyncio
async def test_due_before_filter_returns_earlier_tasks(make_task):
    tasks = [
        make_task("task_a_001", "January", due_date=datetime(2024, 1, 1)),
        make_task("task_b_001", "June", due_date=datetime(2024, 6, 1)),
        make_task("task_c_001", "December", due_date=datetime(2024, 12, 1)),
    ]
    service = TaskService(_mock_store(tasks))

    result = await service.get_all_tasks(TaskFilters(due_before=datetime(2024, 7, 1)))

    assert sorted(t.title for t in result.data) == ["January", "June"]


def test_due_after_filter_excludes_earlier_tasks(make_task):
    tasks = [
        make_task("task_a_001", "January", due_date=datetime(2024, 1, 1)),
        make_task("task_b_001", "June", due_date=datetime(2024, 6, 1)),
    ]
    result = apply_filters(tasks, TaskFilters(due_after=datetime(2024, 3, 1)))
    assert [t.title for t in result] == ["June"]


def test_date_filters_keep_tasks_without_due_date(make_task):
    tasks = [
        make_task("task_a_001", "No due date"),
        make_task("task_b_001", "Late", due_date=datetime(2024, 12, 1)),
    ]
    filters = TaskFilters(due_before=datetime(2024, 7, 1), due_after=datetime(2024, 1, 1))
    assert [t.title for t in apply_filters(tasks, filters)] == ["No due date"]


def test_has_description_filter(make_task):
    tasks = [
        make_task("task_a_001", "With", description="details"),
        make_task("task_b_001", "Blank", description="   "),
        make_task("task_c_001", "Absent"),
    ]

    without = apply_filters(tasks, TaskFilters(has_description=False))
    with_desc = apply_filters(tasks, TaskFilters(has_description=True))

    assert [t.title for t in without] == ["Blank", "Absent"]
    assert [t.title for t in with_desc] == ["With"]


def test_filters_are_conjunctive(make_task):
    tasks = [
        make_task("task_a_001", "Todo with desc", description="x"),
        make_task("task_b_001", "Done with desc", description="x", status=TaskStatus.COMPLETED),
        make_task("task_c_001", "Todo no desc"),
    ]
    filters = TaskFilters(status=TaskStatus.TODO, has_description=True)
    assert [t.title for t in apply_filters(tasks, filters)] == ["Todo with desc"]


def test_overdue_filter(make_task):
    tasks = [
        make_task("task_a_001", "Late", due_date=PAST),
        make_task("task_b_001", "Late but done", due_date=PAST, status=TaskStatus.COMPLETED),
        make_task("task_c_001", "Later", due_date=FUTURE),
        make_task("task_d_001", "Whenever"),
    ]
    assert [t.title for t in apply_filters(tasks, TaskFilters(overdue=True))] == ["Late"]


# ---------------------------------------------------------------------------
# get_task_by_id
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_task_by_id_not_found(make_task):
    service = TaskService(_mock_store([make_task()]))
    result = await service.get_task_by_id("task_missing_000")
    assert not result.success
    assert result.error == ErrorCode.TASK_NOT_FOUND
    assert result.data is None


# ---------------------------------------------------------------------------
# update_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_merges_only_provided_fields(monkeypatch, make_task):
    original = make_task(description="keep me", due_date=datetime(2024, 5, 1))
    store = _mock_store([original])
    service = TaskService(store)
    later = datetime(2024, 2, 1, tzinfo=UTC)
    monkeypatch.setattr("taskman_cli.services.task_service.utc_now", lambda: later)

    result = await service.update_task(
        original.id, TaskUpdate(status=TaskStatus.IN_PROGRESS)
    )

    assert result.success
    updated = result.data
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.title == original.title
    assert updated.description == "keep me"
    assert updated.due_date == original.due_date
    assert updated.created_at == original.created_at
    assert updated.updated_at == later
    assert service.tasks[0] == updated
    store.save.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_trims_title_and_description(make_task):
    service = TaskService(_mock_store([make_task()]))
    result = await service.update_task(
        "task_abc_001", TaskUpdate(title="  Buy oat milk ", description=" two cartons ")
    )
    assert result.data.title == "Buy oat milk"
    assert result.data.description == "two cartons"


@pytest.mark.asyncio
async def test_update_can_clear_due_date(make_task):
    service = TaskService(_mock_store([make_task(due_date=datetime(2024, 5, 1))]))
    result = await service.update_task("task_abc_001", TaskUpdate(due_date=None))
    assert result.data.due_date is None


@pytest.mark.asyncio
async def test_update_unknown_id_fails_without_changes(make_task):
    store = _mock_store([make_task()])
    service = TaskService(store)
    await service.initialize()
    before = list(service.tasks)

    result = await service.update_task("task_missing_000", TaskUpdate(title="New"))

    assert not result.success
    assert result.error == ErrorCode.TASK_NOT_FOUND
    assert service.tasks == before
    store.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_blank_title_fails(make_task):
    store = _mock_store([make_task()])
    service = TaskService(store)

    result = await service.update_task("task_abc_001", TaskUpdate(title="   "))

    assert not result.success
    assert result.error == ErrorCode.INVALID_TITLE
    assert service.tasks[0].title == "Buy milk"
    store.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_task_status_delegates_to_update(make_task):
    service = TaskService(_mock_store([make_task()]))
    result = await service.update_task_status("task_abc_001", TaskStatus.COMPLETED)
    assert result.success
    assert result.data.status == TaskStatus.COMPLETED


@pytest.mark.asyncio
async def test_update_save_failure_reports_error(make_task):
    service = TaskService(_mock_store([make_task()], save_result=False))
    result = await service.update_task("task_abc_001", TaskUpdate(title="New"))
    assert not result.success
    assert result.message == "Error when updating task"
    assert service.tasks[0].title == "New"


# ---------------------------------------------------------------------------
# delete_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_removes_exactly_one(service, store):
    first = (await service.create_task(TaskCreate(title="First"))).data
    await service.create_task(TaskCreate(title="Second"))

    result = await service.delete_task(first.id)

    assert result.success
    assert result.data is True
    assert result.message == 'Task "First" has been deleted'
    assert len(service.tasks) == 1
    assert [t.title for t in await store.load()] == ["Second"]

    missing = await service.get_task_by_id(first.id)
    assert missing.error == ErrorCode.TASK_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_unknown_id(make_task):
    store = _mock_store([make_task()])
    service = TaskService(store)
    result = await service.delete_task("task_missing_000")
    assert result.error == ErrorCode.TASK_NOT_FOUND
    assert len(service.tasks) == 1
    store.save.assert_not_awaited()


# ---------------------------------------------------------------------------
# get_task_stats
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_stats_excludes_completed_from_overdue(make_task):
    tasks = [
        make_task("task_a_001", "Todo"),
        make_task("task_b_001", "Doing", status=TaskStatus.IN_PROGRESS, due_date=PAST),
        make_task("task_c_001", "Done", status=TaskStatus.COMPLETED, due_date=PAST),
    ]
    service = TaskService(_mock_store(tasks))

    result = await service.get_task_stats()

    assert result.success
    stats = result.data
    assert (stats.total, stats.todo, stats.in_progress, stats.completed, stats.overdue) == (
        3,
        1,
        1,
        1,
        1,
    )
    assert stats.completion_rate == 33


@pytest.mark.asyncio
async def test_stats_empty_collection():
    service = TaskService(_mock_store())
    stats = (await service.get_task_stats()).data
    assert stats.total == 0
    assert stats.completion_rate == 0


def test_is_task_overdue_uses_strict_comparison(make_task):
    due = datetime(2024, 6, 1, tzinfo=UTC)
    task = make_task(due_date=due)
    assert not is_task_overdue(task, now=due)
    assert is_task_overdue(task, now=due + timedelta(seconds=1))
