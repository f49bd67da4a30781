"""Tests for the stats command."""

import json
from datetime import datetime

from typer.testing import CliRunner

from taskman_cli.main import app
from taskman_cli.models import TaskStatus

runner = CliRunner()


def test_stats_empty():
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 0, result.output
    assert "Total tasks: 0" in result.output
    assert "Completion rate" not in result.output


def test_stats_pretty(seed, make_task):
    seed(
        make_task("task_a_001", status=TaskStatus.COMPLETED),
        make_task("task_b_001", due_date=datetime(2020, 1, 1)),
    )

    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0, result.output
    assert "Total tasks: 2" in result.output
    assert "Overdue: 1" in result.output
    assert "50%" in result.output


def test_stats_json(seed, make_task):
    seed(
        make_task("task_a_001", status=TaskStatus.COMPLETED, due_date=datetime(2020, 1, 1)),
        make_task("task_b_001", status=TaskStatus.IN_PROGRESS),
        make_task("task_c_001"),
    )

    result = runner.invoke(app, ["stats", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "total": 3,
        "todo": 1,
        "in_progress": 1,
        "completed": 1,
        "overdue": 0,
        "completion_rate": 33,
    }
