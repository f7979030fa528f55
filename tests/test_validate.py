# tests/test_validate.py

from __future__ import annotations

import pytest

from todoctl.engine.collection import TaskList
from todoctl.engine.model import Task
from todoctl.engine.parse import parse_task
from todoctl.engine.validate import validate_task, validate_task_list


def _codes(task: Task) -> list[str]:
    return [issue.code for issue in validate_task(0, task).issues]


def test_clean_task_has_no_issues() -> None:
    res = validate_task(3, parse_task("x 2025-02-01 2025-01-01 Pay rent +home"))

    assert res.ok
    assert res.index == 3
    assert res.line == "x 2025-02-01 2025-01-01 Pay rent +home"


@pytest.mark.parametrize(
    "line, code",
    [
        ("X Not really a done task", "done_marker_case"),
        ("(Y Incorrect priority format", "priority_format"),
        ("(y) Lowercase priority", "priority_format"),
        ("2024-02-01 (Y) Wrong order", "priority_format"),
        ("x 2025-01-01 2025-02-01 Created after done", "date_order"),
    ],
)
def test_suspicious_lines(line: str, code: str) -> None:
    assert _codes(parse_task(line)) == [code]


def test_completion_date_on_open_task() -> None:
    assert _codes(Task(text="Foo", completion_date="2025-01-01")) == ["completion_not_done"]


def test_empty_text() -> None:
    assert _codes(Task(text="")) == ["empty_text"]
    assert _codes(parse_task("(A)")) == ["empty_text"]


def test_dates_are_not_checked_against_calendar() -> None:
    assert _codes(parse_task("2025-02-31 Impossible date")) == []


def test_validate_task_list_returns_only_failures() -> None:
    tasks = TaskList.from_lines(["Fine", "X Not done", "Also fine", "(b) nope"])

    results = validate_task_list(tasks)

    assert [r.index for r in results] == [1, 3]
    assert all(not r.ok for r in results)
