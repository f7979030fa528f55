# tests/conftest.py

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterator

import pytest

from todoctl.engine import actions
from todoctl.engine.collection import TaskList
from todoctl.engine.model import Task


@pytest.fixture()
def three_tasks() -> TaskList:
    tasks = TaskList()
    tasks.add_task(Task(text="First task"))
    tasks.add_task(Task(text="Second task"))
    tasks.add_task(Task(text="Third task"))
    return tasks


@pytest.fixture()
def todo_file(tmp_path: Path) -> Path:
    """
    A small todo.txt on disk, one open, one prioritised, one done.
    """
    path = tmp_path / "todo.txt"
    path.write_text(
        "First task\n"
        "(A) 2025-01-01 Second Task +work @office\n"
        "\n"
        "x 2025-02-01 2025-01-15 Third Task due:today\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def fixed_today(monkeypatch: pytest.MonkeyPatch) -> date:
    """
    Pin the actions layer's notion of "today".
    """
    today = date(2025, 3, 14)
    monkeypatch.setattr(actions, "_today", lambda: today)
    return today


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    Keep the user's real config and environment out of every test.
    """
    monkeypatch.delenv("TODOCTL_FILE", raising=False)
    monkeypatch.setenv("TODOCTL_CONFIG", "")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """
    Drop stderr handlers installed by setup_logging() during a test.
    """
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level

    yield

    for h in list(root.handlers):
        if h not in before and type(h) is logging.StreamHandler:
            root.removeHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
