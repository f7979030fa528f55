# src/todoctl/engine/actions.py

"""
Task list mutation actions.

This module contains the state-changing operations the CLI performs on
a TaskList: adding, completing, prioritising, moving and deleting.

Design principles:
- No file access here (handled by parse/ops).
- Tasks are addressed by their list position.
- Validation errors are raised early, before anything is changed.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from .collection import TaskList
from .model import Task
from .parse import parse_task
from .validate import ValidationError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _today() -> date:
    """Return today's date (isolated for testability)."""
    return date.today()


def _require_task(tasks: TaskList, index: int) -> Task:
    task = tasks.get(index)
    if task is None:
        raise ValidationError(f"No task at position {index}")
    return task


# ---------------------------------------------------------------------
# Public actions
# ---------------------------------------------------------------------

def add_task(tasks: TaskList, line: str, *, add_creation_date: bool = True) -> int:
    """
    Parse `line` and append it to the list.

    If `add_creation_date` is set and the line has no creation date,
    today's date is used. Returns the new position.
    """
    if not line.strip():
        raise ValidationError("Task text is required")

    task = parse_task(line)
    if add_creation_date and task.creation_date is None:
        task.set_creation_date(_today().isoformat())

    index = tasks.add_task(task)
    logger.debug("Added task at position %d", index)
    return index


def complete_task(tasks: TaskList, index: int) -> Task:
    """
    Mark a task as done with today's completion date.
    """
    task = _require_task(tasks, index)
    if task.done:
        raise ValidationError(f"Task {index} is already done")
    return task.mark_done(_today())


def reopen_task(tasks: TaskList, index: int) -> Task:
    """
    Clear the done flag and the completion date.
    """
    task = _require_task(tasks, index)
    if not task.done:
        raise ValidationError(f"Task {index} is not done")
    return task.set_done(False).set_completion_date(None)


def prioritize_task(tasks: TaskList, index: int, priority: Optional[str]) -> Task:
    task = _require_task(tasks, index)
    try:
        return task.set_priority(priority)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def deprioritize_task(tasks: TaskList, index: int) -> Task:
    return _require_task(tasks, index).set_priority(None)


def move_task(tasks: TaskList, index: int, target: int) -> Task:
    """
    Move the task at `index` to `target`, pushing occupants forward.
    """
    task = _require_task(tasks, index)
    if target < 0:
        raise ValidationError(f"Invalid target position: {target}")
    tasks.move_task(task, target)
    return task


def delete_task(tasks: TaskList, index: int) -> Task:
    task = tasks.remove_task_by_index(index)
    if task is None:
        raise ValidationError(f"No task at position {index}")
    return task
