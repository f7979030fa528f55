# src/todoctl/engine/validate.py

"""
Task list validation rules.

This module lints parsed Task objects for lines that are legal (the
parser accepts anything) but probably not what the author meant.

Responsibilities:
- prefix tokens that look like a broken done marker or priority,
- field combinations that do not make sense together.

It does NOT perform parsing or filesystem access, and it does not check
that dates exist in the calendar.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .collection import TaskList
from .model import Task


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ValidationError(Exception):
    """
    Fatal validation error used for command flow control.

    Raised when an operation must abort (unknown position, bad
    priority value, ...).
    """


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single validation problem.

    `code` is a stable identifier suitable for tests and future filtering.
    """

    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Validation result for a single task position.
    """

    index: int
    line: str
    issues: Sequence[ValidationIssue]

    @property
    def ok(self) -> bool:
        return not self.issues


# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------

_BROKEN_PRIORITY_RE = re.compile(r"^\([A-Za-z]\)?$")


def validate_task(index: int, task: Task) -> ValidationResult:
    """
    Lint a single task.
    """
    issues: list[ValidationIssue] = []
    first = task.text.split(" ", 1)[0]

    if not task.clean_text.strip():
        issues.append(
            ValidationIssue(
                code="empty_text",
                message="Task has no text",
            )
        )

    if task.completion_date is not None and not task.done:
        issues.append(
            ValidationIssue(
                code="completion_not_done",
                message=f"Completion date {task.completion_date} set on an open task",
            )
        )

    if not task.done and first == "X":
        issues.append(
            ValidationIssue(
                code="done_marker_case",
                message="Done marker must be a lowercase 'x'",
            )
        )

    if task.priority is None and _BROKEN_PRIORITY_RE.match(first):
        issues.append(
            ValidationIssue(
                code="priority_format",
                message=f"'{first}' is not read as a priority (expected \"(A)\" before any date)",
            )
        )

    if (
        task.creation_date is not None
        and task.completion_date is not None
        and task.creation_date > task.completion_date
    ):
        issues.append(
            ValidationIssue(
                code="date_order",
                message=(
                    f"Creation date {task.creation_date} is after "
                    f"completion date {task.completion_date}"
                ),
            )
        )

    return ValidationResult(index=index, line=str(task), issues=tuple(issues))


def validate_task_list(tasks: TaskList) -> list[ValidationResult]:
    """
    Lint every task in iteration order; only failing results are returned.
    """
    out: list[ValidationResult] = []
    for index, task in tasks.items():
        res = validate_task(index, task)
        if not res.ok:
            out.append(res)
    return out
