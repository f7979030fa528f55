# src/todoctl/engine/ops.py

"""
Serialisation of Task objects back to todo.txt lines and files.

This module contains:
- the canonical single-line rendering of a Task,
- bulk conversion of a TaskList into lines,
- writing a TaskList to disk.

No parsing is performed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .model import CONTEXT_PREFIX, PROJECT_PREFIX
from .parse import DONE_MARKER

if TYPE_CHECKING:
    from .collection import TaskList
    from .model import Task

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FileWriteError(Exception):
    """
    Raised when a todo file cannot be written.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Single line
# ---------------------------------------------------------------------

def format_task(task: "Task") -> str:
    """
    Render a Task as one todo.txt line.

    Token order:
      x, (priority), completion date, creation date, text,
      +projects, @contexts, key:value, prio:X

    A tag is only appended when its literal form does not already occur
    somewhere in the text. This is a substring test, so "+Projectile" in
    the text also hides a "+Project" tag.

    Done tasks carry their priority as a trailing "prio:X" token since
    the "(X)" prefix is not allowed after "x".
    """
    tokens: list[str] = []

    if task.done:
        tokens.append(DONE_MARKER)
    if not task.done and task.priority is not None:
        tokens.append(f"({task.priority})")
    if task.completion_date is not None:
        tokens.append(task.completion_date)
    if task.creation_date is not None:
        tokens.append(task.creation_date)

    text = task.text
    tokens.append(text)

    for project in task.projects:
        tag = f"{PROJECT_PREFIX}{project}"
        if tag not in text:
            tokens.append(tag)

    for context in task.contexts:
        tag = f"{CONTEXT_PREFIX}{context}"
        if tag not in text:
            tokens.append(tag)

    for key, value in task.meta.items():
        tag = f"{key}:{value}"
        if tag not in text:
            tokens.append(tag)

    if task.done and task.priority is not None:
        tokens.append(f"prio:{task.priority}")

    return " ".join(tokens)


# ---------------------------------------------------------------------
# Task lists
# ---------------------------------------------------------------------

def format_lines(tasks: "TaskList") -> list[str]:
    """
    Serialise every task in iteration order.
    """
    return [format_task(task) for _, task in tasks.items()]


def write_todo_file(path: str | Path, tasks: "TaskList") -> int:
    """
    Overwrite `path` with one line per task.

    Every line, including the last, ends with a newline.
    Returns the number of lines written.
    """
    p = Path(path)
    lines = format_lines(tasks)

    try:
        with p.open("w", encoding="utf-8", newline="\n") as fh:
            for line in lines:
                fh.write(f"{line}\n")
    except OSError as e:
        raise FileWriteError(str(p), f"Cannot write file: {e}") from e

    logger.debug("Wrote %d task(s) to %s", len(lines), p)
    return len(lines)
