# src/todoctl/engine/parse.py

"""
todo.txt line parser.

Parses raw text lines into Task models and task lists.

Line grammar (prefix tokens are optional, in this order):
- "x"           : done marker (lowercase only)
- "(A)"         : priority, single uppercase letter
- "YYYY-MM-DD"  : completion date when done, creation date otherwise
- "YYYY-MM-DD"  : creation date (done tasks only, after the completion date)
- text          : everything else, verbatim; "+project", "@context" and
                  "key:value" tokens are also collected as tags

Parsing never fails: a token that does not fit the grammar starts the
text region.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final, Iterable

from .model import CONTEXT_PREFIX, META_RE, PROJECT_PREFIX, Task

if TYPE_CHECKING:
    from .collection import TaskList

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------

DONE_MARKER: Final[str] = "x"

PRIORITY_RE = re.compile(r"^\(([A-Z])\)$")
DATE_RE = re.compile(r"^\d{4}-\d\d-\d\d$", re.ASCII)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseError(Exception):
    """
    Raised when a todo file cannot be read.

    Individual lines never raise; only file access does.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def parse_task(line: str) -> Task:
    """
    Parse a single todo.txt line into a Task.

    The line is trimmed and split on single spaces; consecutive spaces
    yield empty tokens, which end up in the text as they were.
    """
    tokens = line.strip().split(" ")
    task = Task()

    if tokens and tokens[0] == DONE_MARKER:
        task.set_done(True)
        tokens.pop(0)

    if tokens:
        m = PRIORITY_RE.match(tokens[0])
        if m:
            task.set_priority(m.group(1))
            tokens.pop(0)

    if tokens and DATE_RE.match(tokens[0]):
        if task.done:
            task.set_completion_date(tokens[0])
        else:
            task.set_creation_date(tokens[0])
        tokens.pop(0)

    # Second date of a done task: "x <completed> <created> ..."
    if task.done and tokens and DATE_RE.match(tokens[0]):
        task.set_creation_date(tokens[0])
        tokens.pop(0)

    return _parse_text(tokens, task)


def parse_lines(lines: Iterable[str]) -> "TaskList":
    """
    Build a TaskList from text lines, skipping blank ones.
    """
    from .collection import TaskList

    tasks = TaskList()
    for raw in lines:
        if not raw.strip():
            continue
        tasks.add_task(parse_task(raw))
    return tasks


def read_todo_file(path: str | Path) -> "TaskList":
    """
    Read a todo.txt file into a TaskList.
    """
    p = Path(path)

    if not p.exists():
        raise ParseError(str(p), "File does not exist")
    if not p.is_file():
        raise ParseError(str(p), "Path is not a file")

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(str(p), f"Cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise ParseError(str(p), f"File is not valid UTF-8: {e}") from e

    tasks = parse_lines(text.splitlines())
    logger.debug("Read %d task(s) from %s", len(tasks), p)
    return tasks


# ---------------------------------------------------------------------
# Text region
# ---------------------------------------------------------------------

def _parse_text(tokens: list[str], task: Task) -> Task:
    for token in tokens:
        if token.startswith(PROJECT_PREFIX):
            task.add_project(token[1:])
        elif token.startswith(CONTEXT_PREFIX):
            task.add_context(token[1:])
        else:
            m = META_RE.match(token)
            if m:
                task.add_meta(m.group(1), m.group(2))

    task.set_text(" ".join(tokens))
    return task
