# src/todoctl/engine/render.py

"""
Rendering helpers for CLI output.

This module is responsible for:
- the task list view (list),
- the structured task detail view (show).

It is presentation-only: it should not mutate task state or write files.
"""

from __future__ import annotations

import re
import shutil
import sys
import textwrap
from typing import Optional

from .collection import TaskList
from .model import Task, sanitize_tag
from .ops import format_task


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\033[0m"
_DIM = "\033[90m"

_PRIORITY_COLOR = {
    "A": "\033[31m",  # red
    "B": "\033[33m",  # yellow
    "C": "\033[32m",  # green
}
_OTHER_PRIORITY_COLOR = "\033[34m"  # blue


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    return sys.stdout.isatty()


def _visible_len(s: str) -> int:
    """Return string length without ANSI colour escapes."""
    return len(_ANSI_RE.sub("", s))


def _task_color(task: Task) -> str:
    if task.done:
        return _DIM
    if task.priority is None:
        return ""
    return _PRIORITY_COLOR.get(task.priority, _OTHER_PRIORITY_COLOR)


def _matches(task: Task, project: Optional[str], context: Optional[str]) -> bool:
    if project and sanitize_tag(project.lstrip("+")) not in task.projects:
        return False
    if context and sanitize_tag(context.lstrip("@")) not in task.contexts:
        return False
    return True


# ---------------------------------------------------------------------
# Task list view
# ---------------------------------------------------------------------

def render_task_list(
    tasks: TaskList,
    *,
    color: bool = True,
    show_done: bool = True,
    project: Optional[str] = None,
    context: Optional[str] = None,
) -> int:
    """
    Print one line per task, prefixed with its position.

    Format:
      <pos> <todo.txt line>

    Returns the number of tasks printed.
    """
    use_color = color and _supports_color()
    items = tasks.items()
    width = len(str(max((i for i, _ in items), default=0)))

    shown = 0
    for index, task in items:
        if task.done and not show_done:
            continue
        if not _matches(task, project, context):
            continue

        line = format_task(task)
        c = _task_color(task) if use_color else ""
        if c:
            line = f"{c}{line}{_RESET}"

        print(f"{index:>{width}} {line}")
        shown += 1

    sep = "-" * 6
    print(sep)
    print(f"{shown} of {len(tasks)} task(s) shown")
    return shown


# ---------------------------------------------------------------------
# Task detail view (show)
# ---------------------------------------------------------------------

def render_task_detail(index: int, task: Task, *, color: bool = True) -> None:
    """
    Render a structured task detail view.

    Width is capped at 80 characters.
    """
    width = min(80, shutil.get_terminal_size(fallback=(80, 24)).columns)
    inner_w = max(20, width - 4)  # borders + padding
    use_color = color and _supports_color()

    def cdim(s: str) -> str:
        return f"{_DIM}{s}{_RESET}" if use_color else s

    def box_rule(ch: str = "-") -> None:
        print(f"+{ch * (width - 2)}+")

    def box_line(content: str = "") -> None:
        raw = content[:inner_w]
        pad = inner_w - _visible_len(raw)
        if pad > 0:
            raw = raw + (" " * pad)
        print(f"| {raw} |")

    def box_field(label: str, value: str) -> None:
        wrapped = textwrap.wrap(
            value,
            width=inner_w - len(label) - 2,
            break_long_words=False,
            break_on_hyphens=False,
        ) or [""]
        box_line(f"{cdim(label)}: {wrapped[0]}")
        for ln in wrapped[1:]:
            box_line(" " * (len(label) + 2) + ln)

    state = "done" if task.done else "open"
    title = task.clean_text or task.text

    print()
    box_rule("=")
    box_field(f"#{index}", f"{title} ({state})")
    box_rule("=")

    box_field("priority", task.priority or "-")
    box_field("created", task.creation_date or "-")
    if task.done or task.completion_date:
        box_field("completed", task.completion_date or "-")

    if task.projects or task.contexts or task.meta:
        box_rule()
        if task.projects:
            box_field("projects", " ".join(f"+{p}" for p in task.projects))
        if task.contexts:
            box_field("contexts", " ".join(f"@{c}" for c in task.contexts))
        for key, value in task.meta.items():
            box_field(key, value)

    box_rule()
    box_field("line", format_task(task))
    box_rule("=")
    print()
