# src/todoctl/engine/model.py

"""
Core domain models.

This module defines the in-memory representation of a single task line
and the tag normalisation rule shared by every tag mutator.

No filesystem access should happen here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


# ---------------------------------------------------------------------
# Tag patterns
# ---------------------------------------------------------------------

PROJECT_PREFIX = "+"
CONTEXT_PREFIX = "@"

META_RE = re.compile(r"^([^ ]+):([^ ]+)$")
PRIORITY_VALUE_RE = re.compile(r"[A-Z]")


def is_tag_token(token: str) -> bool:
    """
    Return True if a single token is a project, context or meta tag.
    """
    return (
        token.startswith(PROJECT_PREFIX)
        or token.startswith(CONTEXT_PREFIX)
        or META_RE.match(token) is not None
    )


# ---------------------------------------------------------------------
# Sanitising
# ---------------------------------------------------------------------

def sanitize_tag(tag: str) -> str:
    """
    Collapse free-form tag text into one whitespace-free token.

    The first word is kept as is, every following word is capitalised
    and appended without a separator:

        "weird project  with spaces" -> "weirdProjectWithSpaces"
    """
    words = tag.split()
    if not words:
        return ""

    out = words[0]
    for word in words[1:]:
        out += word[0].upper() + word[1:].lower()
    return out


def _normalise_priority(priority: Optional[str]) -> Optional[str]:
    if priority is None:
        return None

    if not isinstance(priority, str) or not PRIORITY_VALUE_RE.fullmatch(priority.strip().upper()):
        raise ValueError(f"priority must be a single letter A-Z, got {priority!r}")
    return priority.strip().upper()


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(slots=True, eq=False)
class Task:
    """
    In-memory representation of one todo.txt line.

    Notes:
    - text is the raw payload after the prefix tokens, tags included.
    - projects/contexts/meta hold sanitised values.
    - dates are kept as YYYY-MM-DD strings and never checked against
      the calendar.
    - equality is identity: a TaskList looks tasks up by object.
    """

    text: str = ""
    done: bool = False
    priority: Optional[str] = None

    creation_date: Optional[str] = None
    completion_date: Optional[str] = None

    projects: list[str] = field(default_factory=list)
    contexts: list[str] = field(default_factory=list)
    meta: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.priority = _normalise_priority(self.priority)

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------

    @classmethod
    def from_string(cls, line: str) -> "Task":
        from .parse import parse_task

        return parse_task(line)

    # -----------------------------------------------------------------
    # Mutators (chainable)
    # -----------------------------------------------------------------

    def set_done(self, done: bool) -> "Task":
        self.done = bool(done)
        return self

    def mark_done(self, today: Optional[date] = None) -> "Task":
        """
        Mark the task as done and stamp today's completion date.
        """
        self.done = True
        self.completion_date = (today or date.today()).isoformat()
        return self

    def set_text(self, text: str) -> "Task":
        self.text = text
        return self

    def set_priority(self, priority: Optional[str]) -> "Task":
        """
        Set or clear the priority.

        Lowercase letters are upper-cased; anything that is not a
        single ASCII letter raises ValueError.
        """
        self.priority = _normalise_priority(priority)
        return self

    def set_creation_date(self, value: Optional[str]) -> "Task":
        self.creation_date = value
        return self

    def set_completion_date(self, value: Optional[str]) -> "Task":
        self.completion_date = value
        return self

    def add_project(self, project: str) -> "Task":
        name = sanitize_tag(project)
        if name not in self.projects:
            self.projects.append(name)
        return self

    def add_context(self, context: str) -> "Task":
        name = sanitize_tag(context)
        if name not in self.contexts:
            self.contexts.append(name)
        return self

    def add_meta(self, key: str, value: str) -> "Task":
        self.meta[sanitize_tag(key)] = sanitize_tag(value)
        return self

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    @property
    def is_done(self) -> bool:
        return self.done

    @property
    def clean_text(self) -> str:
        """
        Text without its trailing run of tag tokens.

        If every token is a tag, the full text is returned unchanged.
        """
        tokens = self.text.split(" ")
        while tokens:
            if not is_tag_token(tokens[-1]):
                return " ".join(tokens)
            tokens.pop()
        return self.text

    def __str__(self) -> str:
        from .ops import format_task

        return format_task(self)
