# src/todoctl/engine/collection.py

"""
Task list container.

A TaskList maps integer positions to Task objects. Positions are sparse:
removing a task leaves a hole, and new tasks always go after the highest
position in use.

Iteration follows the order in which positions were first written, not
numeric order. Writing to a position that already exists keeps its place
in that order; writing to a new position appends it.

A task object occupies at most one position at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from .model import Task

logger = logging.getLogger(__name__)


class TaskList:
    """
    Ordered, sparsely indexed collection of tasks.

    Cursor protocol (rewind / valid / current / key / next) is kept on
    the list itself so that removals can move it; `__iter__` is built on
    top of it.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: dict[int, Task] = {}
        # Live positions in first-write order; the cursor indexes into it.
        self._order: list[int] = []
        # id(task) -> position, for identity lookups.
        self._slots: dict[int, int] = {}
        # None means "recompute on next add".
        self._max_index: Optional[int] = None

        self._cursor: Optional[int] = None
        # Set when the position under the cursor was removed and the
        # cursor already points at its successor.
        self._cursor_advanced = False

        for task in tasks:
            self.add_task(task)

    # -----------------------------------------------------------------
    # Bulk conversion
    # -----------------------------------------------------------------

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TaskList":
        from .parse import parse_lines

        return parse_lines(lines)

    def to_lines(self) -> list[str]:
        from .ops import format_lines

        return format_lines(self)

    # -----------------------------------------------------------------
    # Positional access
    # -----------------------------------------------------------------

    def get(self, index: int) -> Optional[Task]:
        """
        Return the task at `index`, or None for an empty position.
        """
        return self._tasks.get(index)

    def __getitem__(self, index: int) -> Optional[Task]:
        return self.get(index)

    def __setitem__(self, index: int, task: Task) -> None:
        _check_index(index)
        if not isinstance(task, Task):
            raise TypeError(f"TaskList only holds Task objects, got {type(task).__name__}")

        current = self._slots.get(id(task))
        if current is not None and current != index:
            raise ValueError(f"Task is already at position {current}")

        self._put(index, task)

    def __len__(self) -> int:
        return len(self._tasks)

    def count(self) -> int:
        return len(self._tasks)

    def keys(self) -> list[int]:
        return list(self._order)

    def items(self) -> list[tuple[int, Task]]:
        return [(index, self._tasks[index]) for index in self._order]

    def get_tasks(self) -> dict[int, Task]:
        return dict(self._tasks)

    def index_of(self, task: Task) -> Optional[int]:
        """
        Return the position holding this exact task object.
        """
        return self._slots.get(id(task))

    # -----------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------

    def add_task(self, task: Task) -> int:
        """
        Append a task after the highest position in use.

        Returns the new position.
        """
        if self._max_index is None and self._tasks:
            self._max_index = max(self._tasks)

        index = 0 if self._max_index is None else self._max_index + 1
        self[index] = task
        return index

    def remove_task_by_index(self, index: int) -> Optional[Task]:
        """
        Remove and return the task at `index`, or None if there is none.
        """
        if index not in self._tasks:
            return None

        pos = self._order.index(index)
        del self._order[pos]

        if self._cursor is not None:
            if pos < self._cursor:
                self._cursor -= 1
            elif pos == self._cursor:
                # The successor slides into the cursor slot.
                self._cursor_advanced = True

        task = self._tasks.pop(index)
        del self._slots[id(task)]
        if index == self._max_index:
            self._max_index = None

        logger.debug("Removed task at position %d", index)
        return task

    def remove_task(self, task: Task) -> bool:
        index = self.index_of(task)
        if index is None:
            return False
        self.remove_task_by_index(index)
        return True

    def move_task(self, task: Task, target_index: int) -> bool:
        """
        Move `task` to `target_index`, pushing occupants forward.

        The task that was at the target is carried to the next position;
        if that one is taken too, its occupant is carried on, and so on
        until an empty position absorbs the carried task.

        Returns False if `task` is not in the list.
        """
        _check_index(target_index)

        old_index = self.index_of(task)
        if old_index is None:
            return False
        if old_index == target_index:
            return True

        displaced = self.get(target_index)
        self.remove_task_by_index(old_index)
        self[target_index] = task

        index = target_index + 1
        while displaced is not None:
            occupant = self.get(index)
            self[index] = displaced
            displaced = occupant
            index += 1

        logger.debug("Moved task from position %d to %d", old_index, target_index)
        return True

    def _put(self, index: int, task: Task) -> None:
        old = self._tasks.get(index)
        if old is None:
            self._order.append(index)
        else:
            del self._slots[id(old)]

        self._tasks[index] = task
        self._slots[id(task)] = index

        if self._max_index is not None and index > self._max_index:
            self._max_index = index
        elif self._max_index is None and len(self._tasks) == 1:
            self._max_index = index

    # -----------------------------------------------------------------
    # Cursor
    # -----------------------------------------------------------------

    def rewind(self) -> None:
        self._cursor = 0 if self._order else None
        self._cursor_advanced = False

    def valid(self) -> bool:
        return self._cursor is not None and self._cursor < len(self._order)

    def key(self) -> Optional[int]:
        return self._order[self._cursor] if self.valid() else None

    def current(self) -> Optional[Task]:
        if not self.valid():
            return None
        return self._tasks[self._order[self._cursor]]

    def next(self) -> None:
        """
        Advance the cursor to the following position in iteration order.
        """
        if self._cursor_advanced:
            self._cursor_advanced = False
            return

        if self._cursor is not None and self._cursor < len(self._order):
            self._cursor += 1

    def __iter__(self) -> Iterator[Task]:
        self.rewind()
        while self.valid():
            yield self.current()
            self.next()

    def __repr__(self) -> str:
        return f"TaskList({len(self)} tasks)"


def _check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Task positions must be integers, got {type(index).__name__}")
    if index < 0:
        raise ValueError(f"Task positions must be non-negative, got {index}")
