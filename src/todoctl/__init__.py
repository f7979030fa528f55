# src/todoctl/__init__.py

"""
todoctl: plain-text task lists in the todo.txt line format.
"""

from .engine.collection import TaskList
from .engine.model import Task, sanitize_tag

__all__ = ["Task", "TaskList", "sanitize_tag"]

__version__ = "0.1.0"
