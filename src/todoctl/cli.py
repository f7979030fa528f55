# src/todoctl/cli.py

"""
Command-line interface for todoctl.

This module:
- defines argument parsing and subcommands,
- loads settings and the todo file, delegates to engine modules,
- writes the file back after every write command.

KISS rule: one command, one action, one write.
"""

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable

from todoctl.config import ConfigError, Settings, load_settings
from todoctl.engine.actions import (
    add_task,
    complete_task,
    delete_task,
    deprioritize_task,
    move_task,
    prioritize_task,
    reopen_task,
)
from todoctl.engine.collection import TaskList
from todoctl.engine.ops import FileWriteError, format_task, write_todo_file
from todoctl.engine.parse import ParseError, read_todo_file
from todoctl.engine.render import render_task_detail, render_task_list
from todoctl.engine.validate import ValidationError, validate_task_list
from todoctl.logging_setup import setup_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todoctl")
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="todo.txt file to work on (default: from config, else ./todo.txt)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config.yml (default: ~/.config/todoctl/config.yml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    p_list = sub.add_parser("list", help="List tasks with their positions")
    p_list.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Include done tasks",
    )
    p_list.add_argument("-p", "--project", type=str, default=None, help="Only tasks in this +project")
    p_list.add_argument("-c", "--context", type=str, default=None, help="Only tasks with this @context")
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="Show a single task (structured view)")
    p_show.add_argument("index", type=int, help="Task position")
    p_show.set_defaults(func=cmd_show)

    p_validate = sub.add_parser("validate", help="Report suspicious lines")
    p_validate.set_defaults(func=cmd_validate)

    # ------------------------------------------------------------------
    # Write commands
    # ------------------------------------------------------------------

    p_add = sub.add_parser("add", help="Add a task")
    p_add.add_argument("text", nargs="+", help="Task line, e.g. '(A) Call mom +family @phone'")
    p_add.add_argument(
        "--no-date",
        action="store_true",
        help="Do not stamp today's creation date",
    )
    p_add.set_defaults(func=cmd_add)

    p_do = sub.add_parser("do", help="Mark task as done")
    p_do.add_argument("index", type=int, help="Task position")
    p_do.set_defaults(func=cmd_do)

    p_undo = sub.add_parser("undo", help="Reopen a done task")
    p_undo.add_argument("index", type=int, help="Task position")
    p_undo.set_defaults(func=cmd_undo)

    p_pri = sub.add_parser("pri", help="Set task priority")
    p_pri.add_argument("index", type=int, help="Task position")
    p_pri.add_argument("priority", type=str, help="Single letter A-Z")
    p_pri.set_defaults(func=cmd_pri)

    p_depri = sub.add_parser("depri", help="Remove task priority")
    p_depri.add_argument("index", type=int, help="Task position")
    p_depri.set_defaults(func=cmd_depri)

    p_mv = sub.add_parser("mv", help="Move task to another position")
    p_mv.add_argument("index", type=int, help="Task position")
    p_mv.add_argument("target", type=int, help="Target position (occupants are pushed down)")
    p_mv.set_defaults(func=cmd_mv)

    p_rm = sub.add_parser("rm", help="Delete a task")
    p_rm.add_argument("index", type=int, help="Task position")
    p_rm.set_defaults(func=cmd_rm)

    return parser


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    tasks = read_todo_file(settings.todo_file)
    render_task_list(
        tasks,
        color=settings.color,
        show_done=bool(args.all),
        project=args.project,
        context=args.context,
    )
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    tasks = read_todo_file(settings.todo_file)
    task = tasks.get(args.index)
    if task is None:
        raise ValidationError(f"No task at position {args.index}")

    render_task_detail(args.index, task, color=settings.color)
    return 0


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    tasks = read_todo_file(settings.todo_file)
    results = validate_task_list(tasks)

    for res in results:
        print(f"{res.index}: {res.line}")
        for issue in res.issues:
            print(f"  - {issue.code}: {issue.message}")

    return 1 if results else 0


def cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    path = settings.todo_file
    tasks = read_todo_file(path) if path.exists() else TaskList()

    line = " ".join(args.text)
    add_date = settings.add_creation_date and not args.no_date
    index = add_task(tasks, line, add_creation_date=add_date)

    write_todo_file(path, tasks)
    print(f"{index} {format_task(tasks[index])}")
    return 0


def cmd_do(args: argparse.Namespace, settings: Settings) -> int:
    return _write_command(settings, lambda tasks: complete_task(tasks, args.index), args.index)


def cmd_undo(args: argparse.Namespace, settings: Settings) -> int:
    return _write_command(settings, lambda tasks: reopen_task(tasks, args.index), args.index)


def cmd_pri(args: argparse.Namespace, settings: Settings) -> int:
    return _write_command(
        settings,
        lambda tasks: prioritize_task(tasks, args.index, args.priority),
        args.index,
    )


def cmd_depri(args: argparse.Namespace, settings: Settings) -> int:
    return _write_command(settings, lambda tasks: deprioritize_task(tasks, args.index), args.index)


def cmd_mv(args: argparse.Namespace, settings: Settings) -> int:
    return _write_command(
        settings,
        lambda tasks: move_task(tasks, args.index, args.target),
        args.target,
    )


def cmd_rm(args: argparse.Namespace, settings: Settings) -> int:
    path = settings.todo_file
    tasks = read_todo_file(path)
    task = delete_task(tasks, args.index)

    write_todo_file(path, tasks)
    print(f"Removed: {format_task(task)}")
    return 0


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _write_command(settings: Settings, action: Callable[[TaskList], object], shown: int) -> int:
    """
    Load the file, run one action, write the file back, echo the task.

    Positions are only stable within one run: the next read numbers the
    lines 0..n-1 in file order.
    """
    path = settings.todo_file
    tasks = read_todo_file(path)

    action(tasks)
    write_todo_file(path, tasks)

    task = tasks.get(shown)
    if task is not None:
        print(f"{shown} {format_task(task)}")
    return 0


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    if args.file:
        settings = replace(settings, todo_file=Path(args.file).expanduser())
    if args.no_color:
        settings = replace(settings, color=False)
    return settings


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    try:
        settings = _resolve_settings(args)
    except ConfigError as e:
        setup_logging(logging.WARNING)
        print(f"Error: {e}")
        return 1

    setup_logging(logging.DEBUG if args.verbose else settings.log_level_value)
    logger.debug("Using todo file %s", settings.todo_file)

    try:
        return func(args, settings)
    except (ParseError, FileWriteError, ValidationError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
