# src/reclaim_tasks/cli/main.py

"""
CLI entrypoint (`reclaim`).

Parses arguments, initializes logging, builds a ReclaimClient and runs one
command. Exceptions from the client are turned into "✗ ..." messages and
exit code 1 here; the client itself never prints.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..api.client import ReclaimClient, TaskFilter
from ..api.time_schemes import ALIAS_HELP
from ..config import get_settings
from ..core.errors import AuthenticationError, InvalidRecordError, NotFoundError, ReclaimError
from ..core.utils import format_task
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

CLEAR_WORDS = frozenset({"none", "clear", "null", ""})

EPILOG = """\
Clearing Dates:
  Use "none", "clear", or "null" as the value to remove a date field.
    reclaim update abc123 --due none           # Clear due date
    reclaim update abc123 --defer clear        # Clear deferred start date
    reclaim update abc123 --start null         # Clear specific start time

Time Scheme Aliases:
  work, working hours, business hours  -> Finds schemes containing 'work'
  personal, off hours, private         -> Finds schemes containing 'personal'

Status Values:
  SCHEDULED, IN_PROGRESS, COMPLETE (still active), ARCHIVED (truly complete)

Examples:
  reclaim                                   # Lists active tasks (default)
  reclaim list completed
  reclaim create --title "Important Work" --due 2025-08-15 --priority P1 --duration 2
  reclaim create --title "Research" --duration 3 --split 0.5
  reclaim update abc123 --title "Updated Title" --priority P2
  reclaim complete abc123
  reclaim list-schemes --help-aliases
"""

# Namespace keys that are not task fields.
_NON_FIELD_KEYS = frozenset({"command", "task_id", "filter", "help_aliases", "verbose", "handler"})


def _clearable_date(value: str) -> str | None:
    """Date option value; the clear words map to None (clear the field)."""
    if value.strip().lower() in CLEAR_WORDS:
        return None
    return value


def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in {"true", "1", "yes", "y"}:
        return True
    if v in {"false", "0", "no", "n"}:
        return False
    raise argparse.ArgumentTypeError("Invalid value for --private. Use true/false")


def _split_size(value: str) -> float:
    try:
        hours = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid chunk size for --split: {value!r}") from None
    if hours <= 0:
        raise argparse.ArgumentTypeError("Chunk size for --split must be greater than 0 hours")
    return hours


class _SplitAction(argparse.Action):
    """--split [CHUNK_SIZE]: allow splitting, optionally with a minimum chunk in hours."""

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        namespace.allow_splitting = True
        if values is not None:
            namespace.split_chunk_size = values


def _add_task_arguments(parser: argparse.ArgumentParser, *, creating: bool) -> None:
    # SUPPRESS keeps options that were not given out of the namespace entirely.
    add = parser.add_argument
    s = argparse.SUPPRESS
    add("--title", default=s, help="Task title")
    add("--due", dest="due_date", type=_clearable_date, default=s,
        help='Due date (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS, or "none" to clear)')
    add("--priority", type=str.upper, choices=["P1", "P2", "P3", "P4"], default=s, help="Task priority")
    add("--duration", type=float, default=s, help="Task duration in hours (0.25 = 15min)")
    add("--min-chunk", dest="min_chunk_size", type=float, default=s, help="Minimum chunk size in hours")
    add("--max-chunk", dest="max_chunk_size", type=float, default=s, help="Maximum chunk size in hours")
    add("--min-work", dest="min_work_duration", type=float, default=s, help="Minimum work duration in hours")
    add("--max-work", dest="max_work_duration", type=float, default=s, help="Maximum work duration in hours")
    add("--snooze", "--defer", dest="snooze_until", type=_clearable_date, default=s,
        help='Start after this date/time (or "none" to clear)')
    add("--start", type=_clearable_date, default=s, help='Specific start time (or "none" to clear)')
    add("--time-scheme", dest="time_scheme", default=s,
        help='Time scheme ID or name (e.g. "work", "personal", "Work Hours", or UUID)')
    if creating:
        add("--split", dest="split", nargs="?", type=_split_size, action=_SplitAction, default=s,
            metavar="CHUNK_SIZE", help="Allow splitting. Optional: min chunk size in hours (e.g. 0.5)")
    add("--private", dest="always_private", type=_parse_bool, default=s, help="Make task private (true/false)")
    add("--category", dest="event_category", default=s, help="Event category")
    add("--color", dest="event_color", default=s, help="Event color")
    add("--notes", default=s, help="Task notes/description")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reclaim",
        description="Reclaim task CRUD operations.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = parser.add_subparsers(dest="command")

    list_p = sub.add_parser("list", help="List tasks (default: active)")
    list_p.add_argument("filter", nargs="?", default=TaskFilter.ACTIVE.value,
                        choices=[f.value for f in TaskFilter], help="active, completed or overdue")
    list_p.set_defaults(handler=cmd_list)

    create_p = sub.add_parser("create", help="Create a new task (requires --title)")
    _add_task_arguments(create_p, creating=True)
    create_p.set_defaults(handler=cmd_create)

    get_p = sub.add_parser("get", help="Get task details")
    get_p.add_argument("task_id")
    get_p.set_defaults(handler=cmd_get)

    update_p = sub.add_parser("update", help="Update a task")
    update_p.add_argument("task_id")
    _add_task_arguments(update_p, creating=False)
    update_p.set_defaults(handler=cmd_update)

    complete_p = sub.add_parser("complete", help="Mark task as complete (ARCHIVED status)")
    complete_p.add_argument("task_id")
    complete_p.set_defaults(handler=cmd_complete)

    delete_p = sub.add_parser("delete", help="Delete a task (permanent deletion)")
    delete_p.add_argument("task_id")
    delete_p.set_defaults(handler=cmd_delete)

    schemes_p = sub.add_parser("list-schemes", help="List available time schemes")
    schemes_p.add_argument("--help-aliases", action="store_true", help="Show common time scheme aliases")
    schemes_p.set_defaults(handler=cmd_list_schemes)

    sub.add_parser("help", help="Show this help message")
    return parser


def _task_options(args: argparse.Namespace) -> dict[str, Any]:
    return {k: v for k, v in vars(args).items() if k not in _NON_FIELD_KEYS}


# ---- commands ----


def cmd_list(client: ReclaimClient, args: argparse.Namespace) -> int:
    task_filter = args.filter
    tasks = client.list_tasks(task_filter)

    if not tasks:
        suffix = f" matching filter '{task_filter}'" if task_filter else ""
        print(f"No tasks found{suffix}.")
        return 0

    print(f"\nYour Reclaim Tasks{f' ({task_filter})' if task_filter else ''}:")
    print("-" * 50)
    for task in tasks:
        print(format_task(task))
    print(f"\nTotal: {len(tasks)} tasks")
    return 0


def cmd_create(client: ReclaimClient, args: argparse.Namespace) -> int:
    options = _task_options(args)
    title = options.pop("title", None)
    if not title:
        print("✗ Task title is required. Use --title TITLE")
        return 1

    try:
        task = client.create_task(title, **options)
    except InvalidRecordError as e:
        print(f"✗ Error creating task: {e}")
        return 1
    print(f"✓ Created task: {task.title} (ID: {task.id})")
    return 0


def cmd_get(client: ReclaimClient, args: argparse.Namespace) -> int:
    task = client.get_task(args.task_id)

    print(f"\nTask: {task.title}")
    print(f"ID: {task.id}")
    print(f"Priority: {task.priority_symbol.wire}")
    print(f"Status: {task.status}")
    if task.duration:
        print(f"Duration: {task.duration} hours")
    if task.due_date:
        print(f"Due: {task.due_date_formatted}")
    if task.time_scheme_id:
        print(f"Time Scheme: {task.time_scheme_id}")
    if task.always_private:
        print(f"Private: {task.always_private}")
    if task.event_category:
        print(f"Category: {task.event_category}")
    if task.event_color:
        print(f"Color: {task.event_color}")
    if task.notes:
        print(f"Notes: {task.notes}")
    return 0


def cmd_update(client: ReclaimClient, args: argparse.Namespace) -> int:
    options = _task_options(args)
    if not options:
        print("✗ No update fields provided")
        return 1

    try:
        task = client.update_task(args.task_id, **options)
    except InvalidRecordError as e:
        print(f"✗ Error updating task: {e}")
        return 1
    print(f"✓ Updated task: {task.title}")
    return 0


def cmd_complete(client: ReclaimClient, args: argparse.Namespace) -> int:
    task = client.complete_task(args.task_id)
    print(f"✓ Completed task: {task.title}")
    return 0


def cmd_delete(client: ReclaimClient, args: argparse.Namespace) -> int:
    client.delete_task(args.task_id)
    print(f"✓ Deleted task: {args.task_id}")
    return 0


def cmd_list_schemes(client: ReclaimClient, args: argparse.Namespace) -> int:
    print(client.format_time_schemes())
    if args.help_aliases:
        print("\nCommon Aliases:")
        for line in ALIAS_HELP:
            print(line)
    return 0


def friendly_error_message(err: Exception) -> str:
    if isinstance(err, NotFoundError):
        return str(err)
    msg = str(err).strip() or err.__class__.__name__
    if isinstance(err, AuthenticationError) and "not set" in msg:
        return f"{msg}. Set RECLAIM_API_KEY in your environment or .env."
    return f"Error: {msg}"


def main(argv: Sequence[str] | None = None, *, client: ReclaimClient | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "help":
        parser.print_help()
        return 0
    if args.command is None:
        # Bare `reclaim` lists active tasks.
        args.command = "list"
        args.filter = TaskFilter.ACTIVE.value
        args.handler = cmd_list

    settings = get_settings()
    level_name = "DEBUG" if args.verbose else str(getattr(settings, "log_level", "WARNING")).upper()
    setup_logging(
        console_level=getattr(logging, level_name, logging.WARNING),
        log_dir=getattr(settings, "log_dir", None),
    )

    owns_client = client is None
    if client is None:
        try:
            client = ReclaimClient(settings=settings)
        except AuthenticationError as e:
            print(f"✗ {friendly_error_message(e)}")
            return 1

    handler: Callable[[ReclaimClient, argparse.Namespace], int] = args.handler
    try:
        return handler(client, args)
    except ReclaimError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"✗ {friendly_error_message(e)}")
        return 1
    finally:
        if owns_client:
            client.close()


if __name__ == "__main__":
    raise SystemExit(main())
