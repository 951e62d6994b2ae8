#!/usr/bin/env python3
"""
Taskdash Launcher

Terminal UI for working through pending Taskwarrior tasks.

Usage:
    task_dashboard.py                   Launch interactive TUI dashboard
    task_dashboard.py --once            Print the task table once and exit (no TUI)
    task_dashboard.py --filter +work    Load tasks matching another filter

Keys:
    a add, e edit, d done, x delete, 1 task table, 2 detail pane, q quit

Requirements:
    pip install textual
"""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from taskdash.controller import DEFAULT_FILTER, TaskListController  # noqa: E402
from taskdash.providers import TaskExportError  # noqa: E402
from taskdash.task_gateway import DEFAULT_COMMAND, TaskwarriorGateway  # noqa: E402

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3

logger = logging.getLogger("taskdash")


def configure_logging(log_file: Path | None, level: str) -> None:
    """Send taskdash logs to a rotating file; the terminal belongs to the TUI."""
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if log_file is None:
        return
    handler = RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)


def format_table(controller: TaskListController) -> str:
    """Plain-text rendering of header, separator and rows."""
    lines = [controller.header, controller.separator, *(r.cells for r in controller.rows)]
    widths = [max(len(line[col]) for line in lines) for col in range(len(controller.header))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip()
        for line in lines
    )


def print_table_once(controller: TaskListController) -> int:
    """Print the task table and exit."""
    print(format_table(controller))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Taskdash - Taskwarrior Dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--task-command",
        default=DEFAULT_COMMAND,
        help=f"Task engine executable (default: {DEFAULT_COMMAND})",
    )
    parser.add_argument(
        "--filter",
        default=DEFAULT_FILTER,
        help=f"Engine filter for the initial load (default: {DEFAULT_FILTER})",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the task table once and exit (no TUI)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write diagnostic logs to this file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level (default: WARNING)",
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    gateway = TaskwarriorGateway(args.task_command)
    controller = TaskListController(gateway, task_filter=args.filter)
    try:
        controller.load()
    except TaskExportError as e:
        logger.error("Initial load failed: %s", e)
        print(f"Failed to load tasks: {e}", file=sys.stderr)
        return 1

    if args.once:
        return print_table_once(controller)

    from taskdash.app import TaskDashApp

    TaskDashApp(controller, gateway).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
