"""Pure helpers: durations, engine timestamps, argument splitting, row rendering."""

import re
from datetime import datetime, timedelta, timezone

from taskdash.providers import Row, Task

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
TIMESTAMP_RE = re.compile(r"^\d{8}T\d{6}Z$")
CREATED_RE = re.compile(r"Created task (\d+)\.")

TASK_HEADERS = ("ID", "Age", "P", "Project", "Due", "Description", "Urg")
NUMBER_OF_COLUMNS = len(TASK_HEADERS)

PRIORITY_HIGH = "H"
PRIORITY_MEDIUM = "M"
PRIORITY_LOW = "L"

PRIORITY_COLORS = {
    PRIORITY_HIGH: "red",
    PRIORITY_MEDIUM: "grey74",
    PRIORITY_LOW: "grey54",
}

# Largest unit first; the first whole quotient wins
DURATION_UNITS = (
    (timedelta(days=365), "y"),
    (timedelta(days=30), "mo"),
    (timedelta(weeks=1), "w"),
    (timedelta(days=1), "d"),
    (timedelta(hours=1), "h"),
    (timedelta(minutes=1), "min"),
    (timedelta(seconds=1), "s"),
)


def format_duration(span: timedelta) -> str:
    """Format a span as a single-unit label such as '3d' or '2h'.

    Returns an empty string for spans under one second.
    """
    for unit, label in DURATION_UNITS:
        count = span // unit
        if count > 0:
            return f"{count}{label}"
    return ""


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an engine timestamp (YYYYMMDDThhmmssZ) as an aware UTC datetime."""
    if not value or not TIMESTAMP_RE.match(value):
        return None
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def split_fields(text: str) -> list[str]:
    """Split free text into engine arguments.

    Spaces separate fields except between a pair of single quotes. The
    quotes stay in the output; an unmatched quote protects the rest of the
    line.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in text:
        if ch == "'":
            in_quotes = not in_quotes
        if ch == " " and not in_quotes:
            if current:
                fields.append("".join(current))
                current = []
            continue
        current.append(ch)
    if current:
        fields.append("".join(current))
    return fields


def parse_created_id(output: str) -> str | None:
    """Extract the new task id from the first line of `task add` output."""
    first_line = output.rstrip("\n").split("\n")[0]
    match = CREATED_RE.search(first_line)
    if match:
        return match.group(1)
    return None


def render_row(task: Task, now: datetime) -> Row:
    """Render a Task into the seven display cells."""
    age = ""
    entry = parse_timestamp(task.entry)
    if entry is not None:
        age = format_duration(now - entry)

    due = ""
    if task.due:
        due_at = parse_timestamp(task.due)
        if due_at is not None:
            if due_at > now:
                due = format_duration(due_at - now)
            else:
                due = f"-{format_duration(now - due_at)}"

    cells = (
        str(task.id),
        age,
        task.priority,
        task.project,
        due,
        task.description,
        f"{task.urgency:.2f}",
    )
    return Row(
        task_id=task.id,
        uuid=task.uuid,
        cells=cells,
        color=PRIORITY_COLORS.get(task.priority),
    )


def separator_cells(tasks: list[Task]) -> tuple[str, ...]:
    """Dash row sized to the longest project and description."""
    project_width = max((len(t.project) for t in tasks), default=0)
    description_width = max((len(t.description) for t in tasks), default=0)
    return (
        "--",
        "---",
        "--",
        "-" * project_width,
        "---",
        "-" * description_width,
        "-" * 5,
    )
