"""
Data types shared by the dashboard.

Protocols define the interface to the task engine; implementations can be
swapped for testing.
"""

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence


class TaskExportError(ValueError):
    """Raised when an engine export payload cannot be decoded."""


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of one engine export record."""

    id: int
    uuid: str
    description: str = ""
    age: str = ""
    due: str = ""
    entry: str = ""
    modified: str = ""
    priority: str = ""
    project: str = ""
    status: str = ""
    urgency: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Build a Task from a decoded export record."""
        return cls(
            id=int(data.get("id", 0)),
            uuid=data.get("uuid", ""),
            description=data.get("description", ""),
            age=data.get("age", ""),
            due=data.get("due", ""),
            entry=data.get("entry", ""),
            modified=data.get("modified", ""),
            priority=data.get("priority", ""),
            project=data.get("project", ""),
            status=data.get("status", ""),
            urgency=float(data.get("urgency", 0.0)),
        )


@dataclass(frozen=True)
class Row:
    """Rendered, display-only projection of one Task."""

    task_id: int
    uuid: str
    cells: tuple[str, ...]
    color: str | None = None

    @property
    def description(self) -> str:
        return self.cells[5]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one engine invocation."""

    ok: bool
    output: bytes = b""
    returncode: int | None = None

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")


class TaskGateway(Protocol):
    """Protocol for invoking the task engine."""

    log_sink: Callable[[str], None] | None

    def invoke(self, args: Sequence[str]) -> CommandResult:
        """Run the engine with captured output."""
        ...

    def interact(self, args: Sequence[str]) -> CommandResult:
        """Run the engine attached to the terminal."""
        ...

    def log(self, text: str) -> None:
        """Append text to the visible command log."""
        ...
