"""
Task list controller.

Keeps the ordered list of visible rows in step with the engine. Rows are
only ever appended (create) or removed (done/delete); the full list is
rebuilt by ``load()`` at startup only.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Callable

from taskdash.formatting import (
    TASK_HEADERS,
    parse_created_id,
    render_row,
    separator_cells,
    split_fields,
)
from taskdash.providers import Row, Task, TaskExportError, TaskGateway

logger = logging.getLogger(__name__)

DEFAULT_FILTER = "+PENDING"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_export(payload: bytes) -> list[Task]:
    """Decode an engine export (a JSON array of task records)."""
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TaskExportError(f"invalid export payload: {e}") from e
    if not isinstance(data, list):
        raise TaskExportError("export payload is not a JSON array")
    try:
        return [Task.from_dict(record) for record in data]
    except (AttributeError, TypeError, ValueError) as e:
        raise TaskExportError(f"invalid task record: {e}") from e


class TaskListController:
    """Owns the visible rows and relays mutations through the gateway."""

    def __init__(
        self,
        gateway: TaskGateway,
        task_filter: str = DEFAULT_FILTER,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gateway = gateway
        self._filter = task_filter
        self._clock = clock
        self.header: tuple[str, ...] = TASK_HEADERS
        self.separator: tuple[str, ...] = separator_cells([])
        self.rows: list[Row] = []

    def load(self) -> list[Row]:
        """Fetch, sort and render every task matching the filter.

        Raises TaskExportError when the export cannot be decoded.
        """
        result = self._gateway.invoke([self._filter, "export"])
        tasks = parse_export(result.output)
        # sorted() is stable: equal urgencies keep export order
        tasks = sorted(tasks, key=lambda t: t.urgency, reverse=True)

        self.separator = separator_cells(tasks)
        now = self._clock()
        self.rows = [render_row(task, now) for task in tasks]
        logger.info("Loaded %d task(s) matching %s", len(self.rows), self._filter)
        return list(self.rows)

    def find(self, uuid: str) -> Row | None:
        for row in self.rows:
            if row.uuid == uuid:
                return row
        return None

    def create(self, text: str) -> Row | None:
        """Add a task from free text and append its row.

        Returns None when the engine did not confirm the creation.
        """
        result = self._gateway.invoke(["add", *split_fields(text)])
        if not result.ok:
            return None

        task_id = parse_created_id(result.text)
        if task_id is None:
            logger.warning("Unrecognised add output: %r", result.text)
            return None

        export = self._gateway.invoke([task_id, "export"])
        if not export.ok:
            return None
        try:
            tasks = parse_export(export.output)
        except TaskExportError as e:
            logger.warning("Could not read back task %s: %s", task_id, e)
            self._log(f"Could not read back task {task_id}: {e}")
            return None
        if not tasks:
            logger.warning("Export of task %s returned no records", task_id)
            return None

        row = render_row(tasks[0], self._clock())
        self.rows.append(row)
        return row

    def edit(self, uuid: str) -> bool:
        """Hand the task to the engine's own editor. Rows are not re-rendered."""
        row = self.find(uuid)
        if row is None:
            return False
        return self._gateway.interact([str(row.task_id), "edit"]).ok

    def complete(self, uuid: str) -> Row | None:
        """Mark a task done and drop its row, whatever the engine answered."""
        row = self.find(uuid)
        if row is None:
            return None
        result = self._gateway.invoke([str(row.task_id), "done"])
        self.rows.remove(row)
        if result.ok:
            self._log(result.text)
        return row

    def delete(self, uuid: str) -> Row | None:
        """Drop a row and delete the task without the engine's own prompt."""
        row = self.find(uuid)
        if row is None:
            return None
        self.rows.remove(row)
        self._gateway.invoke(["rc.confirmation=off", str(row.task_id), "delete"])
        return row

    def detail(self, uuid: str) -> str:
        """Raw engine detail text for one task."""
        row = self.find(uuid)
        if row is None:
            return ""
        return self._gateway.invoke([str(row.task_id)]).text

    def _log(self, text: str) -> None:
        self._gateway.log(text)
