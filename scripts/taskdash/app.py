"""
Taskdash TUI Application.

The app owns the single ModeMachine. Key presses and overlay results are
all handled on its one message loop, so rows and mode change in one place.
"""

from __future__ import annotations

import logging

from textual.app import App, SuspendNotSupported

from taskdash.controller import TaskListController
from taskdash.modes import ModeMachine
from taskdash.providers import TaskGateway
from taskdash.views.dashboard import DashboardScreen
from taskdash.views.dialogs import ConfirmDeleteScreen, NewTaskScreen

logger = logging.getLogger(__name__)


class TaskDashApp(App):
    """Main Taskdash TUI application."""

    TITLE = "Taskdash"
    SUB_TITLE = "Pending Tasks"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(
        self,
        controller: TaskListController,
        gateway: TaskGateway,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._gateway = gateway
        self.modes = ModeMachine()
        self._dashboard: DashboardScreen | None = None

    @property
    def controller(self) -> TaskListController:
        return self._controller

    @property
    def dashboard(self) -> DashboardScreen:
        if self._dashboard is None:
            raise RuntimeError("dashboard is not mounted yet")
        return self._dashboard

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._dashboard = DashboardScreen(self._controller)
        self._gateway.log_sink = self._dashboard.write_log
        self.push_screen(self._dashboard)

    def action_new_task(self) -> None:
        """Open the new task entry."""
        if not self.modes.is_normal:
            return
        self.modes.begin_create()
        self.push_screen(NewTaskScreen(), self._finish_new_task)

    def _finish_new_task(self, text: str | None) -> None:
        self.modes.finish()
        if text is not None:
            row = self._controller.create(text)
            if row is not None:
                self.dashboard.append_row(row)
        self.dashboard.action_focus_tasks()

    def action_edit_task(self) -> None:
        """Hand the selected task to the engine's editor."""
        uuid = self.dashboard.selected_uuid()
        if not self.modes.is_normal or uuid is None:
            return
        try:
            with self.suspend():
                self._controller.edit(uuid)
        except SuspendNotSupported:
            logger.debug("Driver cannot suspend; running editor in place")
            self._controller.edit(uuid)

    def action_complete_task(self) -> None:
        """Mark the selected task done and drop its row."""
        uuid = self.dashboard.selected_uuid()
        if not self.modes.is_normal or uuid is None:
            return
        if self._controller.complete(uuid) is not None:
            self.dashboard.remove_row(uuid)

    def action_delete_task(self) -> None:
        """Ask before deleting the selected task."""
        uuid = self.dashboard.selected_uuid()
        if not self.modes.is_normal or uuid is None:
            return
        row = self._controller.find(uuid)
        if row is None:
            return
        self.modes.begin_delete(uuid)
        self.push_screen(
            ConfirmDeleteScreen(row.task_id, row.description),
            self._finish_delete,
        )

    def _finish_delete(self, confirmed: bool | None) -> None:
        uuid = self.modes.confirmed_target()
        self.modes.finish()
        if confirmed and self._controller.delete(uuid) is not None:
            self.dashboard.remove_row(uuid)
        if self.dashboard.has_tasks:
            self.dashboard.action_focus_tasks()

