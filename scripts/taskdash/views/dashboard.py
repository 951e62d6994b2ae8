"""Main dashboard view: task table, command log and detail pane."""

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Log
from textual.widgets.data_table import CellDoesNotExist

from taskdash.controller import TaskListController
from taskdash.providers import Row

HEADER_KEY = "header"
SEPARATOR_KEY = "separator"
FIXED_ROW_KEYS = (HEADER_KEY, SEPARATOR_KEY)


def styled_cells(row: Row) -> list[Text]:
    """Cells of a row, tinted with the row's priority colour."""
    return [Text(cell, style=row.color or "") for cell in row.cells]


class TaskTable(DataTable):
    """Task list; the task shortcuts only act while it has focus."""

    BINDINGS = [
        Binding("a", "app.new_task", "Add"),
        Binding("e", "app.edit_task", "Edit"),
        Binding("d", "app.complete_task", "Done"),
        Binding("x", "app.delete_task", "Delete"),
    ]


class DashboardScreen(Screen):
    """Task table on the left, detail pane on the right."""

    BINDINGS = [
        Binding("1", "focus_tasks", "Tasks", show=False),
        Binding("2", "focus_detail", "Detail", show=False),
        Binding("q", "app.quit", "Quit"),
    ]

    DEFAULT_CSS = """
    DashboardScreen #main {
        height: 1fr;
    }

    DashboardScreen #left-column {
        width: 1fr;
    }

    DashboardScreen #tasks {
        height: 1fr;
        border: solid $primary;
    }

    DashboardScreen #command-log {
        height: 5;
        border: solid $primary;
    }

    DashboardScreen #detail {
        width: 1fr;
        border: solid $primary;
    }

    DashboardScreen DataTable:focus, DashboardScreen Log:focus {
        border: solid $accent;
    }
    """

    def __init__(self, controller: TaskListController, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            with Vertical(id="left-column"):
                yield TaskTable(id="tasks", cursor_type="row", show_header=False, fixed_rows=2)
                yield Log(id="command-log")
            yield Log(id="detail")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#tasks", DataTable)
        table.border_title = "Tasks"
        self.query_one("#command-log", Log).border_title = "Command Log"
        self.query_one("#detail", Log).border_title = "Description"

        for label in self._controller.header:
            table.add_column(label, key=label)
        table.add_row(*self._controller.header, key=HEADER_KEY)
        table.add_row(*self._controller.separator, key=SEPARATOR_KEY)
        for row in self._controller.rows:
            table.add_row(*styled_cells(row), key=row.uuid)

        if self._controller.rows:
            table.move_cursor(row=len(FIXED_ROW_KEYS))
        table.focus()

    @property
    def table(self) -> DataTable:
        return self.query_one("#tasks", DataTable)

    @property
    def has_tasks(self) -> bool:
        return self.table.row_count > len(FIXED_ROW_KEYS)

    def selected_uuid(self) -> str | None:
        """UUID of the task under the cursor, None on the fixed rows."""
        table = self.table
        try:
            row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        except CellDoesNotExist:
            return None
        if row_key.value in FIXED_ROW_KEYS:
            return None
        return row_key.value

    def append_row(self, row: Row) -> None:
        self.table.add_row(*styled_cells(row), key=row.uuid)

    def remove_row(self, uuid: str) -> None:
        """Drop a task row and show whatever the cursor lands on."""
        self.table.remove_row(uuid)
        selected = self.selected_uuid()
        self.show_detail("" if selected is None else self._controller.detail(selected))

    def write_log(self, text: str) -> None:
        """Append engine output to the command log."""
        self.query_one("#command-log", Log).write_line(text.rstrip("\n"))

    def show_detail(self, text: str) -> None:
        detail = self.query_one("#detail", Log)
        detail.clear()
        if text:
            detail.write(text)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        key = event.row_key.value
        if key is None or key in FIXED_ROW_KEYS:
            self.show_detail("")
        else:
            self.show_detail(self._controller.detail(key))

    def action_focus_tasks(self) -> None:
        self.table.focus()

    def action_focus_detail(self) -> None:
        self.query_one("#detail", Log).focus()
