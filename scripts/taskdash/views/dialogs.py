"""Modal overlays: new task entry and delete confirmation."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

MAX_DESCRIPTION_LENGTH = 100


class NewTaskScreen(ModalScreen[str | None]):
    """Single-line entry for `task add` arguments.

    Dismisses with the entered text on Enter, or None on Escape.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    NewTaskScreen {
        align: center middle;
    }

    NewTaskScreen #new-task-dialog {
        width: 80%;
        max-width: 104;
        height: auto;
        border: solid $accent;
        background: $surface;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="new-task-dialog"):
            yield Input(
                placeholder="description project:name priority:H due:tomorrow",
                max_length=MAX_DESCRIPTION_LENGTH,
                id="new-task-input",
            )

    def on_mount(self) -> None:
        self.query_one("#new-task-dialog").border_title = "New Task"
        self.query_one("#new-task-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Cancel/Delete choice for one task. Escape is Cancel."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }

    ConfirmDeleteScreen #confirm-delete-dialog {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }

    ConfirmDeleteScreen #question {
        width: 100%;
        margin-bottom: 1;
    }

    ConfirmDeleteScreen .button-row {
        height: auto;
        align: center middle;
    }

    ConfirmDeleteScreen Button {
        margin: 0 1;
    }
    """

    def __init__(self, task_id: int, description: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._task_id = task_id
        self._description = description

    @property
    def question(self) -> str:
        return f"Delete task {self._task_id} '{self._description}'?"

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-delete-dialog"):
            yield Label(self.question, id="question", markup=False)
            with Horizontal(classes="button-row"):
                yield Button("Cancel", id="cancel", variant="primary")
                yield Button("Delete", id="delete", variant="error")

    def on_mount(self) -> None:
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_cancel(self) -> None:
        self.dismiss(False)
