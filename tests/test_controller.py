"""Tests for controller.py - the visible row list and its mutations."""

import pytest

from conftest import NOW, FakeGateway, make_record

from taskdash.controller import TaskListController, parse_export
from taskdash.providers import TaskExportError


def make_controller(gateway: FakeGateway) -> TaskListController:
    return TaskListController(gateway, clock=lambda: NOW)


@pytest.fixture
def controller(loaded_gateway: FakeGateway) -> TaskListController:
    controller = make_controller(loaded_gateway)
    controller.load()
    return controller


class TestParseExport:
    """Tests for parse_export function."""

    def test_decodes_records(self) -> None:
        tasks = parse_export(b'[{"id": 3, "uuid": "u3", "urgency": 1.5, "tags": ["x"]}]')
        assert len(tasks) == 1
        assert tasks[0].id == 3
        assert tasks[0].urgency == 1.5

    def test_empty_payload_is_error(self) -> None:
        with pytest.raises(TaskExportError):
            parse_export(b"")

    def test_not_an_array_is_error(self) -> None:
        with pytest.raises(TaskExportError):
            parse_export(b'{"id": 1}')

    def test_bad_record_is_error(self) -> None:
        with pytest.raises(TaskExportError):
            parse_export(b'["not a record"]')


class TestLoad:
    """Tests for the initial load."""

    def test_filter_and_export(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        assert loaded_gateway.calls[0] == ("+PENDING", "export")

    def test_sorted_by_descending_urgency(self, controller: TaskListController) -> None:
        assert [r.task_id for r in controller.rows] == [2, 1, 3]

    def test_ties_keep_export_order(self, gateway: FakeGateway) -> None:
        gateway.respond_export(
            ["+PENDING", "export"],
            [make_record(10, 5.0), make_record(11, 5.0), make_record(12, 3.0)],
        )
        controller = make_controller(gateway)
        controller.load()

        assert [r.task_id for r in controller.rows] == [10, 11, 12]

    def test_custom_filter(self, gateway: FakeGateway) -> None:
        gateway.respond_export(["project:home", "export"], [make_record(1, 1.0)])
        controller = TaskListController(gateway, task_filter="project:home", clock=lambda: NOW)
        controller.load()

        assert len(controller.rows) == 1

    def test_separator_sized_to_whole_set(self, controller: TaskListController) -> None:
        assert controller.separator[3] == "-" * len("work.reports")
        assert controller.separator[5] == "-" * len("No project, no priority")
        assert controller.header == ("ID", "Age", "P", "Project", "Due", "Description", "Urg")

    def test_malformed_export_is_fatal(self, gateway: FakeGateway) -> None:
        gateway.respond(["+PENDING", "export"], b"[{not json")
        with pytest.raises(TaskExportError):
            make_controller(gateway).load()

    def test_failed_export_is_fatal(self, gateway: FakeGateway) -> None:
        gateway.respond(["+PENDING", "export"], ok=False)
        with pytest.raises(TaskExportError):
            make_controller(gateway).load()

    def test_bad_timestamp_is_not_fatal(self, gateway: FakeGateway) -> None:
        gateway.respond_export(["+PENDING", "export"], [make_record(1, 1.0, entry="garbage")])
        controller = make_controller(gateway)
        controller.load()

        assert controller.rows[0].cells[1] == ""


class TestCreate:
    """Tests for creating a task."""

    def test_appends_new_row(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["add", "buy", "milk", "+home"], "Created task 4.\n")
        loaded_gateway.respond_export(["4", "export"], [make_record(4, 99.0, description="buy milk")])

        row = controller.create("buy milk +home")

        assert row is not None
        assert row.task_id == 4
        # Appended last regardless of urgency
        assert controller.rows[-1] is row
        assert loaded_gateway.calls[-2:] == [("add", "buy", "milk", "+home"), ("4", "export")]

    def test_quoted_text_passed_through(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        controller.create("add 'buy milk'")
        assert loaded_gateway.calls[-1] == ("add", "add", "'buy milk'")

    def test_unrecognised_confirmation_is_noop(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["add", "x"], "Something else happened.\n")

        assert controller.create("x") is None
        assert len(controller.rows) == 3
        assert loaded_gateway.calls[-1] == ("add", "x")

    def test_failed_add_is_noop(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["add", "x"], ok=False)

        assert controller.create("x") is None
        assert len(controller.rows) == 3

    def test_unreadable_export_is_noop(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["add", "x"], "Created task 9.\n")
        loaded_gateway.respond(["9", "export"], "not json")

        assert controller.create("x") is None
        assert len(controller.rows) == 3
        assert any("task 9" in line for line in loaded_gateway.logged)

    def test_empty_export_is_noop(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["add", "x"], "Created task 9.\n")
        loaded_gateway.respond_export(["9", "export"], [])

        assert controller.create("x") is None


class TestComplete:
    """Tests for marking a task done."""

    def test_removes_row(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["1", "done"], "Completed task 1 'Task 1'.\n")

        row = controller.complete("uuid-1")

        assert row is not None and row.task_id == 1
        assert [r.task_id for r in controller.rows] == [2, 3]
        assert loaded_gateway.calls[-1] == ("1", "done")
        assert loaded_gateway.logged == ["Completed task 1 'Task 1'.\n"]

    def test_removes_row_even_when_engine_fails(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["1", "done"], ok=False)

        assert controller.complete("uuid-1") is not None
        assert [r.task_id for r in controller.rows] == [2, 3]

    def test_unknown_task(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        calls = len(loaded_gateway.calls)
        assert controller.complete("missing") is None
        assert len(loaded_gateway.calls) == calls

    def test_create_then_complete_round_trip(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        before = list(controller.rows)
        loaded_gateway.respond(["add", "temp"], "Created task 4.\n")
        loaded_gateway.respond_export(["4", "export"], [make_record(4, 1.0)])

        row = controller.create("temp")
        assert row is not None
        controller.complete(row.uuid)

        assert controller.rows == before


class TestDelete:
    """Tests for deleting a task."""

    def test_removes_row_and_skips_engine_prompt(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        row = controller.delete("uuid-3")

        assert row is not None and row.task_id == 3
        assert [r.task_id for r in controller.rows] == [2, 1]
        assert loaded_gateway.calls[-1] == ("rc.confirmation=off", "3", "delete")


class TestEditAndDetail:
    """Tests for edit and detail, which leave rows alone."""

    def test_edit_uses_interactive_call(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        before = list(controller.rows)

        assert controller.edit("uuid-2") is True
        assert loaded_gateway.interactive_calls == [("2", "edit")]
        assert controller.rows == before

    def test_detail_returns_raw_output(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["2"], "Name          Value\nID            2\n")

        assert controller.detail("uuid-2") == "Name          Value\nID            2\n"
        assert loaded_gateway.calls[-1] == ("2",)

    def test_detail_of_failed_call_is_empty(self, controller: TaskListController, loaded_gateway: FakeGateway) -> None:
        loaded_gateway.respond(["2"], ok=False)
        assert controller.detail("uuid-2") == ""
