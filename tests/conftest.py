"""Shared fixtures: a scripted stand-in for the task engine."""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from taskdash.providers import CommandResult  # noqa: E402

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_record(task_id: int, urgency: float, **fields) -> dict:
    record = {
        "id": task_id,
        "uuid": f"uuid-{task_id}",
        "description": f"Task {task_id}",
        "entry": "20240613T120000Z",
        "status": "pending",
        "urgency": urgency,
    }
    record.update(fields)
    return record


class FakeGateway:
    """Records every invocation and answers from a script."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.interactive_calls: list[tuple[str, ...]] = []
        self.responses: dict[tuple[str, ...], CommandResult] = {}
        self.logged: list[str] = []
        self.log_sink = None

    def respond(self, args: Sequence[str], output: bytes | str = b"", ok: bool = True) -> None:
        if isinstance(output, str):
            output = output.encode()
        self.responses[tuple(args)] = CommandResult(
            ok=ok, output=output if ok else b"", returncode=0 if ok else 1
        )

    def respond_export(self, args: Sequence[str], records: list[dict]) -> None:
        self.respond(args, json.dumps(records))

    def invoke(self, args: Sequence[str]) -> CommandResult:
        self.calls.append(tuple(args))
        return self.responses.get(tuple(args), CommandResult(ok=True, returncode=0))

    def interact(self, args: Sequence[str]) -> CommandResult:
        self.interactive_calls.append(tuple(args))
        return CommandResult(ok=True, returncode=0)

    def log(self, text: str) -> None:
        self.logged.append(text)
        if self.log_sink is not None:
            self.log_sink(text)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def records() -> list[dict]:
    return [
        make_record(1, 3.0, project="home", priority="L"),
        make_record(2, 8.5, project="work.reports", priority="H",
                    due="20240617T120000Z", description="Quarterly report"),
        make_record(3, 3.0, description="No project, no priority"),
    ]


@pytest.fixture
def loaded_gateway(gateway: FakeGateway, records: list[dict]) -> FakeGateway:
    gateway.respond_export(["+PENDING", "export"], records)
    return gateway
