"""
Concrete implementation of TaskGateway that shells out to the task engine.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Sequence

from taskdash.providers import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "task"

LogSink = Callable[[str], None]


class TaskwarriorGateway:
    """TaskGateway implementation running the engine as a subprocess.

    Every call blocks until the engine exits. A failed call is never
    raised: its output goes to the log sink and the caller gets a result
    with ``ok=False`` and no output.
    """

    def __init__(self, command: str = DEFAULT_COMMAND, log_sink: LogSink | None = None):
        self._command = command
        self.log_sink = log_sink

    @property
    def command(self) -> str:
        return self._command

    def invoke(self, args: Sequence[str]) -> CommandResult:
        """Run the engine and capture combined stdout/stderr."""
        argv = [self._command, *args]
        logger.debug("Running %s", argv)
        try:
            result = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            return self._failed(argv, str(e).encode(), None)

        if result.returncode != 0:
            return self._failed(argv, result.stdout or b"", result.returncode)
        return CommandResult(ok=True, output=result.stdout or b"", returncode=0)

    def interact(self, args: Sequence[str]) -> CommandResult:
        """Run the engine attached to the terminal (for its own editor)."""
        argv = [self._command, *args]
        logger.debug("Running interactively %s", argv)
        try:
            result = subprocess.run(argv, check=False)
        except OSError as e:
            return self._failed(argv, str(e).encode(), None)

        if result.returncode != 0:
            message = f"{' '.join(argv)} exited with status {result.returncode}"
            return self._failed(argv, message.encode(), result.returncode)
        return CommandResult(ok=True, returncode=0)

    def _failed(self, argv: list[str], output: bytes, returncode: int | None) -> CommandResult:
        text = output.decode("utf-8", errors="replace")
        logger.warning("Command %s failed (%s): %s", argv, returncode, text.strip())
        self.log(text)
        return CommandResult(ok=False, returncode=returncode)

    def log(self, text: str) -> None:
        """Append text to the log sink, if one is attached."""
        if self.log_sink is not None:
            self.log_sink(text)
