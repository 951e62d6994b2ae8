"""Interaction modes of the dashboard and the transitions between them."""

from __future__ import annotations

from enum import Enum


class Mode(Enum):
    NORMAL = "normal"
    CREATE_ENTRY = "create"
    CONFIRM_DELETE = "confirm-delete"


class InvalidTransition(RuntimeError):
    """Raised when a mode change is requested from the wrong mode."""


class ModeMachine:
    """Single owner of the current mode.

    Only one overlay can be open at a time, so every transition starts
    from or returns to NORMAL.
    """

    def __init__(self) -> None:
        self._mode = Mode.NORMAL
        self._delete_target: str | None = None

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def is_normal(self) -> bool:
        return self._mode is Mode.NORMAL

    @property
    def delete_target(self) -> str | None:
        return self._delete_target

    def begin_create(self) -> None:
        self._require(Mode.NORMAL)
        self._mode = Mode.CREATE_ENTRY

    def begin_delete(self, uuid: str) -> None:
        self._require(Mode.NORMAL)
        self._mode = Mode.CONFIRM_DELETE
        self._delete_target = uuid

    def confirmed_target(self) -> str:
        """Target of the pending delete; valid only while confirming."""
        self._require(Mode.CONFIRM_DELETE)
        if self._delete_target is None:
            raise InvalidTransition("no delete target")
        return self._delete_target

    def finish(self) -> None:
        """Close the current overlay and go back to NORMAL."""
        if self._mode is Mode.NORMAL:
            raise InvalidTransition("no overlay is open")
        self._mode = Mode.NORMAL
        self._delete_target = None

    def _require(self, mode: Mode) -> None:
        if self._mode is not mode:
            raise InvalidTransition(f"expected {mode.value} mode, in {self._mode.value}")
