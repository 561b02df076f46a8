"""Status codes and exception hierarchy for the action engine.

Every failure raised by an engine is an ``ActionError`` carrying a
``Status``.  Hosts that prefer status codes use ``execute()`` which turns
the outcome of a compound statement into a single ``Status``.
"""

from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    OK = "OK"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
    NOT_FOUND = "NOT_FOUND"
    OUT_OF_MEMORY = "OUT_OF_MEMORY"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    STORE_ERROR = "STORE_ERROR"


class ActionError(Exception):
    """Base class for every action evaluation failure."""

    status: Status = Status.INVALID_ARGUMENT

    @property
    def description(self) -> str:
        return str(self) or self.status.value.replace("_", " ").lower()


class InvalidArgumentError(ActionError):
    """A required node or operand is missing or malformed."""

    status = Status.INVALID_ARGUMENT


class UnsupportedOperationError(ActionError):
    """No handler exists, or the operand type is not handled."""

    status = Status.UNSUPPORTED_OPERATION


class NotFoundError(ActionError):
    """Timer id out of range / not armed, or unresolvable external name."""

    status = Status.NOT_FOUND


class OutOfMemoryError(ActionError):
    """A string buffer could not be grown."""

    status = Status.OUT_OF_MEMORY


class DivisionByZeroError(ActionError):
    status = Status.DIVISION_BY_ZERO


class StoreError(ActionError):
    """Failure reported by the external variable store, surfaced verbatim."""

    status = Status.STORE_ERROR
