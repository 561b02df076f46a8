"""External variable store interface and an in-memory implementation."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from vascript.model.types import TypedValue, VarType

from ._errors import StoreError


logger = logging.getLogger(__name__)


@runtime_checkable
class VariableStore(Protocol):
    """The three calls the engine makes on the variable store.

    Handles are opaque; the engine only passes back what ``find_by_name``
    returned.  Failures are raised as ``StoreError``.
    """

    def find_by_name(self, name: str) -> Any | None: ...

    def get(self, handle: Any) -> TypedValue: ...

    def set(self, handle: Any, value: TypedValue) -> None: ...


class MemoryVariableStore:
    """Dict-backed variable store.

    Handles are small integers allocated in declaration order.  Every
    ``set`` call is recorded in ``writes`` as ``(name, TypedValue)``.

    Parameters
    ----------
    variables : dict[str, TypedValue]
        Initial variables by name.
    """

    def __init__(self, variables: dict[str, TypedValue] | None = None) -> None:
        self._names: list[str] = []
        self._values: dict[int, TypedValue] = {}
        self._by_name: dict[str, int] = {}
        self.writes: list[tuple[str, TypedValue]] = []
        for name, value in (variables or {}).items():
            self.define(name, value)

    def define(self, name: str, value: TypedValue) -> int:
        """Create (or overwrite) a variable and return its handle."""
        handle = self._by_name.get(name)
        if handle is None:
            handle = len(self._names)
            self._names.append(name)
            self._by_name[name] = handle
        self._values[handle] = value
        return handle

    def find_by_name(self, name: str) -> int | None:
        return self._by_name.get(name)

    def get(self, handle: int) -> TypedValue:
        try:
            return self._values[handle]
        except (KeyError, TypeError) as exc:
            raise StoreError(f"invalid variable handle {handle!r}") from exc

    def set(self, handle: int, value: TypedValue) -> None:
        current = self.get(handle)
        if current.type is not value.type:
            raise StoreError(
                f"type mismatch writing {self._names[handle]}: "
                f"{value.type.value} into {current.type.value}"
            )
        self._values[handle] = value
        self.writes.append((self._names[handle], value))
        logger.debug("set %s = %r", self._names[handle], value.data)

    def value_of(self, name: str) -> int | float | bytes:
        """Current raw value of *name* (test and host convenience)."""
        handle = self._by_name.get(name)
        if handle is None:
            raise StoreError(f"unknown variable {name!r}")
        return self._values[handle].data


def typed(vtype: VarType, data: int | float | bytes | str) -> TypedValue:
    """Build a TypedValue, encoding ``str`` data for STR variables."""
    if vtype is VarType.STR and isinstance(data, str):
        data = data.encode()
    return TypedValue(type=vtype, data=data)
