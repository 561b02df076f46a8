"""String buffer manager.

Buffers are allocated at ``min_string_capacity`` bytes or more and only
grow.  Assignment and in-place concatenation leave the result node sharing
the left node's buffer; ``+`` and rendering always allocate a new buffer.
"""

from __future__ import annotations

from vascript.model.nodes import Node, Value
from vascript.model.strings import StringBuffer
from vascript.model.types import VarType

from ._config import EngineConfig
from ._errors import OutOfMemoryError, UnsupportedOperationError


def _new_buffer(capacity: int) -> StringBuffer:
    try:
        return StringBuffer(capacity)
    except MemoryError as exc:
        raise OutOfMemoryError(f"cannot allocate {capacity} byte string") from exc


def allocate(value: Value, length: int, config: EngineConfig) -> StringBuffer:
    """Make sure *value* has a buffer able to hold *length* bytes plus NUL."""
    if value.type is not VarType.STR:
        raise UnsupportedOperationError(
            f"cannot allocate string storage for {value.type} value"
        )

    needed = max(config.min_string_capacity, length + 1)
    if value.buffer is None:
        value.buffer = _new_buffer(needed)
    elif value.buffer.capacity < length + 1:
        try:
            value.buffer.grow(needed)
        except MemoryError as exc:
            raise OutOfMemoryError(f"cannot grow string to {needed} bytes") from exc
    return value.buffer


def fresh(value: Value, length: int, config: EngineConfig) -> StringBuffer:
    """Attach a new, unshared buffer to *value*.

    The new buffer is never smaller than the one it replaces.
    """
    capacity = max(config.min_string_capacity, length + 1, value.capacity)
    value.type = VarType.STR
    value.buffer = _new_buffer(capacity)
    return value.buffer


def store_bytes(value: Value, data: bytes, config: EngineConfig) -> None:
    """Copy *data* into *value*'s own buffer, growing it as needed."""
    value.type = VarType.STR
    buffer = allocate(value, len(data), config)
    buffer.write(data)
    value.length = len(data)


def _require_strings(left: Node, right: Node) -> None:
    if left.value.type is not VarType.STR or right.value.type is not VarType.STR:
        raise UnsupportedOperationError(
            f"string operation on {left.value.type} and {right.value.type}"
        )


def _alias(result: Node, source: Node) -> None:
    result.value.type = VarType.STR
    result.value.buffer = source.value.buffer
    result.value.length = source.value.length


def assign_string(result: Node, left: Node, right: Node, config: EngineConfig) -> None:
    """left = right; result aliases left's buffer."""
    _require_strings(left, right)
    store_bytes(left.value, right.value.text or b"", config)
    _alias(result, left)


def add_string(result: Node, left: Node, right: Node, config: EngineConfig) -> None:
    """result = left + right in a freshly allocated buffer."""
    _require_strings(left, right)
    if left.value.buffer is None or right.value.buffer is None:
        raise UnsupportedOperationError("cannot concatenate an unset string")

    data = left.value.text + right.value.text
    buffer = fresh(result.value, len(data), config)
    buffer.write(data)
    result.value.length = len(data)


def concat_string(result: Node, left: Node, right: Node, config: EngineConfig) -> None:
    """left += right in place; result aliases left's buffer."""
    _require_strings(left, right)
    if left.value.buffer is None or right.value.buffer is None:
        raise UnsupportedOperationError("cannot concatenate an unset string")

    offset = left.value.length
    tail = right.value.text
    buffer = allocate(left.value, offset + len(tail), config)
    buffer.write(tail, offset)
    left.value.length = offset + len(tail)
    _alias(result, left)
