"""Value helpers: width handling, numeric prefix parsing, store conversion."""

from __future__ import annotations

import math
import re
import struct

from vascript.model.nodes import Node, Value
from vascript.model.types import TypedValue, VarType

from ._config import EngineConfig
from ._errors import DivisionByZeroError, InvalidArgumentError, UnsupportedOperationError
from ._strings import store_bytes


_MASKS = {
    VarType.UINT16: 0xFFFF,
    VarType.UINT32: 0xFFFFFFFF,
}


def to_float32(number: float) -> float:
    """Round *number* to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def set_number(value: Value, vtype: VarType, number: int | float) -> None:
    """Store *number* in *value* as *vtype*, wrapping or rounding to width."""
    if vtype is VarType.FLOAT:
        value.number = to_float32(float(number))
    elif vtype in _MASKS:
        if isinstance(number, float):
            number = truncate(number)
        value.number = number & _MASKS[vtype]
    else:
        raise UnsupportedOperationError(f"{vtype} is not a numeric type")
    value.type = vtype


def read_number(value: Value, vtype: VarType) -> int | float:
    """Read *value*'s numeric slot at the width of *vtype*."""
    if vtype is VarType.UINT16:
        return value.ui
    if vtype is VarType.UINT32:
        return value.ul
    if vtype is VarType.FLOAT:
        return value.f
    raise UnsupportedOperationError(f"{vtype} is not a numeric type")


def truncate(number: float) -> int:
    """Truncate toward zero; non-finite values become 0."""
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


def is_empty(value: Value) -> bool:
    return value.buffer is None or value.length == 0


# ---------------------------------------------------------------------------
# Leading numeric prefix parsing (atoi / atof semantics)
# ---------------------------------------------------------------------------

_INT_PREFIX_RE = re.compile(rb"^\s*([+-]?\d+)")

_FLOAT_PREFIX_RE = re.compile(
    rb"^\s*([+-]?(?:"
    rb"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
    rb"|inf(?:inity)?"
    rb"|nan"
    rb"))",
    re.IGNORECASE,
)


def parse_int_prefix(data: bytes | None) -> int:
    """Parse the leading decimal integer of *data*; 0 if there is none."""
    if not data:
        return 0
    m = _INT_PREFIX_RE.match(data)
    if m is None:
        return 0
    return int(m.group(1))


def parse_float_prefix(data: bytes | None) -> float:
    """Parse the leading float of *data*; 0.0 if there is none."""
    if not data:
        return 0.0
    m = _FLOAT_PREFIX_RE.match(data)
    if m is None:
        return 0.0
    return float(m.group(1))


# ---------------------------------------------------------------------------
# Store conversion
# ---------------------------------------------------------------------------

def to_typed(value: Value) -> TypedValue:
    """Snapshot *value* for the external store."""
    if value.type is VarType.STR:
        return TypedValue(type=VarType.STR, data=value.text or b"")
    if value.type is VarType.FLOAT:
        return TypedValue(type=VarType.FLOAT, data=value.f)
    if value.type in _MASKS:
        return TypedValue(type=value.type, data=read_number(value, value.type))
    raise UnsupportedOperationError(f"cannot export untyped value ({value.type})")


def load_typed(value: Value, typed: TypedValue, config: EngineConfig) -> None:
    """Overwrite *value* with a value read from the external store."""
    if typed.type is VarType.STR:
        data = typed.data if isinstance(typed.data, bytes) else str(typed.data).encode()
        store_bytes(value, data, config)
    else:
        set_number(value, typed.type, typed.data)


# ---------------------------------------------------------------------------
# Operand checks
# ---------------------------------------------------------------------------

def require(*nodes: object) -> None:
    """Raise InvalidArgumentError unless every operand is an expression node."""
    for node in nodes:
        if not isinstance(node, Node):
            raise InvalidArgumentError(
                "missing operand" if node is None
                else f"expected an expression, got {type(node).__name__}"
            )


def divide(a: int | float, b: int | float, vtype: VarType) -> int | float:
    """Quotient at *vtype*: true division for FLOAT, floor for the unsigned types."""
    if b == 0:
        raise DivisionByZeroError("division by zero")
    if vtype is VarType.FLOAT:
        return a / b
    return a // b
