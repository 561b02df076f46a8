"""Typecast operators: (float), (int), (short), (string).

Numeric conversions truncate toward zero and wrap to the target width.
Strings convert through their leading numeric prefix, 0 when there is none.
``(string)`` renders a number with a printf-style format: the string in the
right operand if there is one, otherwise the per-type default.
"""

from __future__ import annotations

from vascript.model.nodes import Node
from vascript.model.types import INTEGER_TYPES, VarType

from ._context import ActionContext
from ._errors import InvalidArgumentError, UnsupportedOperationError
from ._strings import fresh
from ._values import (
    parse_float_prefix,
    parse_int_prefix,
    read_number,
    require,
    set_number,
    truncate,
)


def _to_integer(left: Node, target: VarType, result: Node) -> None:
    vtype = left.value.type
    if vtype in INTEGER_TYPES:
        number = read_number(left.value, vtype)
    elif vtype is VarType.FLOAT:
        number = truncate(left.value.f)
    elif vtype is VarType.STR:
        number = parse_int_prefix(left.value.text)
    else:
        raise UnsupportedOperationError(f"cannot convert {vtype} to {target.value}")
    set_number(result.value, target, number)


def to_float(ctx: ActionContext, result: Node, left: Node, right: Node | None) -> None:
    require(result, left)
    vtype = left.value.type
    if vtype is VarType.STR:
        number = parse_float_prefix(left.value.text)
    elif vtype in INTEGER_TYPES or vtype is VarType.FLOAT:
        number = read_number(left.value, vtype)
    else:
        raise UnsupportedOperationError(f"cannot convert {vtype} to FLOAT")
    set_number(result.value, VarType.FLOAT, number)


def to_int(ctx: ActionContext, result: Node, left: Node, right: Node | None) -> None:
    require(result, left)
    _to_integer(left, VarType.UINT32, result)


def to_short(ctx: ActionContext, result: Node, left: Node, right: Node | None) -> None:
    require(result, left)
    _to_integer(left, VarType.UINT16, result)


def _format_for(ctx: ActionContext, vtype: VarType, right: Node | None) -> str:
    if isinstance(right, Node) and right.value.type is VarType.STR and right.value.text is not None:
        return right.value.text.decode("latin-1")
    if vtype is VarType.UINT16:
        return ctx.config.uint16_format
    if vtype is VarType.UINT32:
        return ctx.config.uint32_format
    return ctx.config.float_format


def _render(fmt: str, number: int | float) -> str:
    """printf-style rendering; a format without a conversion is literal text."""
    try:
        return fmt % number
    except (TypeError, ValueError, OverflowError) as exc:
        error = exc
    try:
        return fmt % ()
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"bad format {fmt!r}: {error}") from error


def to_string(ctx: ActionContext, result: Node, left: Node, right: Node | None) -> None:
    require(result, left)
    vtype = left.value.type
    if vtype is VarType.FLOAT:
        number: int | float = left.value.f
    elif vtype in INTEGER_TYPES:
        number = read_number(left.value, vtype)
    else:
        raise UnsupportedOperationError(f"cannot render {vtype} as a string")

    fmt = _format_for(ctx, vtype, right)
    rendered = _render(fmt, number).encode("latin-1", errors="replace")

    limit = ctx.config.render_capacity
    rendered = rendered[:limit]
    buffer = fresh(result.value, limit, ctx.config)
    buffer.write(rendered)
    result.value.length = len(rendered)
