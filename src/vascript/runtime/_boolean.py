"""Logical operators: &&, ||, !.

Numbers are true when non-zero, strings when non-empty (an unset string
is empty).  The result is always a UINT16 holding 0 or 1.
"""

from __future__ import annotations

from vascript.model.nodes import Node, Value
from vascript.model.types import NUMERIC_TYPES, VarType

from ._context import ActionContext
from ._errors import UnsupportedOperationError
from ._values import is_empty, read_number, require, set_number


def truthy(value: Value, vtype: VarType | None) -> bool:
    """Truth of *value* read as *vtype*."""
    if vtype is VarType.STR:
        return not is_empty(value)
    if vtype in NUMERIC_TYPES:
        return read_number(value, vtype) != 0
    raise UnsupportedOperationError(f"no truth value for {vtype}")


def set_flag(result: Node, flag: bool) -> None:
    set_number(result.value, VarType.UINT16, 1 if flag else 0)


def logical_and(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    vtype = left.value.type
    set_flag(result, truthy(left.value, vtype) and truthy(right.value, vtype))


def logical_or(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    vtype = left.value.type
    set_flag(result, truthy(left.value, vtype) or truthy(right.value, vtype))


def logical_not(ctx: ActionContext, result: Node, left: Node, right: Node | None) -> None:
    require(result, left)
    set_flag(result, not truthy(left.value, left.value.type))
