"""Comparison operators: ==, !=, >, <, >=, <=.

Numbers compare by value at the left operand's width.  Strings compare
byte-wise; an unset or empty string is less than any non-empty string and
equal to another empty one.  The result is a UINT16 holding 0 or 1.
"""

from __future__ import annotations

import operator

from vascript.model.nodes import Node
from vascript.model.types import NUMERIC_TYPES, Operation, VarType

from ._boolean import set_flag
from ._context import ActionContext
from ._errors import UnsupportedOperationError
from ._values import read_number, require


_COMPARE = {
    Operation.EQUALS: operator.eq,
    Operation.GT: operator.gt,
    Operation.LT: operator.lt,
    Operation.GTE: operator.ge,
    Operation.LTE: operator.le,
}


def _operands(left: Node, right: Node) -> tuple[int | float | bytes, int | float | bytes]:
    vtype = left.value.type
    if vtype is VarType.STR:
        return left.value.text or b"", right.value.text or b""
    if vtype in NUMERIC_TYPES:
        return read_number(left.value, vtype), read_number(right.value, vtype)
    raise UnsupportedOperationError(f"cannot compare {vtype}")


def _compare(op: Operation, result: Node, left: Node, right: Node) -> bool:
    require(result, left, right)
    a, b = _operands(left, right)
    flag = _COMPARE[op](a, b)
    set_flag(result, flag)
    return flag


def equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _compare(Operation.EQUALS, result, left, right)


def not_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    set_flag(result, not _compare(Operation.EQUALS, result, left, right))


def greater_than(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _compare(Operation.GT, result, left, right)


def less_than(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _compare(Operation.LT, result, left, right)


def greater_than_or_equal(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _compare(Operation.GTE, result, left, right)


def less_than_or_equal(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _compare(Operation.LTE, result, left, right)
