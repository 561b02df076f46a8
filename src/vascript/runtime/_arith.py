"""Arithmetic operators: +, -, *, /.

``result = left <op> right`` at the width of the left operand.  String
``+`` concatenates into a new buffer and leaves both operands untouched.
"""

from __future__ import annotations

from vascript.model.nodes import Node
from vascript.model.types import NUMERIC_TYPES, Operation, VarType

from ._context import ActionContext
from ._errors import UnsupportedOperationError
from ._strings import add_string
from ._values import divide, read_number, require, set_number


_ARITH = {
    Operation.ADD: lambda a, b, t: a + b,
    Operation.SUB: lambda a, b, t: a - b,
    Operation.MUL: lambda a, b, t: a * b,
    Operation.DIV: divide,
}


def _arith(ctx: ActionContext, op: Operation, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    vtype = left.value.type

    if vtype is VarType.STR:
        if op is not Operation.ADD:
            raise UnsupportedOperationError(f"{op.value} is not supported for strings")
        add_string(result, left, right, ctx.config)
        return

    if vtype not in NUMERIC_TYPES:
        raise UnsupportedOperationError(f"{op.value} on untyped operand")

    number = _ARITH[op](read_number(left.value, vtype), read_number(right.value, vtype), vtype)
    set_number(result.value, vtype, number)


def add(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _arith(ctx, Operation.ADD, result, left, right)


def sub(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _arith(ctx, Operation.SUB, result, left, right)


def mul(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _arith(ctx, Operation.MUL, result, left, right)


def div(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _arith(ctx, Operation.DIV, result, left, right)
