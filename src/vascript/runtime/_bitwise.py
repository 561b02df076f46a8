"""Bitwise operators: &, |, ^, <<, >> (integer operands only)."""

from __future__ import annotations

import operator

from vascript.model.nodes import Node
from vascript.model.types import INTEGER_TYPES, Operation

from ._context import ActionContext
from ._errors import UnsupportedOperationError
from ._values import read_number, require, set_number


_BITWISE = {
    Operation.BAND: operator.and_,
    Operation.BOR: operator.or_,
    Operation.XOR: operator.xor,
    Operation.LSHIFT: operator.lshift,
    Operation.RSHIFT: operator.rshift,
}


def _bitwise(op: Operation, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    vtype = left.value.type
    if vtype not in INTEGER_TYPES:
        raise UnsupportedOperationError(f"{op.value} requires an integer operand, got {vtype}")

    a, b = read_number(left.value, vtype), read_number(right.value, vtype)
    if op in (Operation.LSHIFT, Operation.RSHIFT):
        # Shifting by the full width or more clears every bit
        b = min(b, 32)
    number = _BITWISE[op](a, b)
    set_number(result.value, vtype, number)


def band(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _bitwise(Operation.BAND, result, left, right)


def bor(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _bitwise(Operation.BOR, result, left, right)


def xor(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _bitwise(Operation.XOR, result, left, right)


def lshift(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _bitwise(Operation.LSHIFT, result, left, right)


def rshift(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _bitwise(Operation.RSHIFT, result, left, right)
