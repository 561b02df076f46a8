"""Assignment operators: =, +=, -=, *=, /=, &=, |=, ^=, ++, --.

Every operator updates the left node in place, mirrors the new value into
the result node and, when the left node is an external variable, writes it
back to the variable store.  A failed write-back is the operator's failure.
"""

from __future__ import annotations

from collections.abc import Callable

from vascript.model.nodes import Node
from vascript.model.types import INTEGER_TYPES, NUMERIC_TYPES, Operation, VarType

from ._context import ActionContext
from ._errors import InvalidArgumentError, UnsupportedOperationError
from ._strings import assign_string, concat_string
from ._values import divide, read_number, require, set_number, to_typed


def write_back(ctx: ActionContext, node: Node) -> None:
    """Push *node*'s value to the variable store if it is an external variable."""
    if node.operation is Operation.SYSVAR:
        ctx.store.set(node.handle, to_typed(node.value))


_COMBINE: dict[Operation, Callable[[int | float, int | float, VarType], int | float]] = {
    Operation.ASSIGN: lambda a, b, t: b,
    Operation.PLUS_EQUALS: lambda a, b, t: a + b,
    Operation.MINUS_EQUALS: lambda a, b, t: a - b,
    Operation.TIMES_EQUALS: lambda a, b, t: a * b,
    Operation.DIV_EQUALS: divide,
    Operation.AND_EQUALS: lambda a, b, t: a & b,
    Operation.OR_EQUALS: lambda a, b, t: a | b,
    Operation.XOR_EQUALS: lambda a, b, t: a ^ b,
}

_INTEGER_ONLY = frozenset({
    Operation.AND_EQUALS, Operation.OR_EQUALS, Operation.XOR_EQUALS,
})


def _apply(ctx: ActionContext, op: Operation, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    vtype = left.value.type

    if vtype is VarType.STR:
        if op is Operation.ASSIGN:
            assign_string(result, left, right, ctx.config)
        elif op is Operation.PLUS_EQUALS:
            concat_string(result, left, right, ctx.config)
        else:
            raise UnsupportedOperationError(f"{op.value} is not supported for strings")
    elif vtype in NUMERIC_TYPES:
        if op in _INTEGER_ONLY and vtype not in INTEGER_TYPES:
            raise UnsupportedOperationError(f"{op.value} is not supported for {vtype.value}")
        combined = _COMBINE[op](
            read_number(left.value, vtype), read_number(right.value, vtype), vtype,
        )
        set_number(left.value, vtype, combined)
        set_number(result.value, vtype, left.value.number)
    else:
        raise UnsupportedOperationError(f"{op.value} on untyped operand")

    write_back(ctx, left)


def assign(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.ASSIGN, result, left, right)


def plus_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.PLUS_EQUALS, result, left, right)


def minus_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.MINUS_EQUALS, result, left, right)


def times_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.TIMES_EQUALS, result, left, right)


def div_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.DIV_EQUALS, result, left, right)


def and_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.AND_EQUALS, result, left, right)


def or_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.OR_EQUALS, result, left, right)


def xor_equals(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    _apply(ctx, Operation.XOR_EQUALS, result, left, right)


# ---------------------------------------------------------------------------
# Increment / decrement
# ---------------------------------------------------------------------------

def _step(ctx: ActionContext, result: Node, left: Node | None, right: Node | None, delta: int) -> None:
    """Operand in *left*: post form (x++).  Operand in *right*: pre form (++x)."""
    require(result)
    if left is not None:
        target, post = left, True
    elif right is not None:
        target, post = right, False
    else:
        raise InvalidArgumentError("increment/decrement without an operand")
    require(target)

    vtype = target.value.type
    if vtype not in INTEGER_TYPES:
        raise UnsupportedOperationError(f"cannot increment/decrement {vtype}")

    before = read_number(target.value, vtype)
    set_number(target.value, vtype, before + delta)
    set_number(result.value, vtype, before if post else target.value.number)
    write_back(ctx, target)


def increment(ctx: ActionContext, result: Node, left: Node | None, right: Node | None) -> None:
    _step(ctx, result, left, right, 1)


def decrement(ctx: ActionContext, result: Node, left: Node | None, right: Node | None) -> None:
    _step(ctx, result, left, right, -1)
