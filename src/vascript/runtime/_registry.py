"""Operation -> handler table.

Every handler has the signature ``handler(ctx, result, left, right)`` and
raises an ``ActionError`` on failure.  Operations without an engine fall
back to ``unsupported``; literal and local-variable nodes already hold their
value and map to ``nop``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from vascript.model.nodes import Node
from vascript.model.types import Operation

from . import _arith, _assign, _bitwise, _boolean, _compare, _timer_ops, _typecast
from ._context import ActionContext
from ._errors import InvalidArgumentError, UnsupportedOperationError
from ._values import load_typed


logger = logging.getLogger(__name__)


Handler = Callable[[ActionContext, Node, Node | None, Node | None], None]


def unsupported(ctx: ActionContext, result: Node, left: Node | None, right: Node | None) -> None:
    logger.error("Unsupported operation: %s", result.operation.value)
    raise UnsupportedOperationError(f"unsupported operation {result.operation.value}")


def nop(ctx: ActionContext, result: Node, left: Node | None, right: Node | None) -> None:
    pass


def get_var(ctx: ActionContext, result: Node, left: Node | None, right: Node | None) -> None:
    """Refresh an external variable from the store.

    Targets of assignment are not refreshed: their value is about to be
    replaced and re-reading would race the write-back.
    """
    if result.lvalue:
        return
    if result.handle is None:
        raise InvalidArgumentError(f"external variable {result.name} has no handle")
    load_typed(result.value, ctx.store.get(result.handle), ctx.config)


_DEFAULT_HANDLERS: dict[Operation, Handler] = {
    Operation.NUM: nop,
    Operation.FLOATNUM: nop,
    Operation.STRING: nop,
    Operation.LOCALVAR: nop,
    Operation.TIMER: nop,
    Operation.SYSVAR: get_var,

    Operation.ASSIGN: _assign.assign,
    Operation.PLUS_EQUALS: _assign.plus_equals,
    Operation.MINUS_EQUALS: _assign.minus_equals,
    Operation.TIMES_EQUALS: _assign.times_equals,
    Operation.DIV_EQUALS: _assign.div_equals,
    Operation.AND_EQUALS: _assign.and_equals,
    Operation.OR_EQUALS: _assign.or_equals,
    Operation.XOR_EQUALS: _assign.xor_equals,
    Operation.INC: _assign.increment,
    Operation.DEC: _assign.decrement,

    Operation.ADD: _arith.add,
    Operation.SUB: _arith.sub,
    Operation.MUL: _arith.mul,
    Operation.DIV: _arith.div,

    Operation.BAND: _bitwise.band,
    Operation.BOR: _bitwise.bor,
    Operation.XOR: _bitwise.xor,
    Operation.LSHIFT: _bitwise.lshift,
    Operation.RSHIFT: _bitwise.rshift,

    Operation.AND: _boolean.logical_and,
    Operation.OR: _boolean.logical_or,
    Operation.NOT: _boolean.logical_not,

    Operation.EQUALS: _compare.equals,
    Operation.NOTEQUALS: _compare.not_equals,
    Operation.GT: _compare.greater_than,
    Operation.LT: _compare.less_than,
    Operation.GTE: _compare.greater_than_or_equal,
    Operation.LTE: _compare.less_than_or_equal,

    Operation.TOFLOAT: _typecast.to_float,
    Operation.TOINT: _typecast.to_int,
    Operation.TOSHORT: _typecast.to_short,
    Operation.TOSTRING: _typecast.to_string,

    Operation.CREATE_TIMER: _timer_ops.create_timer,
    Operation.CREATE_TICK: _timer_ops.create_tick,
    Operation.DELETE_TIMER: _timer_ops.delete_timer,
    Operation.ACTIVE_TIMER: _timer_ops.active_timer,
}


class OperationRegistry:
    """Maps every ``Operation`` to a handler.

    The table is filled lazily on first lookup; ``initialize`` may be called
    any number of times.  ``register`` replaces a single entry, which lets a
    host add or override an operator.
    """

    def __init__(self) -> None:
        self._handlers: dict[Operation, Handler] = {}

    def initialize(self) -> None:
        if self._handlers:
            return
        self._handlers = {op: unsupported for op in Operation}
        self._handlers.update(_DEFAULT_HANDLERS)

    def register(self, op: Operation, handler: Handler) -> None:
        self.initialize()
        self._handlers[op] = handler

    def lookup(self, op: Operation) -> Handler:
        self.initialize()
        return self._handlers.get(op, unsupported)


default_registry = OperationRegistry()
