"""Timer operators: create timer, create tick, delete timer, active timer.

The timer id is the left operand (read as UINT16), the interval in
milliseconds the right operand (read as UINT32).  Create and delete leave a
1/0 success flag in the result node whether or not they raise.
"""

from __future__ import annotations

from collections.abc import Callable

from vascript.model.nodes import Node
from vascript.model.types import VarType

from ._boolean import set_flag
from ._context import ActionContext
from ._errors import ActionError
from ._values import require, set_number


def _flagged(result: Node, action: Callable[[], None]) -> None:
    try:
        action()
    except ActionError:
        set_flag(result, False)
        raise
    set_flag(result, True)


def create_timer(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    _flagged(result, lambda: ctx.timers.create_timer(left.value.ui, right.value.ul))


def create_tick(ctx: ActionContext, result: Node, left: Node, right: Node) -> None:
    require(result, left, right)
    _flagged(result, lambda: ctx.timers.create_tick(left.value.ui, right.value.ul))


def delete_timer(ctx: ActionContext, result: Node, left: Node, right: Node | None) -> None:
    require(result, left)
    _flagged(result, lambda: ctx.timers.delete_timer(left.value.ui))


def active_timer(ctx: ActionContext, result: Node, left: Node | None, right: Node | None) -> None:
    require(result)
    set_number(result.value, VarType.UINT16, ctx.timers.get_active_timer())
