"""vascript runtime: evaluation of action-script graphs.

Entry point::

    from vascript.runtime import GraphBuilder, Status, create_context, execute, typed
    from vascript.model.types import Operation, VarType

    ctx = create_context(variables={"/sys/count": typed(VarType.UINT16, 0)})
    b = GraphBuilder(ctx.symbols)
    count = b.identifier("/sys/count")
    stmts = [b.statement(b.node(Operation.PLUS_EQUALS, count, b.number("1")))]
    assert execute(ctx, stmts) is Status.OK
"""

from __future__ import annotations

from collections.abc import Iterable

from vascript.model.nodes import Statement, StatementList
from vascript.model.types import TypedValue

from ._builder import GraphBuilder
from ._commands import CommandRunner, ShellCommandRunner
from ._config import EngineConfig
from ._context import ActionContext
from ._errors import (
    ActionError,
    DivisionByZeroError,
    InvalidArgumentError,
    NotFoundError,
    OutOfMemoryError,
    Status,
    StoreError,
    UnsupportedOperationError,
)
from ._evaluator import Evaluator
from ._registry import OperationRegistry, default_registry
from ._store import MemoryVariableStore, VariableStore, typed
from ._symbols import SymbolTable, check_use_before_assign, declare_type
from ._timers import FireCallback, ThreadingTimerBackend, TimerBackend, TimerSubsystem


def create_context(
    store: VariableStore | None = None,
    *,
    variables: dict[str, TypedValue] | None = None,
    commands: CommandRunner | None = None,
    config: EngineConfig | None = None,
    timer_backend: TimerBackend | None = None,
    on_timer_fire: FireCallback | None = None,
) -> ActionContext:
    """Create an action context.

    Parameters
    ----------
    store
        External variable store.  When omitted a ``MemoryVariableStore``
        holding *variables* is created.
    variables
        Initial variables for the in-memory store.
    commands
        Runner for command statements (default: the system shell).
    config
        Engine constants.
    timer_backend
        Timer backend (default: threading).
    on_timer_fire
        Called with the id of each fired timer, on the backend thread.

    Returns
    -------
    ActionContext
        Context to build graphs against and execute them in.
    """
    if store is None:
        store = MemoryVariableStore(variables)
    elif variables:
        raise ValueError("pass either a store or initial variables, not both")
    return ActionContext(
        store,
        commands=commands,
        config=config,
        timer_backend=timer_backend,
        on_timer_fire=on_timer_fire,
    )


def execute(
    ctx: ActionContext,
    statements: StatementList | Iterable[Statement],
    registry: OperationRegistry | None = None,
) -> Status:
    """Run *statements* in *ctx* and return the resulting ``Status``."""
    return Evaluator(ctx, registry).execute(statements)


__all__ = [
    "ActionContext",
    "ActionError",
    "CommandRunner",
    "DivisionByZeroError",
    "EngineConfig",
    "Evaluator",
    "GraphBuilder",
    "InvalidArgumentError",
    "MemoryVariableStore",
    "NotFoundError",
    "OperationRegistry",
    "OutOfMemoryError",
    "ShellCommandRunner",
    "Status",
    "StoreError",
    "SymbolTable",
    "ThreadingTimerBackend",
    "TimerBackend",
    "TimerSubsystem",
    "UnsupportedOperationError",
    "VariableStore",
    "check_use_before_assign",
    "create_context",
    "declare_type",
    "default_registry",
    "execute",
    "typed",
]
