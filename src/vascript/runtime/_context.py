"""Action context: everything an evaluation needs, passed explicitly."""

from __future__ import annotations

from ._commands import CommandRunner, ShellCommandRunner
from ._config import EngineConfig
from ._store import VariableStore
from ._symbols import SymbolTable
from ._timers import FireCallback, TimerBackend, TimerSubsystem


class ActionContext:
    """Owns the symbol table, timers and collaborators for a set of actions.

    The external-variable cache and the timer table live as long as the
    context; re-running an action reuses its nodes and buffers.

    Parameters
    ----------
    store : VariableStore
        External variable store.
    commands : CommandRunner
        Receives command statements (default ``ShellCommandRunner``).
    config : EngineConfig
        Engine constants.
    timer_backend : TimerBackend
        Backend used to arm timers (default threading).
    on_timer_fire : callable, optional
        Host callback invoked with the id of each fired timer.
    """

    def __init__(
        self,
        store: VariableStore,
        commands: CommandRunner | None = None,
        config: EngineConfig | None = None,
        timer_backend: TimerBackend | None = None,
        on_timer_fire: FireCallback | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.store = store
        self.commands = commands if commands is not None else ShellCommandRunner()
        self.symbols = SymbolTable(store, self.config)
        self.timers = TimerSubsystem(
            backend=timer_backend,
            max_timer_id=self.config.max_timer_id,
            on_fire=on_timer_fire,
        )

    def close(self) -> None:
        """Cancel all armed timers."""
        self.timers.shutdown()

    def __enter__(self) -> ActionContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
