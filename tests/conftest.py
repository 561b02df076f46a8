"""Shared test helpers for the vascript test suite."""

from vascript.model.nodes import Node
from vascript.model.types import Operation, TypedValue, VarType
from vascript.runtime import ActionContext, GraphBuilder, MemoryVariableStore, typed
from vascript.runtime._strings import store_bytes
from vascript.runtime._values import set_number


class ManualTimerBackend:
    """Timer backend that only fires when a test says so."""

    def __init__(self):
        self.armed = {}
        self.cancelled = []

    def arm(self, timer_id, interval_ms, periodic, callback):
        self.cancel(timer_id)
        self.armed[timer_id] = (interval_ms, periodic, callback)

    def cancel(self, timer_id):
        if self.armed.pop(timer_id, None) is None:
            return False
        self.cancelled.append(timer_id)
        return True

    def fire(self, timer_id):
        interval_ms, periodic, callback = self.armed[timer_id]
        if not periodic:
            del self.armed[timer_id]
        callback(timer_id)


class RecordingCommandRunner:
    def __init__(self):
        self.commands = []

    def run(self, command):
        self.commands.append(command)


def make_context(config=None, on_timer_fire=None, **variables) -> ActionContext:
    """Context over an in-memory store, a manual timer backend and a recording
    command runner.  Keyword arguments become store variables; values may be
    TypedValue or a ``(VarType, data)`` tuple."""
    store = MemoryVariableStore({
        name: value if isinstance(value, TypedValue) else typed(*value)
        for name, value in variables.items()
    })
    return ActionContext(
        store,
        commands=RecordingCommandRunner(),
        config=config,
        timer_backend=ManualTimerBackend(),
        on_timer_fire=on_timer_fire,
    )


def builder(ctx: ActionContext) -> GraphBuilder:
    return GraphBuilder(ctx.symbols)


def num(vtype: VarType, number, op: Operation = Operation.NUM) -> Node:
    """Literal-style node holding *number* as *vtype*."""
    node = Node(operation=op)
    set_number(node.value, vtype, number)
    return node


def text(ctx: ActionContext, data, op: Operation = Operation.STRING) -> Node:
    """String node holding *data* (str or bytes)."""
    node = Node(operation=op)
    store_bytes(node.value, data.encode() if isinstance(data, str) else data, ctx.config)
    return node


def result_node(op: Operation, vtype: VarType | None = None) -> Node:
    node = Node(operation=op)
    node.value.type = vtype
    return node


def local(ctx: ActionContext, name: str, type_specifier: Operation) -> Node:
    """Declare a local variable in the current scope and return its node."""
    b = builder(ctx)
    return b.declare(type_specifier, b.identifier(name, declaration=True))
