"""Symbol resolution: local declarations and the external-variable cache.

Identifier nodes are memoised by name.  Within one declaration scope every
reference to a local name returns the declared node, and for the lifetime
of the table every reference to an external name returns the same SYSVAR
node, so updates through one expression are seen by every other.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from vascript.model.nodes import Node, Value
from vascript.model.types import DECLARATION_TYPES, Operation

from ._config import EngineConfig
from ._errors import InvalidArgumentError, NotFoundError
from ._store import VariableStore
from ._values import load_typed


logger = logging.getLogger(__name__)


class SymbolTable:
    """Name -> node registry for one action context.

    Parameters
    ----------
    store : VariableStore
        Resolves and reads external variables on first reference.
    config : EngineConfig
        Used to size string buffers for external string values.
    """

    def __init__(self, store: VariableStore, config: EngineConfig | None = None) -> None:
        self.store = store
        self.config = config or EngineConfig()
        self._declarations: dict[str, Node] = {}
        self._externals: dict[str, Node] = {}

    # -----------------------------------------------------------------------
    # Scopes
    # -----------------------------------------------------------------------

    def set_declarations(self, nodes: Iterable[Node]) -> None:
        """Make *nodes* the current declaration scope."""
        self._declarations = {}
        for node in nodes:
            self.add_declaration(node)

    def add_declaration(self, node: Node) -> None:
        if not node.name:
            raise InvalidArgumentError("declaration without a name")
        # The first declaration of a name wins
        self._declarations.setdefault(node.name, node)

    @property
    def declarations(self) -> list[Node]:
        return list(self._declarations.values())

    @property
    def externals(self) -> list[Node]:
        """Cached external-variable nodes in first-reference order."""
        return list(self._externals.values())

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def resolve_local(self, name: str) -> Node | None:
        return self._declarations.get(name)

    def resolve_external(self, name: str) -> Node:
        """Return the cached node for external *name*, resolving it on a miss.

        A freshly resolved variable is read immediately; if that read fails
        nothing is cached and the store's error propagates.
        """
        node = self._externals.get(name)
        if node is not None:
            return node

        handle = self.store.find_by_name(name)
        if handle is None:
            raise NotFoundError(f"unresolved identifier '{name}'")

        value = Value()
        load_typed(value, self.store.get(handle), self.config)
        node = Node(operation=Operation.SYSVAR, name=name, handle=handle, value=value)
        self._externals[name] = node
        logger.debug("resolved external variable %s -> %r", name, handle)
        return node

    def create_identifier_reference(self, name: str, declaration: bool = False) -> Node:
        """Node for identifier *name*.

        In a declaration a new LOCALVAR node is always created.  Otherwise
        locals are searched first, then external variables.
        """
        if not name:
            raise InvalidArgumentError("identifier without a name")
        if declaration:
            return Node(operation=Operation.LOCALVAR, name=name, local=True)

        node = self.resolve_local(name)
        if node is not None:
            return node
        return self.resolve_external(name)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

def declare_type(type_specifier: Operation, node: Node) -> Node:
    """Stamp the value type named by *type_specifier* (INT, SHORT, FLOAT,
    STRING) onto *node*."""
    vtype = DECLARATION_TYPES.get(type_specifier)
    if vtype is None:
        raise InvalidArgumentError(f"invalid type specifier {type_specifier}")
    node.value.type = vtype
    return node


def check_use_before_assign(node: Node) -> bool:
    """True if *node* is a local variable that has not been assigned yet."""
    return node.local and not node.assigned
