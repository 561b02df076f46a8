"""Expression / statement graph for action scripts.

A ``Node`` is both an AST node and a runtime value cell: operator nodes
hold their latest result in ``value``, identifier nodes hold the variable's
current value.  Identifier nodes are shared, so the graph is a DAG rather
than a tree.

Children are a tagged variant: an expression ``Node`` or a
``StatementList`` (the branches of an IF/ELSE pair).
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .strings import StringBuffer
from .types import Operation, VarType


class Value(BaseModel):
    """Typed value cell.

    Numeric payloads share the single ``number`` slot; ``ui``, ``ul`` and
    ``f`` read that slot at 16-bit, 32-bit and float width.  Strings live in
    ``buffer`` with an explicit ``length``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: VarType | None = None
    number: int | float = 0
    buffer: StringBuffer | None = None
    length: int = 0

    def _integer(self) -> int:
        # Non-finite floats have no integer value; read them as 0
        if isinstance(self.number, float) and not math.isfinite(self.number):
            return 0
        return int(self.number)

    @property
    def ui(self) -> int:
        return self._integer() & 0xFFFF

    @property
    def ul(self) -> int:
        return self._integer() & 0xFFFFFFFF

    @property
    def f(self) -> float:
        return float(self.number)

    @property
    def text(self) -> bytes | None:
        """String contents, or None when no buffer is attached."""
        if self.buffer is None:
            return None
        return self.buffer.read(self.length)

    @property
    def capacity(self) -> int:
        return 0 if self.buffer is None else self.buffer.capacity


class StatementList(BaseModel):
    """Ordered statements, executed by the evaluator as one compound."""

    kind: Literal["statement_list"] = "statement_list"
    statements: list[Statement] = []


class Node(BaseModel):
    """A single node of the action graph."""

    kind: Literal["node"] = "node"
    operation: Operation
    name: str | None = None
    lineno: int = 0
    local: bool = False
    assigned: bool = False
    lvalue: bool = False
    value: Value = Field(default_factory=Value)
    handle: Any = None
    left: Child | None = None
    right: Child | None = None

    @property
    def type(self) -> VarType | None:
        return self.value.type


Child = Annotated[
    Union[Node, StatementList],
    Field(discriminator="kind"),
]


class Statement(BaseModel):
    """One statement: an expression tree or a shell command string."""

    expression: Node | None = None
    command: str | None = None
    lineno: int = 0


# Rebuild models with recursive references.
StatementList.model_rebuild()
Node.model_rebuild()
Statement.model_rebuild()
