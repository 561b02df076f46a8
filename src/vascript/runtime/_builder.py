"""Graph construction API used by an action-script parser.

The parser never creates ``Node`` objects directly; it calls a
``GraphBuilder`` which parses literals, binds identifiers through the
``SymbolTable`` and types operator nodes at construction time.

Example
-------
    b = GraphBuilder(ctx.symbols)
    x = b.declare(Operation.INT, b.identifier("x", declaration=True))
    stmts = [b.statement(b.node(Operation.ASSIGN, x, b.number("5")))]
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from vascript.model.nodes import Node, Statement, StatementList
from vascript.model.types import (
    ASSIGNMENT_OPS,
    BOOLEAN_RESULT_OPS,
    CAST_RESULT_TYPES,
    Operation,
    VarType,
)

from ._errors import InvalidArgumentError
from ._strings import store_bytes
from ._symbols import SymbolTable, declare_type
from ._values import parse_float_prefix, set_number


_NUMBER_RE = re.compile(r"^([+-]?)(0[xX][0-9a-fA-F]+|\d+)([uUlL]?)$")

_SHORT_MIN = -32768
_SHORT_MAX = 65535


def type_check(left: Node | None, right: Node | None) -> VarType | None:
    """Common type of two operands; None when they disagree or are absent."""
    if left is not None and right is not None:
        return left.value.type if left.value.type is right.value.type else None
    if left is not None:
        return left.value.type
    if right is not None:
        return right.value.type
    return None


class GraphBuilder:
    """Creates literal, identifier, operator and statement nodes.

    Parameters
    ----------
    symbols : SymbolTable
        Binds identifiers to shared local or external-variable nodes.
    """

    def __init__(self, symbols: SymbolTable) -> None:
        self.symbols = symbols

    # -----------------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------------

    def number(self, text: str, lineno: int = 0) -> Node:
        """Integer literal.

        Decimal or ``0x`` hex, optionally suffixed ``U`` (16-bit) or ``L``
        (32-bit).  A value outside ``-32768..65535`` is always 32-bit;
        otherwise the suffix decides, defaulting to 16-bit.
        """
        m = _NUMBER_RE.match(text.strip())
        if m is None:
            raise InvalidArgumentError(f"malformed integer literal {text!r}")
        sign, digits, suffix = m.groups()
        number = int(digits, 16 if digits[:2].lower() == "0x" else 10)
        if sign == "-":
            number = -number

        requested = {"u": VarType.UINT16, "l": VarType.UINT32}.get(suffix.lower())
        if not _SHORT_MIN <= number <= _SHORT_MAX:
            vtype = VarType.UINT32
        else:
            vtype = requested or VarType.UINT16

        node = Node(operation=Operation.NUM, lineno=lineno)
        set_number(node.value, vtype, number)
        return node

    def float_number(self, text: str, lineno: int = 0) -> Node:
        node = Node(operation=Operation.FLOATNUM, lineno=lineno)
        set_number(node.value, VarType.FLOAT, parse_float_prefix(text.encode()))
        return node

    def string(self, text: str | bytes, lineno: int = 0) -> Node:
        data = text.encode() if isinstance(text, str) else text
        node = Node(operation=Operation.STRING, lineno=lineno)
        store_bytes(node.value, data, self.symbols.config)
        return node

    # -----------------------------------------------------------------------
    # Identifiers and declarations
    # -----------------------------------------------------------------------

    def identifier(self, name: str, declaration: bool = False, lineno: int = 0) -> Node:
        node = self.symbols.create_identifier_reference(name, declaration=declaration)
        if declaration:
            node.lineno = lineno
        return node

    def declare(self, type_specifier: Operation, node: Node) -> Node:
        """Give a freshly declared identifier its type and add it to scope."""
        declare_type(type_specifier, node)
        self.symbols.add_declaration(node)
        return node

    def begin_scope(self, declarations: Iterable[Node] = ()) -> None:
        """Start a new declaration scope (one per action)."""
        self.symbols.set_declarations(declarations)

    @staticmethod
    def lvalue(node: Node) -> Node:
        """Mark *node* as an assignment target: it is not refreshed on read."""
        node.lvalue = True
        return node

    # -----------------------------------------------------------------------
    # Operators
    # -----------------------------------------------------------------------

    def node(
        self,
        op: Operation,
        left: Node | StatementList | None = None,
        right: Node | StatementList | None = None,
        lineno: int = 0,
    ) -> Node:
        """Operator node with its result type decided up front."""
        if op is Operation.IF:
            self._check_if(left, right)

        left_node = left if isinstance(left, Node) else None
        right_node = right if isinstance(right, Node) else None

        if op in BOOLEAN_RESULT_OPS:
            vtype = VarType.UINT16
        elif op in CAST_RESULT_TYPES:
            vtype = CAST_RESULT_TYPES[op]
        else:
            vtype = type_check(left_node, right_node)

        if op in ASSIGNMENT_OPS and left_node is not None:
            left_node.assigned = True
        elif op in (Operation.INC, Operation.DEC):
            operand = left_node if left_node is not None else right_node
            if operand is not None:
                operand.assigned = True

        node = Node(operation=op, left=left, right=right, lineno=lineno)
        node.value.type = vtype
        return node

    @staticmethod
    def _check_if(condition: Node | StatementList | None, else_node: Node | StatementList | None) -> None:
        if not isinstance(condition, Node):
            raise InvalidArgumentError("if without a condition")
        if condition.value.type in (VarType.FLOAT, VarType.STR):
            raise InvalidArgumentError(
                f"if condition must be an integer, not {condition.value.type.value}"
            )
        if not isinstance(else_node, Node) or else_node.operation is not Operation.ELSE:
            raise InvalidArgumentError("if without an else node")

    def else_(
        self,
        then: Iterable[Statement] | StatementList,
        otherwise: Iterable[Statement] | StatementList | None = None,
        lineno: int = 0,
    ) -> Node:
        return self.node(
            Operation.ELSE,
            self.statement_list(then),
            None if otherwise is None else self.statement_list(otherwise),
            lineno,
        )

    def if_(
        self,
        condition: Node,
        then: Iterable[Statement] | StatementList,
        otherwise: Iterable[Statement] | StatementList | None = None,
        lineno: int = 0,
    ) -> Node:
        return self.node(Operation.IF, condition, self.else_(then, otherwise, lineno), lineno)

    # -----------------------------------------------------------------------
    # Statements
    # -----------------------------------------------------------------------

    @staticmethod
    def statement(expression: Node, lineno: int = 0) -> Statement:
        return Statement(expression=expression, lineno=lineno or expression.lineno)

    @staticmethod
    def command(text: str, lineno: int = 0) -> Statement:
        return Statement(command=text, lineno=lineno)

    @staticmethod
    def statement_list(statements: Iterable[Statement] | StatementList) -> StatementList:
        if isinstance(statements, StatementList):
            return statements
        return StatementList(statements=list(statements))
