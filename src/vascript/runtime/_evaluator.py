"""Evaluator for action graphs.

Walks statement lists and expression trees, dispatching each operator node
through the ``OperationRegistry``.  Evaluation is depth-first with the right
child visited before the left, so ``x = y = 3`` assigns ``y`` first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from vascript.model.nodes import Node, Statement, StatementList
from vascript.model.types import INTEGER_TYPES, Operation

from ._context import ActionContext
from ._errors import (
    ActionError,
    InvalidArgumentError,
    Status,
    UnsupportedOperationError,
)
from ._registry import OperationRegistry, default_registry


logger = logging.getLogger(__name__)


class Evaluator:
    """Executes statements against an ``ActionContext``.

    Parameters
    ----------
    ctx : ActionContext
        Variable store, command runner, timers and symbol table.
    registry : OperationRegistry
        Handler table (default: the shared module registry).
    """

    def __init__(self, ctx: ActionContext, registry: OperationRegistry | None = None) -> None:
        self.ctx = ctx
        self.registry = registry if registry is not None else default_registry
        self.registry.initialize()

    # -----------------------------------------------------------------------
    # Statements
    # -----------------------------------------------------------------------

    def eval_compound(self, statements: StatementList | Iterable[Statement]) -> None:
        """Run every statement in order.

        A failing statement does not stop the ones after it.  Once all have
        run, the last failure (if any) is raised.
        """
        if isinstance(statements, StatementList):
            statements = statements.statements

        failure: ActionError | None = None
        for statement in statements:
            try:
                self.eval_statement(statement)
            except ActionError as exc:
                failure = exc
        if failure is not None:
            raise failure

    def eval_statement(self, statement: Statement | None) -> None:
        if statement is None:
            raise InvalidArgumentError("missing statement")

        has_expr = statement.expression is not None
        has_cmd = statement.command is not None
        if has_expr == has_cmd:
            raise UnsupportedOperationError(
                f"statement at line {statement.lineno} must hold exactly one of "
                "an expression or a command"
            )
        if has_expr:
            self.eval_node(statement.expression)
        else:
            self.eval_external_command(statement.command)

    def eval_external_command(self, command: str | None) -> None:
        if command is None:
            raise InvalidArgumentError("missing command text")
        self.ctx.commands.run(command)

    # -----------------------------------------------------------------------
    # Expressions
    # -----------------------------------------------------------------------

    def eval_node(self, node: Node | None) -> None:
        if node is None:
            raise InvalidArgumentError("missing expression")
        try:
            if node.operation is Operation.IF:
                self.eval_if(node.left, node.right)
            else:
                self.eval_expr(node)
        except ActionError as exc:
            logger.error(
                "Error processing action: %s (%s) %s",
                node.operation.value,
                exc.status.value,
                exc.description,
            )
            raise

    def eval_if(self, condition: Node | StatementList | None, else_node: Node | StatementList | None) -> None:
        """Evaluate *condition* and run one branch of *else_node*.

        *else_node* is the ELSE node whose left child is the then-branch and
        whose right child, if present, is the else-branch.
        """
        if not isinstance(condition, Node):
            raise InvalidArgumentError("if without a condition")
        if not isinstance(else_node, Node) or else_node.operation is not Operation.ELSE:
            raise InvalidArgumentError("if without an else node")

        self.eval_node(condition)

        if condition.value.type not in INTEGER_TYPES:
            raise UnsupportedOperationError(
                f"if condition must be an integer, not {condition.value.type}"
            )
        # Truth is taken from the low 16 bits only
        branch = else_node.left if condition.value.ui != 0 else else_node.right

        if branch is None:
            return
        if not isinstance(branch, StatementList):
            raise InvalidArgumentError("if branch is not a statement list")
        self.eval_compound(branch)

    def eval_expr(self, node: Node) -> None:
        """Evaluate *node*'s children (right, then left) and apply its operator.

        Child failures have already been logged by ``eval_node`` and are not
        propagated; the operator sees whatever values the children hold.
        """
        left = node.left if isinstance(node.left, Node) else None
        right = node.right if isinstance(node.right, Node) else None

        for child in (right, left):
            if child is None:
                continue
            try:
                self.eval_node(child)
            except ActionError as exc:
                logger.debug("ignoring failed operand of %s: %s", node.operation.value, exc)

        handler = self.registry.lookup(node.operation)
        handler(self.ctx, node, left, right)

    # -----------------------------------------------------------------------
    # Entry point
    # -----------------------------------------------------------------------

    def execute(self, statements: StatementList | Iterable[Statement]) -> Status:
        """Run *statements* and report the outcome as a ``Status``."""
        try:
            self.eval_compound(statements)
        except ActionError as exc:
            return exc.status
        return Status.OK
