"""Tests for the operation registry."""

import logging

import pytest

from vascript.model.nodes import Node
from vascript.model.types import Operation, VarType
from vascript.runtime import InvalidArgumentError, OperationRegistry, UnsupportedOperationError
from vascript.runtime._assign import and_equals, or_equals
from vascript.runtime._registry import get_var, nop, unsupported

from conftest import make_context, num, result_node


class TestRegistryTable:
    def test_every_operation_has_a_handler(self):
        registry = OperationRegistry()
        for op in Operation:
            assert callable(registry.lookup(op))

    def test_initialize_idempotent(self):
        registry = OperationRegistry()
        registry.initialize()
        marker = lambda ctx, result, left, right: None
        registry.register(Operation.ILLEGAL, marker)
        registry.initialize()
        assert registry.lookup(Operation.ILLEGAL) is marker

    @pytest.mark.parametrize("op", [
        Operation.NUM, Operation.FLOATNUM, Operation.STRING,
        Operation.LOCALVAR, Operation.TIMER,
    ])
    def test_value_nodes_are_nops(self, op):
        assert OperationRegistry().lookup(op) is nop

    def test_sysvar_refreshes(self):
        assert OperationRegistry().lookup(Operation.SYSVAR) is get_var

    def test_or_equals_has_own_handler(self):
        registry = OperationRegistry()
        assert registry.lookup(Operation.OR_EQUALS) is or_equals
        assert registry.lookup(Operation.AND_EQUALS) is and_equals

    @pytest.mark.parametrize("op", [
        Operation.ILLEGAL, Operation.ELSE, Operation.INT, Operation.SHORT, Operation.FLOAT,
    ])
    def test_unsupported_default(self, op):
        assert OperationRegistry().lookup(op) is unsupported

    def test_registries_independent(self):
        a, b = OperationRegistry(), OperationRegistry()
        a.register(Operation.ADD, nop)
        assert b.lookup(Operation.ADD) is not nop


class TestHandlers:
    def test_unsupported_logs_and_raises(self, caplog):
        ctx = make_context()
        with caplog.at_level(logging.ERROR):
            with pytest.raises(UnsupportedOperationError):
                unsupported(ctx, result_node(Operation.ILLEGAL), None, None)
        assert "ILLEGAL" in caplog.text

    def test_get_var_refetches(self):
        ctx = make_context(x=(VarType.UINT16, 1))
        x = ctx.symbols.resolve_external("x")
        ctx.store.define("x", ctx.store.get(x.handle).model_copy(update={"data": 55}))
        get_var(ctx, x, None, None)
        assert x.value.ui == 55

    def test_get_var_skips_lvalue(self):
        ctx = make_context(x=(VarType.UINT16, 1))
        x = ctx.symbols.resolve_external("x")
        x.lvalue = True
        ctx.store.define("x", ctx.store.get(x.handle).model_copy(update={"data": 55}))
        get_var(ctx, x, None, None)
        assert x.value.ui == 1

    def test_get_var_without_handle(self):
        ctx = make_context()
        with pytest.raises(InvalidArgumentError):
            get_var(ctx, Node(operation=Operation.SYSVAR, name="ghost"), None, None)

    def test_nop_leaves_value(self):
        ctx = make_context()
        node = num(VarType.UINT16, 4)
        nop(ctx, node, None, None)
        assert node.value.number == 4
