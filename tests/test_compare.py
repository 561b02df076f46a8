"""Tests for boolean and comparison operators."""

import itertools

import pytest

from vascript.model.types import Operation, VarType
from vascript.runtime import UnsupportedOperationError
from vascript.runtime._boolean import logical_and, logical_not, logical_or, truthy
from vascript.runtime._compare import (
    equals,
    greater_than,
    greater_than_or_equal,
    less_than,
    less_than_or_equal,
    not_equals,
)

from conftest import make_context, num, result_node, text


def flag(handler, ctx, left, right=None):
    result = result_node(Operation.EQUALS)
    handler(ctx, result, left, right)
    assert result.value.type is VarType.UINT16
    return result.value.number


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------

class TestBoolean:
    @pytest.mark.parametrize("a,b", list(itertools.product([0, 3], repeat=2)))
    def test_and_or(self, a, b):
        ctx = make_context()
        left, right = num(VarType.UINT16, a), num(VarType.UINT16, b)
        assert flag(logical_and, ctx, left, right) == int(bool(a and b))
        assert flag(logical_or, ctx, left, right) == int(bool(a or b))

    def test_not(self):
        ctx = make_context()
        assert flag(logical_not, ctx, num(VarType.UINT32, 0)) == 1
        assert flag(logical_not, ctx, num(VarType.UINT32, 9)) == 0

    def test_float_truthiness(self):
        ctx = make_context()
        assert flag(logical_and, ctx, num(VarType.FLOAT, 0.5), num(VarType.FLOAT, 2.0)) == 1

    def test_string_truthiness(self):
        ctx = make_context()
        assert flag(logical_or, ctx, text(ctx, ""), text(ctx, "x")) == 1
        assert flag(logical_and, ctx, text(ctx, ""), text(ctx, "x")) == 0
        assert flag(logical_not, ctx, result_node(Operation.LOCALVAR, VarType.STR)) == 1

    def test_untyped(self):
        with pytest.raises(UnsupportedOperationError):
            truthy(result_node(Operation.LOCALVAR).value, None)


# ---------------------------------------------------------------------------
# Numeric comparison
# ---------------------------------------------------------------------------

class TestNumericCompare:
    @pytest.mark.parametrize("a,b", [(1, 2), (2, 2), (3, 2)])
    def test_all_operators(self, a, b):
        ctx = make_context()
        left, right = num(VarType.UINT32, a), num(VarType.UINT32, b)
        assert flag(equals, ctx, left, right) == int(a == b)
        assert flag(not_equals, ctx, left, right) == int(a != b)
        assert flag(greater_than, ctx, left, right) == int(a > b)
        assert flag(less_than, ctx, left, right) == int(a < b)
        assert flag(greater_than_or_equal, ctx, left, right) == int(a >= b)
        assert flag(less_than_or_equal, ctx, left, right) == int(a <= b)

    def test_compares_at_left_width(self):
        ctx = make_context()
        left, right = num(VarType.UINT16, 1), num(VarType.UINT32, 0x10001)
        assert flag(equals, ctx, left, right) == 1

    def test_float(self):
        ctx = make_context()
        assert flag(less_than, ctx, num(VarType.FLOAT, 1.5), num(VarType.FLOAT, 2.5)) == 1

    def test_not_equals_inverts_equals(self):
        ctx = make_context()
        for a, b in itertools.product([0, 1, 0xFFFF], repeat=2):
            left, right = num(VarType.UINT16, a), num(VarType.UINT16, b)
            assert flag(not_equals, ctx, left, right) == 1 - flag(equals, ctx, left, right)

    def test_untyped(self):
        ctx = make_context()
        with pytest.raises(UnsupportedOperationError):
            equals(ctx, result_node(Operation.EQUALS),
                   result_node(Operation.LOCALVAR), num(VarType.UINT16, 1))


# ---------------------------------------------------------------------------
# String comparison
# ---------------------------------------------------------------------------

class TestStringCompare:
    def test_empty_equal(self):
        ctx = make_context()
        assert flag(equals, ctx, text(ctx, ""), text(ctx, "")) == 1

    def test_unset_equals_empty(self):
        ctx = make_context()
        unset = result_node(Operation.LOCALVAR, VarType.STR)
        assert flag(equals, ctx, unset, text(ctx, "")) == 1

    def test_empty_is_lesser(self):
        ctx = make_context()
        assert flag(greater_than, ctx, text(ctx, "a"), text(ctx, "")) == 1
        assert flag(less_than, ctx, text(ctx, ""), text(ctx, "a")) == 1

    def test_bytewise(self):
        ctx = make_context()
        assert flag(less_than, ctx, text(ctx, "abc"), text(ctx, "abd")) == 1
        assert flag(equals, ctx, text(ctx, "pump"), text(ctx, "pump")) == 1
        assert flag(greater_than_or_equal, ctx, text(ctx, "b"), text(ctx, "abc")) == 1

    def test_not_equals_inverts_equals(self):
        ctx = make_context()
        samples = ["", "a", "ab"]
        for a, b in itertools.product(samples, repeat=2):
            left, right = text(ctx, a), text(ctx, b)
            assert flag(not_equals, ctx, left, right) == 1 - flag(equals, ctx, left, right)
