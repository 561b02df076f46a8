"""Tests for arithmetic and bitwise operators."""

import pytest

from vascript.model.types import Operation, VarType
from vascript.runtime import DivisionByZeroError, UnsupportedOperationError
from vascript.runtime._arith import add, div, mul, sub
from vascript.runtime._bitwise import band, bor, lshift, rshift, xor
from vascript.runtime._values import to_float32

from conftest import make_context, num, result_node, text


# ---------------------------------------------------------------------------
# Math
# ---------------------------------------------------------------------------

class TestMath:
    @pytest.mark.parametrize("handler,a,b,expected", [
        (add, 2, 3, 5),
        (sub, 10, 4, 6),
        (mul, 6, 7, 42),
        (div, 9, 2, 4),
    ])
    def test_uint32(self, handler, a, b, expected):
        ctx = make_context()
        result = result_node(Operation.ADD)
        handler(ctx, result, num(VarType.UINT32, a), num(VarType.UINT32, b))
        assert result.value.number == expected
        assert result.value.type is VarType.UINT32

    def test_uint16_overflow_wraps(self):
        ctx = make_context()
        result = result_node(Operation.ADD)
        add(ctx, result, num(VarType.UINT16, 0xFFFF), num(VarType.UINT16, 2))
        assert result.value.number == 1

    def test_sub_underflow_wraps(self):
        ctx = make_context()
        result = result_node(Operation.SUB)
        sub(ctx, result, num(VarType.UINT32, 0), num(VarType.UINT32, 1))
        assert result.value.number == 0xFFFFFFFF

    def test_float(self):
        ctx = make_context()
        result = result_node(Operation.MUL)
        mul(ctx, result, num(VarType.FLOAT, 1.1), num(VarType.FLOAT, 3.0))
        assert result.value.number == to_float32(to_float32(1.1) * 3.0)

    def test_operands_untouched(self):
        ctx = make_context()
        a, b = num(VarType.UINT16, 2), num(VarType.UINT16, 3)
        add(ctx, result_node(Operation.ADD), a, b)
        assert (a.value.number, b.value.number) == (2, 3)

    def test_division_by_zero(self):
        ctx = make_context()
        with pytest.raises(DivisionByZeroError):
            div(ctx, result_node(Operation.DIV), num(VarType.UINT16, 1), num(VarType.UINT16, 0))

    def test_untyped(self):
        ctx = make_context()
        with pytest.raises(UnsupportedOperationError):
            add(ctx, result_node(Operation.ADD), result_node(Operation.LOCALVAR), num(VarType.UINT16, 1))


class TestStringMath:
    def test_concatenate(self):
        ctx = make_context()
        left, right = text(ctx, "ab"), text(ctx, "cd")
        result = result_node(Operation.ADD)
        add(ctx, result, left, right)
        assert result.value.text == b"abcd"
        assert result.value.type is VarType.STR
        assert left.value.text == b"ab"
        assert result.value.buffer is not left.value.buffer

    @pytest.mark.parametrize("handler", [sub, mul, div])
    def test_other_ops_unsupported(self, handler):
        ctx = make_context()
        with pytest.raises(UnsupportedOperationError):
            handler(ctx, result_node(Operation.SUB), text(ctx, "a"), text(ctx, "b"))


# ---------------------------------------------------------------------------
# Bitwise
# ---------------------------------------------------------------------------

class TestBitwise:
    @pytest.mark.parametrize("handler,a,b,expected", [
        (band, 0b1100, 0b1010, 0b1000),
        (bor, 0b1100, 0b1010, 0b1110),
        (xor, 0b1100, 0b1010, 0b0110),
        (lshift, 1, 4, 16),
        (rshift, 256, 4, 16),
    ])
    def test_uint16(self, handler, a, b, expected):
        ctx = make_context()
        result = result_node(Operation.BAND)
        handler(ctx, result, num(VarType.UINT16, a), num(VarType.UINT16, b))
        assert result.value.number == expected

    def test_lshift_truncates_to_width(self):
        ctx = make_context()
        result = result_node(Operation.LSHIFT)
        lshift(ctx, result, num(VarType.UINT16, 0x8001), num(VarType.UINT16, 1))
        assert result.value.number == 0x0002

    def test_uint32(self):
        ctx = make_context()
        result = result_node(Operation.BOR)
        bor(ctx, result, num(VarType.UINT32, 0x10000), num(VarType.UINT32, 1))
        assert result.value.number == 0x10001

    def test_float_rejected(self):
        ctx = make_context()
        with pytest.raises(UnsupportedOperationError):
            band(ctx, result_node(Operation.BAND), num(VarType.FLOAT, 1.0), num(VarType.FLOAT, 1.0))

    def test_string_rejected(self):
        ctx = make_context()
        with pytest.raises(UnsupportedOperationError):
            xor(ctx, result_node(Operation.XOR), text(ctx, "a"), text(ctx, "b"))
