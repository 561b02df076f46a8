"""Tests for the in-memory variable store and the shell command runner."""

import logging

import pytest

from vascript.model.types import TypedValue, VarType
from vascript.runtime import MemoryVariableStore, ShellCommandRunner, StoreError, VariableStore, typed


class TestMemoryVariableStore:
    def test_satisfies_protocol(self):
        assert isinstance(MemoryVariableStore(), VariableStore)

    def test_find_and_get(self):
        store = MemoryVariableStore({"x": typed(VarType.UINT16, 3)})
        handle = store.find_by_name("x")
        assert store.get(handle) == TypedValue(type=VarType.UINT16, data=3)

    def test_find_unknown(self):
        assert MemoryVariableStore().find_by_name("x") is None

    def test_bad_handle(self):
        with pytest.raises(StoreError):
            MemoryVariableStore().get(42)

    def test_set_records_write(self):
        store = MemoryVariableStore({"x": typed(VarType.UINT32, 0)})
        store.set(store.find_by_name("x"), typed(VarType.UINT32, 7))
        assert store.value_of("x") == 7
        assert store.writes == [("x", TypedValue(type=VarType.UINT32, data=7))]

    def test_set_type_mismatch(self):
        store = MemoryVariableStore({"x": typed(VarType.UINT32, 0)})
        with pytest.raises(StoreError, match="type mismatch"):
            store.set(store.find_by_name("x"), typed(VarType.FLOAT, 1.0))
        assert store.writes == []

    def test_define_overwrites(self):
        store = MemoryVariableStore()
        h1 = store.define("x", typed(VarType.UINT16, 1))
        h2 = store.define("x", typed(VarType.UINT16, 2))
        assert h1 == h2
        assert store.value_of("x") == 2

    def test_typed_encodes_str(self):
        assert typed(VarType.STR, "abc").data == b"abc"


class TestShellCommandRunner:
    def test_success(self, caplog):
        with caplog.at_level(logging.WARNING):
            ShellCommandRunner().run("true")
        assert caplog.records == []

    def test_failure_logged_not_raised(self, caplog):
        with caplog.at_level(logging.WARNING):
            ShellCommandRunner().run("exit 3")
        assert "status 3" in caplog.text
