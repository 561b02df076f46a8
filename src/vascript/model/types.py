"""Type system and operation tags for action scripts.

Two closed sets:
- VarType: the four value types a node can carry.
- Operation: every tag a node can have, covering operators, literal kinds,
  control forms, and identifier references.

TypedValue is the shape exchanged with the external variable store.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

class VarType(str, Enum):
    """Value types understood by the engine."""

    UINT16 = "UINT16"
    UINT32 = "UINT32"
    FLOAT = "FLOAT"
    STR = "STR"


INTEGER_TYPES = frozenset({VarType.UINT16, VarType.UINT32})
NUMERIC_TYPES = frozenset({VarType.UINT16, VarType.UINT32, VarType.FLOAT})


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class Operation(str, Enum):
    ILLEGAL = "ILLEGAL"

    # Assignment
    ASSIGN = "ASSIGN"
    AND_EQUALS = "AND_EQUALS"
    OR_EQUALS = "OR_EQUALS"
    XOR_EQUALS = "XOR_EQUALS"
    DIV_EQUALS = "DIV_EQUALS"
    TIMES_EQUALS = "TIMES_EQUALS"
    PLUS_EQUALS = "PLUS_EQUALS"
    MINUS_EQUALS = "MINUS_EQUALS"
    INC = "INC"
    DEC = "DEC"

    # Arithmetic
    MUL = "MUL"
    DIV = "DIV"
    ADD = "ADD"
    SUB = "SUB"

    # Bitwise
    BAND = "BAND"
    BOR = "BOR"
    XOR = "XOR"
    LSHIFT = "LSHIFT"
    RSHIFT = "RSHIFT"

    # Boolean
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    # Comparison
    EQUALS = "EQUALS"
    NOTEQUALS = "NOTEQUALS"
    GT = "GT"
    LT = "LT"
    GTE = "GTE"
    LTE = "LTE"

    # Typecast
    TOFLOAT = "TOFLOAT"
    TOINT = "TOINT"
    TOSHORT = "TOSHORT"
    TOSTRING = "TOSTRING"

    # Literals and references
    NUM = "NUM"
    FLOATNUM = "FLOATNUM"
    STRING = "STRING"
    SYSVAR = "SYSVAR"
    LOCALVAR = "LOCALVAR"

    # Control forms
    IF = "IF"
    ELSE = "ELSE"

    # Declaration type specifiers
    FLOAT = "FLOAT"
    INT = "INT"
    SHORT = "SHORT"

    # Timers
    CREATE_TICK = "CREATE_TICK"
    CREATE_TIMER = "CREATE_TIMER"
    DELETE_TIMER = "DELETE_TIMER"
    ACTIVE_TIMER = "ACTIVE_TIMER"
    TIMER = "TIMER"


ASSIGNMENT_OPS = frozenset({
    Operation.ASSIGN,
    Operation.AND_EQUALS, Operation.OR_EQUALS, Operation.XOR_EQUALS,
    Operation.DIV_EQUALS, Operation.TIMES_EQUALS,
    Operation.PLUS_EQUALS, Operation.MINUS_EQUALS,
})

BOOLEAN_RESULT_OPS = frozenset({
    Operation.AND, Operation.OR, Operation.NOT,
    Operation.EQUALS, Operation.NOTEQUALS,
    Operation.GT, Operation.LT, Operation.GTE, Operation.LTE,
    Operation.CREATE_TICK, Operation.CREATE_TIMER,
    Operation.DELETE_TIMER, Operation.ACTIVE_TIMER,
    Operation.IF, Operation.ELSE,
})

CAST_RESULT_TYPES: dict[Operation, VarType] = {
    Operation.TOFLOAT: VarType.FLOAT,
    Operation.TOINT: VarType.UINT32,
    Operation.TOSHORT: VarType.UINT16,
    Operation.TOSTRING: VarType.STR,
}

# Declaration type specifier -> stamped value type
DECLARATION_TYPES: dict[Operation, VarType] = {
    Operation.INT: VarType.UINT32,
    Operation.SHORT: VarType.UINT16,
    Operation.FLOAT: VarType.FLOAT,
    Operation.STRING: VarType.STR,
}


# ---------------------------------------------------------------------------
# Store exchange
# ---------------------------------------------------------------------------

class TypedValue(BaseModel):
    """A value as read from or written to the external variable store.

    ``data`` is an ``int`` for the integer types, a ``float`` for FLOAT and
    ``bytes`` for STR.
    """

    model_config = ConfigDict(frozen=True)

    type: VarType
    data: int | float | bytes
