"""
Token and keyword tables for the parquet schema definition language.

Punctuation is classified by the lexer through `token_hashmap`. Keywords are
never reserved by the lexer: every word lexes as `IDENT` and the parser
resolves it contextually against the spelling tables below. The printer uses
the same tables in reverse, so a keyword added here is both parsed and
rendered.

Exports:
    - token_hashmap
    - REPETITION_KEYWORDS
    - PHYSICAL_TYPE_KEYWORDS
    - CONVERTED_TYPE_KEYWORDS
    - LOGICAL_TYPE_KEYWORDS
    - TIME_UNIT_KEYWORDS
    - BOOLEAN_KEYWORDS
    - invert
"""

from typing import Any

from schemadef.schemadef_ast import (
    ConvertedType,
    LogicalTypeKind,
    PhysicalType,
    Repetition,
    TimeUnit,
)

token_hashmap: dict[str, str] = {
    "{": "LBRACE",
    "}": "RBRACE",
    "(": "LPAREN",
    ")": "RPAREN",
    ";": "SEMICOLON",
    "=": "EQUALS",
    ",": "COMMA",
}

MESSAGE_KEYWORD = "message"
GROUP_KEYWORD = "group"

REPETITION_KEYWORDS: dict[str, Repetition] = {
    "required": Repetition.REQUIRED,
    "optional": Repetition.OPTIONAL,
    "repeated": Repetition.REPEATED,
}

PHYSICAL_TYPE_KEYWORDS: dict[str, PhysicalType] = {
    "binary": PhysicalType.BINARY,
    "float": PhysicalType.FLOAT,
    "double": PhysicalType.DOUBLE,
    "boolean": PhysicalType.BOOLEAN,
    "int32": PhysicalType.INT32,
    "int64": PhysicalType.INT64,
    "int96": PhysicalType.INT96,
    "fixed_len_byte_array": PhysicalType.FIXED_LEN_BYTE_ARRAY,
}

CONVERTED_TYPE_KEYWORDS: dict[str, ConvertedType] = {
    ct.name: ct for ct in ConvertedType
}

LOGICAL_TYPE_KEYWORDS: dict[str, LogicalTypeKind] = {
    "STRING": LogicalTypeKind.STRING,
    "DATE": LogicalTypeKind.DATE,
    "TIMESTAMP": LogicalTypeKind.TIMESTAMP,
    "UUID": LogicalTypeKind.UUID,
    "ENUM": LogicalTypeKind.ENUM,
    "JSON": LogicalTypeKind.JSON,
}

TIME_UNIT_KEYWORDS: dict[str, TimeUnit] = {
    "MILLIS": TimeUnit.MILLIS,
    "MICROS": TimeUnit.MICROS,
    "NANOS": TimeUnit.NANOS,
}

BOOLEAN_KEYWORDS: dict[str, bool] = {"true": True, "false": False}

# Storage format fields (field_id, type_length) are thrift i32.
MAX_INT32 = 2**31 - 1


def invert(table: dict[str, Any]) -> dict[Any, str]:
    """Return the value → spelling direction of a keyword table."""
    return {v: k for k, v in table.items()}
