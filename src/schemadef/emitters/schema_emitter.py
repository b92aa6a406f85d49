"""
Renders a column tree back into schema definition text.

This module defines the `SchemaEmitter` class, which walks a `Column` tree and
produces canonical schema text: one declaration per line, two spaces of indent
per nesting level, and the exact keyword spellings the parser accepts. Parsing
the output again yields a tree equal to the one that was emitted.

Rendering per column:
    <repetition> group <name> [(<converted-type>)] {
      ...
    }
    <repetition> <type> <name> [(<logical-type>)] [= <field-id>];

A value that has no spelling in the grammar is rendered as a diagnostic
placeholder (`UT:...`, `UC:...`, `BUG(UNKNOWN)`) instead of raising. Such text
does not parse; it marks a tree that was built outside the parser with values
the language cannot express.
"""

from schemadef.schemadef_ast import (
    Column,
    ConvertedType,
    LogicalType,
    LogicalTypeKind,
)
from schemadef.schemadef_constants import (
    BOOLEAN_KEYWORDS,
    CONVERTED_TYPE_KEYWORDS,
    GROUP_KEYWORD,
    LOGICAL_TYPE_KEYWORDS,
    MESSAGE_KEYWORD,
    PHYSICAL_TYPE_KEYWORDS,
    REPETITION_KEYWORDS,
    TIME_UNIT_KEYWORDS,
    invert,
)

REPETITION_NAMES = invert(REPETITION_KEYWORDS)
PHYSICAL_TYPE_NAMES = invert(PHYSICAL_TYPE_KEYWORDS)
CONVERTED_TYPE_NAMES = invert(CONVERTED_TYPE_KEYWORDS)
LOGICAL_TYPE_NAMES = invert(LOGICAL_TYPE_KEYWORDS)
TIME_UNIT_NAMES = invert(TIME_UNIT_KEYWORDS)
BOOLEAN_NAMES = invert(BOOLEAN_KEYWORDS)

EMPTY_MESSAGE = f"{MESSAGE_KEYWORD} empty {{\n}}\n"


class SchemaEmitter:
    """Emits schema definition text from a column tree.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current nesting level.

    Methods:
        emit_message(root): Emits a whole document for a root group.
        get_output(): Returns the emitted text.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "  " * self.indent

    def get_output(self) -> str:
        """Returns the emitted text, newline terminated."""
        return "".join(line + "\n" for line in self.lines)

    def emit_message(self, root: Column) -> None:
        self.lines.append(f"{MESSAGE_KEYWORD} {root.name} {{")
        self.emit_body(root.children)
        self.lines.append("}")

    def emit_body(self, columns: tuple[Column, ...]) -> None:
        self.indent += 1
        for col in columns:
            self._visit(col)
        self.indent -= 1

    def _visit(self, col: Column) -> None:
        if col.is_group:
            self.emit_group(col)
        else:
            self.emit_leaf(col)

    def emit_group(self, col: Column) -> None:
        line = f"{self.indent_str()}{self.emit_repetition(col)} {GROUP_KEYWORD} {col.name}"
        if col.converted_type is not None:
            line += f" ({self.emit_converted_type(col.converted_type)})"
        self.lines.append(line + " {")
        self.emit_body(col.children)
        self.lines.append(self.indent_str() + "}")

    def emit_leaf(self, col: Column) -> None:
        line = f"{self.indent_str()}{self.emit_repetition(col)} {self.emit_physical_type(col)} {col.name}"
        if col.logical_type is not None:
            line += f" ({self.emit_logical_type(col.logical_type)})"
        if col.field_id is not None:
            line += f" = {col.field_id}"
        self.lines.append(line + ";")

    def emit_repetition(self, col: Column) -> str:
        if col.repetition is None:
            return "BUG(NO_REPETITION)"
        return REPETITION_NAMES.get(col.repetition, f"UR:{col.repetition.name}")

    def emit_physical_type(self, col: Column) -> str:
        assert col.physical_type is not None  # for mypy
        name = PHYSICAL_TYPE_NAMES.get(col.physical_type)
        if name is None:
            return f"UT:{col.physical_type.name}"
        if col.type_length is not None:
            return f"{name}({col.type_length})"
        return name

    def emit_converted_type(self, converted_type: ConvertedType) -> str:
        return CONVERTED_TYPE_NAMES.get(converted_type, f"UC:{converted_type.name}")

    def emit_logical_type(self, logical_type: LogicalType) -> str:
        name = LOGICAL_TYPE_NAMES.get(logical_type.kind)
        if name is None:
            return "BUG(UNKNOWN)"
        if logical_type.kind is not LogicalTypeKind.TIMESTAMP:
            return name
        unit = (
            TIME_UNIT_NAMES.get(logical_type.unit, "BUG_UNKNOWN_TIMESTAMP_UNIT")
            if logical_type.unit is not None
            else "BUG_UNKNOWN_TIMESTAMP_UNIT"
        )
        utc = BOOLEAN_NAMES[bool(logical_type.is_adjusted_to_utc)]
        return f"{name}({unit}, {utc})"


def emit_schema(root: Column | None) -> str:
    """Render a whole document; None renders the empty-message placeholder."""
    if root is None:
        return EMPTY_MESSAGE
    emitter = SchemaEmitter()
    emitter.emit_message(root)
    return emitter.get_output()
