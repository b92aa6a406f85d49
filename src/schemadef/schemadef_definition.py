"""
Entry points for parsing, rendering and inspecting schema definitions.

A schema definition is a text document such as::

    message m {
      required int32 a;
      optional group g (LIST) {
        repeated binary item;
      }
    }

`parse_schema_definition` lexes and parses the document in one step and either
returns a `SchemaDefinition` wrapping the root group or raises the first
`LexError` / `SchemaParseError` encountered. No partial result is ever
returned.

A `SchemaDefinition` is a read-only view of one node of the tree. Looking up a
child with `sub_schema` returns a new view onto the existing node; nothing is
copied, and the tree is never modified after parsing, so views may be shared
between threads.

Functions:
    parse_schema_definition(text) / parse(text)
    render(definition)
    lookup_child(definition, name)
    to_external_record(definition)
"""

from typing import Iterable

from schemadef.emitters.schema_emitter import emit_schema
from schemadef.schemadef_ast import Column
from schemadef.schemadef_element import (
    SchemaElement,
    column_to_element,
    flatten,
    unflatten,
)
from schemadef.schemadef_lexer import tokenize
from schemadef.schemadef_parser import Parser


class SchemaDefinition:
    """A parsed schema, or a view onto one of its columns.

    Attributes:
        column (Column | None): The node this definition refers to. None only
            for an empty definition, which renders as a placeholder message.
    """

    def __init__(self, column: Column | None = None) -> None:
        self.column = column

    def __str__(self) -> str:
        return emit_schema(self.column)

    def __repr__(self) -> str:
        return f"SchemaDefinition({self.column!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SchemaDefinition) and self.column == other.column

    __hash__ = None  # type: ignore[assignment]

    def render(self) -> str:
        return str(self)

    def sub_schema(self, name: str) -> "SchemaDefinition | None":
        """Return a view onto the direct child called `name`.

        Only direct children are searched. When several share the name the
        first one wins. A missing child yields None rather than an error.
        """
        if self.column is None:
            return None
        child = self.column.child(name)
        if child is None:
            return None
        return SchemaDefinition(child)

    def schema_element(self) -> SchemaElement | None:
        """Return the storage format record for this node, or None if empty."""
        if self.column is None:
            return None
        return column_to_element(self.column)

    def elements(self) -> list[SchemaElement]:
        """Return the depth-first record list the storage format persists."""
        if self.column is None:
            return []
        return flatten(self.column)

    @classmethod
    def from_elements(cls, elements: Iterable[SchemaElement]) -> "SchemaDefinition":
        """Rebuild a definition from a depth-first record list.

        Raises:
            ValueError: If the list does not describe exactly one tree.
        """
        return cls(unflatten(list(elements)))


def parse_schema_definition(text: str) -> SchemaDefinition:
    """Parse a schema definition document.

    Args:
        text (str): The full document.

    Returns:
        SchemaDefinition: A definition rooted at the document's message group.

    Raises:
        LexError: If the text contains a character outside the language.
        SchemaParseError: If the tokens do not follow the grammar.
    """
    root = Parser(tokenize(text)).parse()
    return SchemaDefinition(root)


parse = parse_schema_definition


def render(definition: SchemaDefinition | None) -> str:
    if definition is None:
        return emit_schema(None)
    return definition.render()


def lookup_child(
    definition: SchemaDefinition | None, name: str
) -> SchemaDefinition | None:
    if definition is None:
        return None
    return definition.sub_schema(name)


def to_external_record(definition: SchemaDefinition | None) -> SchemaElement | None:
    if definition is None:
        return None
    return definition.schema_element()
