"""
Schema Definition Parser

Parses schema definition tokens into a column tree.

This module implements a recursive-descent parser that mirrors the grammar one
production per method. Every production is decided by its first keyword, so a
single token of lookahead suffices throughout.

Grammar
-------
::

    message            ::= 'message' <identifier> '{' <message-body> '}'
    message-body       ::= <column-definition>*
    column-definition  ::= <repetition-type> <column-type-definition>
    repetition-type    ::= 'required' | 'repeated' | 'optional'
    group-definition   ::= 'group' <identifier> ('(' <converted-type> ')')? '{' <message-body> '}'
    field-definition   ::= <type> <identifier> ('(' <logical-type> ')')? ('=' <number>)? ';'
    type               ::= 'binary' | 'float' | 'double' | 'boolean' | 'int32'
                         | 'int64' | 'int96' | 'fixed_len_byte_array' '(' <number> ')'
    logical-type       ::= 'STRING' | 'DATE' | 'UUID' | 'ENUM' | 'JSON'
                         | 'TIMESTAMP' '(' <time-unit> ',' <boolean> ')'

Parser Behavior
---------------
- Fail-fast: the first mismatch raises `SchemaParseError`; there is no
  recovery and no partial tree.
- Each parse method returns a freshly built, fully populated `Column`.
- Declaration order of columns is preserved as child order.

Raises
------
SchemaParseError
    Raised when a token does not fit the grammar at its position.
"""

from __future__ import annotations

from typing import Mapping

from schemadef.schemadef_ast import (
    Column,
    ConvertedType,
    LogicalType,
    LogicalTypeKind,
    PhysicalType,
    Repetition,
)
from schemadef.schemadef_constants import (
    BOOLEAN_KEYWORDS,
    CONVERTED_TYPE_KEYWORDS,
    GROUP_KEYWORD,
    LOGICAL_TYPE_KEYWORDS,
    MAX_INT32,
    MESSAGE_KEYWORD,
    PHYSICAL_TYPE_KEYWORDS,
    REPETITION_KEYWORDS,
    TIME_UNIT_KEYWORDS,
)
from schemadef.schemadef_lexer import Token


class SchemaParseError(SyntaxError):
    """Raised when the token stream does not match the grammar.

    Attributes:
        expected (str): Description of the construct the parser wanted.
        token (Token): The token actually found.
        line (int): 1-based line of the offending token.
        col (int): 1-based column of the offending token.
    """

    def __init__(self, expected: str, token: Token):
        found = "end of input" if token.type == "EOF" else repr(token.value)
        super().__init__(
            f"Expected {expected}, got {found} at line {token.line}, col {token.col}"
        )
        self.expected = expected
        self.token = token
        self.line = token.line
        self.col = token.col


class Parser:
    """
    Schema Definition Parser Class

    Transforms a list of tokens (as produced by `schemadef_lexer.tokenize`)
    into the root `Column` of a schema.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    position : int
        Current index into the token stream.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0

    def current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        last = self.tokens[-1] if self.tokens else Token("EOF", "EOF")
        return Token("EOF", "EOF", last.line, last.col)

    def advance(self) -> Token:
        tok = self.current()
        self.position += 1
        return tok

    def match(self, type_: str, expected: str) -> Token:
        tok = self.current()
        if tok.type != type_:
            raise SchemaParseError(expected, tok)
        return self.advance()

    def match_keyword(self, table: Mapping[str, object], expected: str) -> Token:
        """Consume an IDENT whose spelling is a key of `table`."""
        tok = self.current()
        if tok.type != "IDENT" or tok.value not in table:
            raise SchemaParseError(expected, tok)
        return self.advance()

    def at(self, type_: str) -> bool:
        return self.current().type == type_

    def parse(self) -> Column:
        """Parse a complete document and return its root group."""
        try:
            root = self.parse_message()
        except RecursionError:
            raise SchemaParseError("shallower group nesting", self.current()) from None
        self.match("EOF", "end of input after message")
        return root

    def parse_message(self) -> Column:
        tok = self.current()
        if tok.type != "IDENT" or tok.value != MESSAGE_KEYWORD:
            raise SchemaParseError(f"'{MESSAGE_KEYWORD}'", tok)
        self.advance()
        name = self.match("IDENT", "message name").value
        self.match("LBRACE", "'{'")
        children = self.parse_body()
        self.match("RBRACE", "'}'")
        return Column(name, children=children)

    def parse_body(self) -> list[Column]:
        """Parse column definitions up to, not including, the closing brace."""
        columns: list[Column] = []
        while not self.at("RBRACE"):
            columns.append(self.parse_column())
        return columns

    def parse_column(self) -> Column:
        rep_tok = self.match_keyword(
            REPETITION_KEYWORDS, "repetition type (required, optional, repeated)"
        )
        repetition = REPETITION_KEYWORDS[rep_tok.value]

        tok = self.current()
        if tok.type == "IDENT" and tok.value == GROUP_KEYWORD:
            self.advance()
            return self.parse_group(repetition)
        return self.parse_field(repetition)

    def parse_group(self, repetition: Repetition) -> Column:
        name = self.match("IDENT", "group name").value

        converted_type = None
        if self.at("LPAREN"):
            self.advance()
            converted_type = self.parse_converted_type()
            self.match("RPAREN", "')'")

        self.match("LBRACE", "'{'")
        children = self.parse_body()
        self.match("RBRACE", "'}'")

        return Column(
            name,
            repetition,
            children=children,
            converted_type=converted_type,
        )

    def parse_field(self, repetition: Repetition) -> Column:
        physical_type, type_length = self.parse_physical_type()
        name = self.match("IDENT", "field name").value

        logical_type = None
        if self.at("LPAREN"):
            self.advance()
            logical_type = self.parse_logical_type()
            self.match("RPAREN", "')'")

        field_id = None
        if self.at("EQUALS"):
            self.advance()
            field_id = self.parse_number("field id")

        self.match("SEMICOLON", "';'")

        return Column(
            name,
            repetition,
            physical_type=physical_type,
            type_length=type_length,
            logical_type=logical_type,
            field_id=field_id,
        )

    def parse_physical_type(self) -> tuple[PhysicalType, int | None]:
        tok = self.match_keyword(PHYSICAL_TYPE_KEYWORDS, "'group' or a primitive type")
        physical_type = PHYSICAL_TYPE_KEYWORDS[tok.value]
        if physical_type is not PhysicalType.FIXED_LEN_BYTE_ARRAY:
            return physical_type, None

        self.match("LPAREN", "'(' after fixed_len_byte_array")
        len_tok = self.current()
        length = self.parse_number("fixed_len_byte_array length")
        if length <= 0:
            raise SchemaParseError("positive fixed_len_byte_array length", len_tok)
        self.match("RPAREN", "')'")
        return physical_type, length

    def parse_converted_type(self) -> ConvertedType:
        tok = self.match_keyword(CONVERTED_TYPE_KEYWORDS, "converted type")
        return CONVERTED_TYPE_KEYWORDS[tok.value]

    def parse_logical_type(self) -> LogicalType:
        tok = self.match_keyword(LOGICAL_TYPE_KEYWORDS, "logical type")
        kind = LOGICAL_TYPE_KEYWORDS[tok.value]
        if kind is not LogicalTypeKind.TIMESTAMP:
            return LogicalType(kind)

        self.match("LPAREN", "'(' after TIMESTAMP")
        unit_tok = self.match_keyword(TIME_UNIT_KEYWORDS, "time unit (MILLIS, MICROS, NANOS)")
        self.match("COMMA", "','")
        utc_tok = self.match_keyword(BOOLEAN_KEYWORDS, "boolean (true, false)")
        self.match("RPAREN", "')'")
        return LogicalType.timestamp(
            TIME_UNIT_KEYWORDS[unit_tok.value], BOOLEAN_KEYWORDS[utc_tok.value]
        )

    def parse_number(self, expected: str) -> int:
        tok = self.match("NUMBER", expected)
        digits = tok.value.lstrip("0") or "0"
        # int() refuses very long digit strings
        if len(digits) > len(str(MAX_INT32)) or int(digits) > MAX_INT32:
            raise SchemaParseError(f"{expected} (malformed integer)", tok)
        return int(digits)
