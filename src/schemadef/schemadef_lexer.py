"""
Lexical analyzer for the parquet schema definition language.

This module converts raw schema text into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    LexError: Raised on a character that starts no token.

Features:
    - Skips whitespace
    - Recognizes:
        * Words (identifiers and keywords alike, all lexed as IDENT)
        * Unsigned integers
        * The punctuation `{ } ( ) ; = ,`

Keywords are not reserved here. `message`, `required`, `int32`, `UTF8` and
the rest only mean something in keyword position, so the parser decides.

Example:
    >>> lexer = Lexer(CharacterStream("required int32 a;"))
    >>> lexer.next_token()
    Token(IDENT, required)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - LexError
    - tokenize
"""

from typing import Any

from schemadef.schemadef_constants import token_hashmap

DIGITS = "0123456789"


class LexError(SyntaxError):
    """Raised when the input contains a character no token can start with.

    Attributes:
        char (str): The offending character.
        line (int): 1-based line of the character.
        col (int): 1-based column of the character.
    """

    def __init__(self, char: str, line: int, col: int):
        super().__init__(f"Unexpected character {char!r} at line {line}, col {col}")
        self.char = char
        self.line = line
        self.col = col


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self) -> str:
        """Returns the next character without advancing, or "" at the end."""
        if self.position >= len(self.source):
            return ""
        return self.source[self.position]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The token kind ('IDENT', 'NUMBER', 'LBRACE', ..., 'EOF').
        value (str): The raw text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


def _is_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


class Lexer:
    """Lexical analyzer for schema definitions.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; an EOF token once the input is exhausted.

        Raises:
            LexError: If the next character starts no token.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token("EOF", "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if _is_alpha(ch):
            word = ""
            while not self.stream.end_of_file() and _is_word_char(self.peek()):
                word += self.advance()
            return Token("IDENT", word, line, col)

        # 2. Integer
        if ch in DIGITS:
            num = ""
            while not self.stream.end_of_file() and self.peek() in DIGITS:
                num += self.advance()
            return Token("NUMBER", num, line, col)

        # 3. Punctuation
        if ch in token_hashmap:
            self.advance()
            return Token(token_hashmap[ch], ch, line, col)

        raise LexError(ch, line, col)


def tokenize(source: str) -> list[Token]:
    """Lex all of `source`; the returned list always ends with one EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == "EOF":
            return tokens


__all__ = ["CharacterStream", "LexError", "Lexer", "Token", "tokenize"]
