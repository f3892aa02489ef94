"""
Lexical analyzer for JavaScript source text.

This module provides the components for converting raw source code into token lists:

Classes:
    CharacterStream: Scan cursor over a source string with offset/line/column tracking.
    Token: A single immutable token with type, raw lexeme and source location.
    Lexer: Converts source text into a list of tokens terminated by EOF.

Features:
    - Skips whitespace (only `\\n` starts a new line)
    - Emits `//` and `/* */` comments as COMMENT tokens
    - Recognizes:
        * Identifiers, keywords, booleans and `null`
        * Numbers (integer, fraction, exponent)
        * Strings and template strings (escapes kept verbatim)
        * Operators and punctuation, longest match first

The lexer is total: characters no rule recognizes become UNKNOWN tokens, and
unterminated strings, templates and block comments run to the end of input.

Example:
    >>> tokens = tokenize("let x = 10;")
    >>> tokens[0]
    Token(KEYWORD, let)
    >>> tokens[-1].type
    <TokenType.EOF: 'EOF'>

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from hedwig.hedwig_constants import KEYWORDS, MAX_OPERATOR_LENGTH, OPERATORS, PUNCTUATION, TokenType

logger = logging.getLogger(__name__)


def is_digit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"


def is_letter(ch: str) -> bool:
    return len(ch) == 1 and ("a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_")


def is_alphanumeric(ch: str) -> bool:
    return is_letter(ch) or is_digit(ch)


class CharacterStream:
    """
    A cursor for reading characters from a source string with line and column tracking.

    A fresh stream is created for every tokenization and passed explicitly to each
    scan routine of the lexer, so every scan step's effect on the position is visible
    at the call site.

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

        Returns:
            str: The consumed character.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def lookahead(self, length: int) -> str:
        """Returns up to `length` characters starting at the current position."""
        return self.source[self.position : self.position + length]

    def mark(self) -> tuple[int, int, int]:
        """Returns the current (position, line, column) triple."""
        return self.position, self.line, self.column

    def end_of_file(self) -> bool:
        """Checks if the stream has consumed all characters."""
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token of JavaScript source.

    Attributes:
        type (TokenType): The token category.
        value (str): The raw lexeme (quotes and backticks included).
        line (int): The 1-based line of the token's first character.
        column (int): The 1-based column of the token's first character.
        offset (int): The 0-based character offset of the token's first character.
            Not part of token equality.
    """

    type: TokenType
    value: str
    line: int = 0
    column: int = 0
    offset: int = field(default=0, compare=False)

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.value)

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "value": self.value,
            "line": self.line,
            "column": self.column,
        }


class Lexer:
    """Lexical analyzer for JavaScript.

    The Lexer keeps no cursor of its own: `tokenize` builds a `CharacterStream`
    and threads it through the scan routines, so one instance can be reused and
    each call starts from offset 0, line 1, column 1.
    """

    def tokenize(self, source: str) -> list[Token]:
        """Converts source text into a list of tokens ending with exactly one EOF token.

        Args:
            source (str): JavaScript source text.

        Returns:
            list[Token]: The tokens in source order.
        """
        stream = CharacterStream(source)
        tokens: list[Token] = []

        while not stream.end_of_file():
            if stream.peek().isspace():
                self.skip_whitespace(stream)
                continue
            tokens.append(self.next_token(stream))

        tokens.append(Token(TokenType.EOF, "", stream.line, stream.column, stream.position))
        logger.debug("Tokenized %d characters into %d tokens", len(source), len(tokens))
        return tokens

    def next_token(self, stream: CharacterStream) -> Token:
        """Scans exactly one token starting at a non-whitespace character."""
        ch = stream.peek()

        # 1. Comments
        if ch == "/" and stream.peek(1) in ("/", "*"):
            return self.scan_comment(stream)

        # 2. Numbers
        if is_digit(ch) or (ch == "." and is_digit(stream.peek(1))):
            return self.scan_number(stream)

        # 3. Strings
        if ch in ('"', "'"):
            return self.scan_string(stream, ch, TokenType.STRING)

        # 4. Template strings
        if ch == "`":
            return self.scan_string(stream, ch, TokenType.TEMPLATE_STRING)

        # 5. Identifier or keyword
        if is_letter(ch):
            return self.scan_identifier(stream)

        # 6. Operator or punctuation
        token = self.match_operator(stream)
        if token:
            return token

        # 7. Unknown character
        position, line, column = stream.mark()
        return Token(TokenType.UNKNOWN, stream.next(), line, column, position)

    def skip_whitespace(self, stream: CharacterStream) -> None:
        while not stream.end_of_file() and stream.peek().isspace():
            stream.next()

    def scan_comment(self, stream: CharacterStream) -> Token:
        """Scans a `//` line comment or a `/* */` block comment, delimiters included."""
        position, line, column = stream.mark()
        comment = stream.next() + stream.next()

        if comment == "//":
            while not stream.end_of_file() and stream.peek() != "\n":
                comment += stream.next()
        else:
            while not stream.end_of_file() and not (stream.peek() == "*" and stream.peek(1) == "/"):
                comment += stream.next()
            if not stream.end_of_file():
                comment += stream.next() + stream.next()

        return Token(TokenType.COMMENT, comment, line, column, position)

    def scan_number(self, stream: CharacterStream) -> Token:
        """Scans digits with at most one `.` and at most one signed exponent."""
        position, line, column = stream.mark()
        number = ""
        has_dot = False
        has_exponent = False

        while not stream.end_of_file():
            ch = stream.peek()
            if is_digit(ch):
                number += stream.next()
            elif ch == "." and not has_dot:
                has_dot = True
                number += stream.next()
            elif ch in ("e", "E") and not has_exponent:
                has_exponent = True
                number += stream.next()
                if stream.peek() in ("+", "-"):
                    number += stream.next()
            else:
                break

        return Token(TokenType.NUMBER, number, line, column, position)

    def scan_string(self, stream: CharacterStream, quote: str, type_: TokenType) -> Token:
        """Scans a quoted or backtick-delimited string up to its matching unescaped delimiter.

        Escapes are copied verbatim. In template strings `${` is plain text; the
        whole template becomes one token.
        """
        position, line, column = stream.mark()
        text = stream.next()

        while not stream.end_of_file() and stream.peek() != quote:
            if stream.peek() == "\\":
                text += stream.next()
                if not stream.end_of_file():
                    text += stream.next()
            else:
                text += stream.next()

        if not stream.end_of_file():
            text += stream.next()

        return Token(type_, text, line, column, position)

    def scan_identifier(self, stream: CharacterStream) -> Token:
        position, line, column = stream.mark()
        ident = ""
        while is_alphanumeric(stream.peek()):
            ident += stream.next()

        if ident in KEYWORDS:
            if ident in ("true", "false"):
                type_ = TokenType.BOOLEAN
            elif ident == "null":
                type_ = TokenType.NULL
            else:
                type_ = TokenType.KEYWORD
            return Token(type_, ident, line, column, position)
        return Token(TokenType.IDENTIFIER, ident, line, column, position)

    def match_operator(self, stream: CharacterStream) -> Token | None:
        """Attempts to match the longest operator or punctuation at the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        position, line, column = stream.mark()

        for length in range(MAX_OPERATOR_LENGTH, 0, -1):
            candidate = stream.lookahead(length)
            if len(candidate) != length:
                continue
            if candidate in OPERATORS:
                type_ = TokenType.OPERATOR
            elif candidate in PUNCTUATION:
                type_ = TokenType.PUNCTUATION
            else:
                continue
            for _ in range(length):
                stream.next()
            return Token(type_, candidate, line, column, position)

        return None


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` with a fresh Lexer."""
    return Lexer().tokenize(source)


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
