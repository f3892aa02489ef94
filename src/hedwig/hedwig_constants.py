"""
Lexical constants for the hedwig JavaScript front end.

This module holds the fixed vocabularies that drive both the lexer and the parser:

Constants:
    TokenType: The closed set of token categories produced by the lexer.
    KEYWORDS: Reserved words reclassified from identifier-shaped lexemes.
    OPERATORS: Operator lexemes, matched longest-first (up to 4 characters).
    PUNCTUATION: Single-character punctuation lexemes.
    MAX_OPERATOR_LENGTH: Longest lexeme in OPERATORS or PUNCTUATION.
    ASSIGNMENT_OPERATORS, EQUALITY_OPERATORS, COMPARISON_OPERATORS,
    ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS, UNARY_OPERATORS,
    UNARY_KEYWORDS, UPDATE_OPERATORS: Operator groups used by the parser's
        precedence levels.
    STATEMENT_KEYWORDS: Keywords at which error recovery resumes parsing.
"""

from enum import Enum


class TokenType(str, Enum):
    """Every kind of token the lexer can emit."""

    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"

    # Literals
    NUMBER = "NUMBER"
    STRING = "STRING"
    TEMPLATE_STRING = "TEMPLATE_STRING"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"

    OPERATOR = "OPERATOR"
    PUNCTUATION = "PUNCTUATION"
    COMMENT = "COMMENT"
    EOF = "EOF"

    # Character not recognized by any lexer rule
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


KEYWORDS: frozenset[str] = frozenset(
    {
        # Declarations
        "var",
        "let",
        "const",
        "function",
        "class",
        "extends",
        "static",
        "import",
        "export",
        # Control flow
        "if",
        "else",
        "for",
        "while",
        "do",
        "switch",
        "case",
        "default",
        "break",
        "continue",
        "return",
        "throw",
        "try",
        "catch",
        "finally",
        # Literal-like
        "true",
        "false",
        "null",
        "undefined",
        "NaN",
        "Infinity",
        # Everything else
        "this",
        "super",
        "new",
        "typeof",
        "instanceof",
        "void",
        "delete",
        "in",
        "of",
        "with",
        "yield",
        "await",
        "async",
    }
)

OPERATORS: frozenset[str] = frozenset(
    {
        # Arithmetic
        "+",
        "-",
        "*",
        "/",
        "%",
        "**",
        "++",
        "--",
        # Assignment
        "=",
        "+=",
        "-=",
        "*=",
        "/=",
        "%=",
        "**=",
        "&=",
        "|=",
        "^=",
        "<<=",
        ">>=",
        ">>>=",
        # Comparison
        "==",
        "===",
        "!=",
        "!==",
        ">",
        "<",
        ">=",
        "<=",
        # Logical
        "!",
        "&&",
        "||",
        "??",
        "?.",
        "?",
        # Bitwise
        "&",
        "|",
        "^",
        "~",
        "<<",
        ">>",
        ">>>",
        # Misc
        "=>",
        "...",
    }
)

PUNCTUATION: frozenset[str] = frozenset({"(", ")", "[", "]", "{", "}", ",", ";", ":", "."})

MAX_OPERATOR_LENGTH: int = max(len(lexeme) for lexeme in OPERATORS | PUNCTUATION)

# PARSER OPERATOR GROUPS

ASSIGNMENT_OPERATORS: frozenset[str] = frozenset({"=", "+=", "-=", "*=", "/=", "%=", "**="})
EQUALITY_OPERATORS: frozenset[str] = frozenset({"==", "===", "!=", "!=="})
COMPARISON_OPERATORS: frozenset[str] = frozenset({"<", ">", "<=", ">="})
ADDITIVE_OPERATORS: frozenset[str] = frozenset({"+", "-"})
MULTIPLICATIVE_OPERATORS: frozenset[str] = frozenset({"*", "/", "%"})
UNARY_OPERATORS: frozenset[str] = frozenset({"!", "~", "+", "-"})
UNARY_KEYWORDS: frozenset[str] = frozenset({"typeof", "void", "delete"})
UPDATE_OPERATORS: frozenset[str] = frozenset({"++", "--"})

STATEMENT_KEYWORDS: frozenset[str] = frozenset(
    {"function", "class", "var", "let", "const", "if", "for", "while", "return"}
)

__all__ = [
    "ADDITIVE_OPERATORS",
    "ASSIGNMENT_OPERATORS",
    "COMPARISON_OPERATORS",
    "EQUALITY_OPERATORS",
    "KEYWORDS",
    "MAX_OPERATOR_LENGTH",
    "MULTIPLICATIVE_OPERATORS",
    "OPERATORS",
    "PUNCTUATION",
    "STATEMENT_KEYWORDS",
    "TokenType",
    "UNARY_KEYWORDS",
    "UNARY_OPERATORS",
    "UPDATE_OPERATORS",
]
