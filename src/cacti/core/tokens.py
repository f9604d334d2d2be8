"""
Token and grammar tables for the Cacti language.

Shared by the lexer (token kinds, keywords) and the parser
(operator precedence).
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict


class TokenKind(StrEnum):
    """Token types. Values are the spellings used in parser diagnostics."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"


class Token(BaseModel):
    """
    A single lexical unit.

    Attributes:
        kind: Type of token
        literal: Source text of the token (string tokens exclude the quotes)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    kind: TokenKind
    literal: str
    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.literal!r}, {self.line}:{self.column})"


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


def lookup_ident(ident: str) -> TokenKind:
    """Classify a word as a keyword or a plain identifier."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


class Precedence(IntEnum):
    """Binding power of operators, lowest first."""

    LOWEST = 0
    EQUALS = 1  # ==
    LESSGREATER = 2  # > or <
    SUM = 3  # +
    PRODUCT = 4  # *
    PREFIX = 5  # -x or !x
    CALL = 6  # fn(x)


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


def precedence_of(kind: TokenKind) -> Precedence:
    """Infix precedence of a token kind; LOWEST for non-operators."""
    return PRECEDENCES.get(kind, Precedence.LOWEST)
