"""
Lexer for the Cacti language.

Converts raw source text into a lazy stream of tokens. Unrecognized
characters become ILLEGAL tokens instead of raising, so the parser can
report them alongside any other diagnostics.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from cacti.core.tokens import Token, TokenKind, lookup_ident

logger = logging.getLogger(__name__)

_WHITESPACE = (" ", "\t", "\n", "\r")

_SINGLE_CHAR: dict[str, TokenKind] = {
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "+": TokenKind.PLUS,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    ">": TokenKind.GT,
    "<": TokenKind.LT,
}

# One-character operators that become a two-character operator when
# followed by "=".
_WITH_EQUALS: dict[str, tuple[TokenKind, TokenKind]] = {
    "=": (TokenKind.ASSIGN, TokenKind.EQ),
    "!": (TokenKind.BANG, TokenKind.NOT_EQ),
}


def is_letter(ch: str | None) -> bool:
    return ch is not None and (("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_")


def is_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


class Lexer:
    """
    Lexer for Cacti source text.

    Call ``next_token()`` repeatedly; once the input is exhausted every
    further call returns an EOF token. Iterating a lexer yields tokens up
    to and including the first EOF.
    """

    def __init__(self, text: str):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
        """
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        while self.current_char() in _WHITESPACE:
            self.advance()

    def read_string(self) -> str:
        """Read the raw text between double quotes; no escape processing."""
        self.advance()  # skip opening quote
        start = self.pos
        while self.current_char() not in ('"', None):
            self.advance()
        value = self.text[start : self.pos]
        self.advance()  # skip closing quote (no-op at end of input)
        return value

    def read_identifier(self) -> str:
        start = self.pos
        while is_letter(self.current_char()):
            self.advance()
        return self.text[start : self.pos]

    def read_number(self) -> str:
        start = self.pos
        while is_digit(self.current_char()):
            self.advance()
        return self.text[start : self.pos]

    def next_token(self) -> Token:
        """Return the next token, skipping leading whitespace."""
        self.skip_whitespace()

        line, column = self.line, self.column
        ch = self.current_char()

        if ch is None:
            return Token(kind=TokenKind.EOF, literal="", line=line, column=column)

        if ch == '"':
            literal = self.read_string()
            return Token(kind=TokenKind.STRING, literal=literal, line=line, column=column)

        if ch in _WITH_EQUALS:
            single, double = _WITH_EQUALS[ch]
            if self.peek_char() == "=":
                self.advance()
                self.advance()
                return Token(kind=double, literal=ch + "=", line=line, column=column)
            self.advance()
            return Token(kind=single, literal=ch, line=line, column=column)

        if ch in _SINGLE_CHAR:
            self.advance()
            return Token(kind=_SINGLE_CHAR[ch], literal=ch, line=line, column=column)

        if is_letter(ch):
            literal = self.read_identifier()
            return Token(kind=lookup_ident(literal), literal=literal, line=line, column=column)

        if is_digit(ch):
            literal = self.read_number()
            return Token(kind=TokenKind.INT, literal=literal, line=line, column=column)

        logger.warning("Unrecognized token found: %r at %d:%d", ch, line, column)
        self.advance()
        return Token(kind=TokenKind.ILLEGAL, literal=ch, line=line, column=column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return


def tokenize(text: str) -> list[Token]:
    """Tokenize source text into a list of tokens ending with a single EOF."""
    return list(Lexer(text))
