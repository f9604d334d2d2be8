"""Tests for the Cacti lexer and token tables."""

from __future__ import annotations

import logging

from cacti.core.lang.lexer import Lexer, tokenize
from cacti.core.tokens import Precedence, TokenKind, lookup_ident, precedence_of


def _kinds_and_literals(source: str) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.literal) for t in tokenize(source)]


class TestLexer:
    """Lexer produces correct token sequences."""

    def test_single_character_tokens(self) -> None:
        assert _kinds_and_literals("=+(){},;") == [
            (TokenKind.ASSIGN, "="),
            (TokenKind.PLUS, "+"),
            (TokenKind.LPAREN, "("),
            (TokenKind.RPAREN, ")"),
            (TokenKind.LBRACE, "{"),
            (TokenKind.RBRACE, "}"),
            (TokenKind.COMMA, ","),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.EOF, ""),
        ]

    def test_operators(self) -> None:
        kinds = [t.kind for t in tokenize("!-/*5; 5 < 10 > 5;")]
        assert kinds == [
            TokenKind.BANG,
            TokenKind.MINUS,
            TokenKind.SLASH,
            TokenKind.ASTERISK,
            TokenKind.INT,
            TokenKind.SEMICOLON,
            TokenKind.INT,
            TokenKind.LT,
            TokenKind.INT,
            TokenKind.GT,
            TokenKind.INT,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_two_character_operators(self) -> None:
        assert _kinds_and_literals("10 == 10; 10 != 9;") == [
            (TokenKind.INT, "10"),
            (TokenKind.EQ, "=="),
            (TokenKind.INT, "10"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, "10"),
            (TokenKind.NOT_EQ, "!="),
            (TokenKind.INT, "9"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.EOF, ""),
        ]

    def test_assign_and_bang_fall_back_to_single_character(self) -> None:
        kinds = [t.kind for t in tokenize("= ! =!")]
        assert kinds == [
            TokenKind.ASSIGN,
            TokenKind.BANG,
            TokenKind.ASSIGN,
            TokenKind.BANG,
            TokenKind.EOF,
        ]

    def test_keywords(self) -> None:
        kinds = [t.kind for t in tokenize("fn let true false if else return")]
        assert kinds == [
            TokenKind.FUNCTION,
            TokenKind.LET,
            TokenKind.TRUE,
            TokenKind.FALSE,
            TokenKind.IF,
            TokenKind.ELSE,
            TokenKind.RETURN,
            TokenKind.EOF,
        ]

    def test_identifiers(self) -> None:
        assert _kinds_and_literals("foo_bar _x letter") == [
            (TokenKind.IDENT, "foo_bar"),
            (TokenKind.IDENT, "_x"),
            (TokenKind.IDENT, "letter"),
            (TokenKind.EOF, ""),
        ]

    def test_identifier_stops_at_digit(self) -> None:
        assert _kinds_and_literals("x1") == [
            (TokenKind.IDENT, "x"),
            (TokenKind.INT, "1"),
            (TokenKind.EOF, ""),
        ]

    def test_integer_literal_keeps_text(self) -> None:
        tokens = tokenize("838383")
        assert tokens[0].kind == TokenKind.INT
        assert tokens[0].literal == "838383"

    def test_strings(self) -> None:
        assert _kinds_and_literals('"foobar" "foo bar"') == [
            (TokenKind.STRING, "foobar"),
            (TokenKind.STRING, "foo bar"),
            (TokenKind.EOF, ""),
        ]

    def test_string_has_no_escape_processing(self) -> None:
        tokens = tokenize('"a\\nb"')
        assert tokens[0].literal == "a\\nb"

    def test_unterminated_string_runs_to_end_of_input(self) -> None:
        assert _kinds_and_literals('"hello') == [
            (TokenKind.STRING, "hello"),
            (TokenKind.EOF, ""),
        ]

    def test_empty_string(self) -> None:
        assert _kinds_and_literals('""') == [(TokenKind.STRING, ""), (TokenKind.EOF, "")]

    def test_whitespace_handling(self) -> None:
        tokens = tokenize(" \t a \r\n +\n\n b  ")
        kinds = [t.kind for t in tokens if t.kind != TokenKind.EOF]
        assert kinds == [TokenKind.IDENT, TokenKind.PLUS, TokenKind.IDENT]

    def test_illegal_character_is_not_fatal(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="cacti.core.lang.lexer"):
            tokens = tokenize("a @ b")
        assert [(t.kind, t.literal) for t in tokens] == [
            (TokenKind.IDENT, "a"),
            (TokenKind.ILLEGAL, "@"),
            (TokenKind.IDENT, "b"),
            (TokenKind.EOF, ""),
        ]
        assert "Unrecognized token found" in caplog.text

    def test_positions(self) -> None:
        tokens = tokenize("let x\n  = 5;")
        assert [(t.line, t.column) for t in tokens[:4]] == [(1, 1), (1, 5), (2, 3), (2, 5)]

    def test_full_program(self) -> None:
        source = """let five = 5;
let ten = 10;
   let add = fn(x, y) {
     x + y;
};
let result = add(five, ten);
"""
        kinds = [t.kind for t in tokenize(source)]
        assert kinds[:5] == [
            TokenKind.LET,
            TokenKind.IDENT,
            TokenKind.ASSIGN,
            TokenKind.INT,
            TokenKind.SEMICOLON,
        ]
        assert kinds.count(TokenKind.FUNCTION) == 1
        assert kinds.count(TokenKind.LET) == 4
        assert kinds[-1] == TokenKind.EOF


class TestTokenStream:
    """End-of-input behavior of the lazy token stream."""

    def test_eof_repeats(self) -> None:
        lexer = Lexer("x")
        assert lexer.next_token().kind == TokenKind.IDENT
        for _ in range(3):
            assert lexer.next_token().kind == TokenKind.EOF

    def test_empty_input(self) -> None:
        assert [t.kind for t in tokenize("")] == [TokenKind.EOF]
        assert [t.kind for t in tokenize("  \n\t ")] == [TokenKind.EOF]

    def test_tokenize_emits_exactly_one_eof_last(self) -> None:
        tokens = tokenize("let x = fn(a) { a * 2 }; x(3);")
        eofs = [t for t in tokens if t.kind == TokenKind.EOF]
        assert len(eofs) == 1
        assert tokens[-1].kind == TokenKind.EOF

    def test_iteration_stops_after_eof(self) -> None:
        assert len(list(Lexer("1 + 2"))) == 4


class TestTokenTables:
    """Keyword and precedence tables."""

    def test_lookup_ident(self) -> None:
        assert lookup_ident("fn") == TokenKind.FUNCTION
        assert lookup_ident("return") == TokenKind.RETURN
        assert lookup_ident("fnord") == TokenKind.IDENT

    def test_precedence_order(self) -> None:
        assert (
            precedence_of(TokenKind.EQ)
            < precedence_of(TokenKind.LT)
            < precedence_of(TokenKind.PLUS)
            < precedence_of(TokenKind.ASTERISK)
            < precedence_of(TokenKind.LPAREN)
        )
        assert precedence_of(TokenKind.NOT_EQ) == Precedence.EQUALS
        assert precedence_of(TokenKind.SEMICOLON) == Precedence.LOWEST

    def test_kind_values_are_diagnostic_spellings(self) -> None:
        assert f"{TokenKind.RPAREN}" == ")"
        assert f"{TokenKind.IDENT}" == "IDENT"
        assert f"{TokenKind.FUNCTION}" == "FUNCTION"
