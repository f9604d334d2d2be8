"""
Property-based tests using Hypothesis.

These tests verify invariants of the lexer and parser across generated
inputs.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from cacti.core.lang.lexer import Lexer, tokenize
from cacti.core.lang.parser import parse
from cacti.core.tokens import TokenKind

# =============================================================================
# Strategies
# =============================================================================

_identifiers = st.sampled_from(["a", "b", "foo", "bar_baz", "_x"])
_integers = st.integers(min_value=0, max_value=10_000).map(str)
_strings = st.text(alphabet="abc xyz", max_size=5).map(lambda s: f'"{s}"')
_booleans = st.sampled_from(["true", "false"])

_atoms = st.one_of(_identifiers, _integers, _strings, _booleans)


def _extend(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    binary = st.tuples(
        children, st.sampled_from(["+", "-", "*", "/", "<", ">", "==", "!="]), children
    ).map(lambda t: f"{t[0]} {t[1]} {t[2]}")
    prefix = st.tuples(st.sampled_from(["!", "-"]), children).map(lambda t: f"{t[0]}{t[1]}")
    grouped = children.map(lambda c: f"({c})")
    call = st.tuples(_identifiers, st.lists(children, max_size=3)).map(
        lambda t: f"{t[0]}({', '.join(t[1])})"
    )
    if_expr = st.tuples(children, children, st.none() | children).map(
        lambda t: f"if ({t[0]}) {{ {t[1]} }}" + (f" else {{ {t[2]} }}" if t[2] else "")
    )
    fn_lit = st.tuples(st.lists(_identifiers, max_size=3, unique=True), children).map(
        lambda t: f"fn({', '.join(t[0])}) {{ {t[1]} }}"
    )
    return st.one_of(binary, prefix, grouped, call, if_expr, fn_lit)


_expressions = st.recursive(_atoms, _extend, max_leaves=12)

_statements = st.one_of(
    _expressions.map(lambda e: f"{e};"),
    st.tuples(_identifiers, _expressions).map(lambda t: f"let {t[0]} = {t[1]};"),
    _expressions.map(lambda e: f"return {e};"),
)
_programs = st.lists(_statements, min_size=1, max_size=5).map(" ".join)


# =============================================================================
# Lexer Properties
# =============================================================================


class TestLexerProperties:
    """Property-based tests for the lexer."""

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_tokenize_ends_with_single_eof(self, text: str) -> None:
        """Invariant: any input yields exactly one EOF, and it is last."""
        tokens = tokenize(text)
        assert tokens[-1].kind == TokenKind.EOF
        assert sum(1 for t in tokens if t.kind == TokenKind.EOF) == 1

    @given(st.text(max_size=100))
    @settings(max_examples=100)
    def test_eof_repeats(self, text: str) -> None:
        """Invariant: after the stream is exhausted, EOF keeps coming."""
        lexer = Lexer(text)
        for _ in lexer:
            pass
        assert lexer.next_token().kind == TokenKind.EOF
        assert lexer.next_token().kind == TokenKind.EOF


# =============================================================================
# Parser Properties
# =============================================================================


class TestParserProperties:
    """Property-based tests for the parser."""

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_parse_never_raises(self, text: str) -> None:
        """Invariant: parse returns a program and diagnostics for any input."""
        program, diagnostics = parse(text)
        assert isinstance(diagnostics, list)
        assert program is not None

    @given(_expressions)
    @settings(max_examples=300)
    def test_canonical_form_round_trips(self, source: str) -> None:
        """Invariant: printing then re-parsing is idempotent."""
        program, diagnostics = parse(source)
        assert diagnostics == []
        first = str(program)

        reparsed, diagnostics = parse(first)
        assert diagnostics == []
        assert str(reparsed) == first

    @given(_programs)
    @settings(max_examples=200)
    def test_program_form_keeps_statement_count(self, source: str) -> None:
        """Invariant: a printed program re-parses to as many statements, idempotently."""
        program, diagnostics = parse(source)
        assert diagnostics == []
        first = str(program)

        reparsed, diagnostics = parse(first)
        assert diagnostics == []
        assert len(reparsed.statements) == len(program.statements)
        assert str(reparsed) == first
