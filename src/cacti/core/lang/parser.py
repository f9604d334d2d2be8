"""
Pratt parser for the Cacti language.

Grammar (precedence low to high):
    program     → statement*
    statement   → "let" IDENT "=" expr ";"?
                | "return" expr ";"?
                | expr ";"?
    block       → "{" statement* "}"
    expr        → prefix (infix)*
    prefix      → IDENT | INT | STRING | "true" | "false"
                | ("!" | "-") expr
                | "(" expr ")"
                | "if" "(" expr ")" block ("else" block)?
                | "fn" "(" (IDENT ("," IDENT)*)? ")" block
    infix       → ("==" | "!=") expr          EQUALS
                | ("<" | ">") expr            LESSGREATER
                | ("+" | "-") expr            SUM
                | ("*" | "/") expr            PRODUCT
                | "(" (expr ("," expr)*)? ")" CALL

The parser never raises on malformed input. Each failed production
records a diagnostic and yields None; the caller must check
``Parser.diagnostics`` before trusting the returned Program.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import MappingProxyType

from cacti.core.ir.nodes import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from cacti.core.lang.lexer import Lexer
from cacti.core.tokens import Precedence, Token, TokenKind, precedence_of

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Parser:
    """Precedence-climbing parser over a two-token window (current, peek)."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.diagnostics: list[str] = []

        # Primed by the two advances below
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

        self.prefix_parse_fns: MappingProxyType[TokenKind, PrefixParseFn] = MappingProxyType(
            {
                TokenKind.IDENT: self.parse_identifier,
                TokenKind.INT: self.parse_integer_literal,
                TokenKind.STRING: self.parse_string_literal,
                TokenKind.TRUE: self.parse_boolean,
                TokenKind.FALSE: self.parse_boolean,
                TokenKind.BANG: self.parse_prefix_expression,
                TokenKind.MINUS: self.parse_prefix_expression,
                TokenKind.LPAREN: self.parse_grouped_expression,
                TokenKind.IF: self.parse_if_expression,
                TokenKind.FUNCTION: self.parse_function_literal,
            }
        )
        self.infix_parse_fns: MappingProxyType[TokenKind, InfixParseFn] = MappingProxyType(
            {
                TokenKind.PLUS: self.parse_infix_expression,
                TokenKind.MINUS: self.parse_infix_expression,
                TokenKind.ASTERISK: self.parse_infix_expression,
                TokenKind.SLASH: self.parse_infix_expression,
                TokenKind.EQ: self.parse_infix_expression,
                TokenKind.NOT_EQ: self.parse_infix_expression,
                TokenKind.LT: self.parse_infix_expression,
                TokenKind.GT: self.parse_infix_expression,
                TokenKind.LPAREN: self.parse_call_expression,
            }
        )

    # -- Token window --

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the peek token is ``kind``; otherwise record a diagnostic."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek_token.kind)

    def cur_precedence(self) -> Precedence:
        return precedence_of(self.cur_token.kind)

    # -- Diagnostics --

    def _error(self, message: str) -> None:
        logger.debug(
            "parse diagnostic at %d:%d: %s", self.cur_token.line, self.cur_token.column, message
        )
        self.diagnostics.append(message)

    def peek_error(self, kind: TokenKind) -> None:
        self._error(f"expected next token to be {kind}, got {self.peek_token.kind} instead")

    def no_prefix_parse_fn_error(self, kind: TokenKind) -> None:
        self._error(f"no prefix parse function for {kind} found")

    # -- Statements --

    def parse_program(self) -> Program:
        statements: list[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(statements=statements)

    def parse_statement(self) -> Statement | None:
        if self.cur_token.kind == TokenKind.LET:
            return self.parse_let_statement()
        if self.cur_token.kind == TokenKind.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        """let IDENT = expr ;?"""
        token = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(token=self.cur_token, value=self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(token=token, name=name, value=value)

    def parse_return_statement(self) -> ReturnStatement | None:
        """return expr ;?"""
        token = self.cur_token
        self.next_token()

        return_value = self.parse_expression(Precedence.LOWEST)
        if return_value is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(token=token, return_value=return_value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        token = self.cur_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(token=token, expression=expression)

    def parse_block_statement(self) -> BlockStatement:
        """Statements up to the closing brace (or end of input)."""
        token = self.cur_token
        statements: list[Statement] = []
        self.next_token()

        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return BlockStatement(token=token, statements=statements)

    # -- Expressions --

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.kind)
            return None

        left = prefix()
        while (
            left is not None
            and not self.peek_token_is(TokenKind.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(token=self.cur_token, value=self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        try:
            value = int(self.cur_token.literal)
        except ValueError:
            self._error(f"could not parse {self.cur_token.literal} as integer")
            return None
        return IntegerLiteral(token=self.cur_token, value=value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(token=self.cur_token, value=self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(token=self.cur_token, value=self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        token = self.cur_token
        self.next_token()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token=token, operator=token.literal, right=right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token=token, left=left, operator=token.literal, right=right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        """if ( expr ) block (else block)?"""
        token = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(TokenKind.RPAREN):
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(
            token=token,
            condition=condition,
            consequence=consequence,
            alternative=alternative,
        )

    def parse_function_literal(self) -> Expression | None:
        """fn ( params ) block"""
        token = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block_statement()

        return FunctionLiteral(token=token, parameters=parameters, body=body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        """(IDENT ("," IDENT)*)? ")". Current token is the opening paren."""
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(Identifier(token=self.cur_token, value=self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(Identifier(token=self.cur_token, value=self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Expression | None:
        token = self.cur_token
        arguments = self.parse_expression_list(TokenKind.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token=token, function=function, arguments=arguments)

    def parse_expression_list(self, end: TokenKind) -> list[Expression] | None:
        """(expr ("," expr)*)? end. Current token is the opening delimiter."""
        items: list[Expression] = []

        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items


def parse(source: str) -> tuple[Program, list[str]]:
    """Parse source text.

    Args:
        source: Cacti source text (e.g., "let x = 1 + 2; x * 3;")

    Returns:
        The (possibly partial) Program and the ordered diagnostics list.
        An empty list means the tree is safe to evaluate.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.diagnostics
