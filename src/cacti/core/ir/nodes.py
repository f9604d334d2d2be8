"""
Abstract syntax tree for Cacti programs.

Every node carries the token it was built from. ``str(node)`` renders the
canonical, fully parenthesized source form; re-lexing and re-parsing that
text yields a tree with the same canonical form.

Statements:
- let x = <expr>;
- return <expr>;
- <expr>;
- { <stmt> ... }  (only as if/fn bodies)

Expressions:
- Identifiers and integer, string and boolean literals
- Prefix: !x, -x
- Infix: + - * / < > == !=
- if (<cond>) { ... } else { ... }
- fn(<params>) { ... }
- <callee>(<args>)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cacti.core.tokens import Token


class Node(BaseModel):
    """Base for all AST nodes."""

    token: Token = Field(description="Token the node was built from")

    model_config = ConfigDict(frozen=True)

    def token_literal(self) -> str:
        return self.token.literal


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class Identifier(Node):
    """A name reference."""

    value: str

    def __str__(self) -> str:
        return self.value


class IntegerLiteral(Node):
    value: int

    def __str__(self) -> str:
        return self.token.literal


class StringLiteral(Node):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


class BooleanLiteral(Node):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


class PrefixExpression(Node):
    """Unary operation: op right."""

    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


class InfixExpression(Node):
    """Binary operation: left op right."""

    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Node):
    """
    Conditional expression: if (cond) { ... } else { ... }.

    Without an alternative, a falsy condition evaluates to null.
    """

    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


class FunctionLiteral(Node):
    """Function literal: fn(a, b) { ... }."""

    parameters: list[Identifier] = Field(default_factory=list)
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


class CallExpression(Node):
    """Call: callee(arg1, arg2, ...). The token is the opening paren."""

    function: Expression
    arguments: list[Expression] = Field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class LetStatement(Node):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


class ReturnStatement(Node):
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


class ExpressionStatement(Node):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


class BlockStatement(Node):
    """A braced statement list. The token is the opening brace."""

    statements: list[Statement] = Field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        body = " ".join(_terminated(s) for s in self.statements)
        return f"{{ {body} }}"


def _terminated(stmt: Statement) -> str:
    text = str(stmt)
    if isinstance(stmt, ExpressionStatement):
        return text + ";"
    return text


class Program(BaseModel):
    """Root of a parsed source text."""

    statements: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        # The last statement needs no terminator: EOF ends it
        if not self.statements:
            return ""
        *leading, last = self.statements
        return " ".join([*(_terminated(s) for s in leading), str(last)])


# ---------------------------------------------------------------------------
# Union types
# ---------------------------------------------------------------------------

Expression = (
    Identifier
    | IntegerLiteral
    | StringLiteral
    | BooleanLiteral
    | PrefixExpression
    | InfixExpression
    | IfExpression
    | FunctionLiteral
    | CallExpression
)

Statement = LetStatement | ReturnStatement | ExpressionStatement | BlockStatement

# Rebuild models for recursive forward references
PrefixExpression.model_rebuild()
InfixExpression.model_rebuild()
IfExpression.model_rebuild()
FunctionLiteral.model_rebuild()
CallExpression.model_rebuild()
LetStatement.model_rebuild()
ReturnStatement.model_rebuild()
ExpressionStatement.model_rebuild()
BlockStatement.model_rebuild()
Program.model_rebuild()
