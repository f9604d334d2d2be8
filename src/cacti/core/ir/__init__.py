"""
Cacti intermediate representations.

- nodes: the abstract syntax tree produced by the parser
- objects: the runtime values produced by the evaluator
"""

from .nodes import (
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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from .objects import (
    FALSE,
    NULL,
    TRUE,
    BooleanObj,
    ErrorObj,
    FunctionObj,
    IntegerObj,
    NullObj,
    Obj,
    ObjectType,
    ReturnValue,
    StringObj,
)

__all__ = [
    # Nodes
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
    # Objects
    "FALSE",
    "NULL",
    "TRUE",
    "BooleanObj",
    "ErrorObj",
    "FunctionObj",
    "IntegerObj",
    "NullObj",
    "Obj",
    "ObjectType",
    "ReturnValue",
    "StringObj",
]
