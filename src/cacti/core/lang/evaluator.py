"""
Tree-walking evaluator for the Cacti language.

Evaluates AST nodes against an Environment and returns a runtime value.
Runtime failures are values too: an ErrorObj is returned at the point of
failure and every composite step checks its sub-results for one before
continuing. A pending return (a block that hit `return` while used as an
expression) is passed up the same way until a function call or the
program unwraps it. Nothing here raises for a bad program.
"""

from __future__ import annotations

import logging

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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from cacti.core.ir.objects import (
    FALSE,
    NULL,
    ErrorObj,
    FunctionObj,
    IntegerObj,
    Obj,
    ReturnValue,
    StringObj,
    is_error,
    native_bool_to_boolean,
)
from cacti.core.lang.environment import Environment

logger = logging.getLogger(__name__)


def evaluate(node: Node | Program, env: Environment) -> Obj:
    """Evaluate a node in ``env``.

    Args:
        node: A Program or any statement/expression node.
        env: Scope to resolve and bind names in.

    Returns:
        The resulting value. A runtime failure is returned as an ErrorObj.
    """
    if isinstance(node, Program):
        return _eval_program(node.statements, env)

    # Statements
    if isinstance(node, ExpressionStatement):
        return evaluate(node.expression, env)

    if isinstance(node, BlockStatement):
        return _eval_block_statement(node, env)

    if isinstance(node, ReturnStatement):
        value = evaluate(node.return_value, env)
        if _is_terminal(value):
            return value
        return ReturnValue(value)

    if isinstance(node, LetStatement):
        value = evaluate(node.value, env)
        if _is_terminal(value):
            return value
        env.set(node.name.value, value)
        return NULL

    # Expressions
    if isinstance(node, IntegerLiteral):
        return IntegerObj(node.value)

    if isinstance(node, StringLiteral):
        return StringObj(node.value)

    if isinstance(node, BooleanLiteral):
        return native_bool_to_boolean(node.value)

    if isinstance(node, Identifier):
        return _eval_identifier(node, env)

    if isinstance(node, PrefixExpression):
        right = evaluate(node.right, env)
        if _is_terminal(right):
            return right
        return _eval_prefix_expression(node.operator, right)

    if isinstance(node, InfixExpression):
        left = evaluate(node.left, env)
        if _is_terminal(left):
            return left
        right = evaluate(node.right, env)
        if _is_terminal(right):
            return right
        return _eval_infix_expression(node.operator, left, right)

    if isinstance(node, IfExpression):
        return _eval_if_expression(node, env)

    if isinstance(node, FunctionLiteral):
        return FunctionObj(parameters=node.parameters, body=node.body, env=env)

    if isinstance(node, CallExpression):
        function = evaluate(node.function, env)
        if _is_terminal(function):
            return function
        args = _eval_expressions(node.arguments, env)
        if len(args) == 1 and _is_terminal(args[0]):
            return args[0]
        return _apply_function(function, args)

    raise TypeError(f"Unknown node type: {type(node).__name__}")


def new_error(message: str) -> ErrorObj:
    logger.debug("runtime error: %s", message)
    return ErrorObj(message)


def is_truthy(obj: Obj) -> bool:
    """false and null are falsy; every other value is truthy."""
    return obj is not FALSE and obj is not NULL


def _is_terminal(obj: Obj) -> bool:
    """An error or a pending return ends the enclosing evaluation as is."""
    return is_error(obj) or isinstance(obj, ReturnValue)


def _eval_program(statements: list[Statement], env: Environment) -> Obj:
    result: Obj = NULL
    for stmt in statements:
        result = evaluate(stmt, env)
        if isinstance(result, ReturnValue):
            return result.value
        if isinstance(result, ErrorObj):
            return result
    return result


def _eval_block_statement(block: BlockStatement, env: Environment) -> Obj:
    """Like a program, but leaves ReturnValue wrapped so outer blocks unwind too."""
    result: Obj = NULL
    for stmt in block.statements:
        result = evaluate(stmt, env)
        if isinstance(result, (ReturnValue, ErrorObj)):
            return result
    return result


def _eval_identifier(node: Identifier, env: Environment) -> Obj:
    value = env.get(node.value)
    if value is None:
        return new_error(f"identifier not found: {node.value}")
    return value


def _eval_prefix_expression(operator: str, right: Obj) -> Obj:
    if operator == "!":
        return native_bool_to_boolean(not is_truthy(right))
    if operator == "-":
        if not isinstance(right, IntegerObj):
            return new_error(f"unknown operator: -{right.type}")
        return IntegerObj(-right.value)
    return new_error(f"unknown operator: {operator}{right.type}")


def _eval_infix_expression(operator: str, left: Obj, right: Obj) -> Obj:
    if isinstance(left, IntegerObj) and isinstance(right, IntegerObj):
        return _eval_integer_infix_expression(operator, left, right)

    if isinstance(left, StringObj) and isinstance(right, StringObj):
        return _eval_string_infix_expression(operator, left, right)

    # Booleans and null are singletons, so identity is equality
    if operator == "==":
        return native_bool_to_boolean(left is right)
    if operator == "!=":
        return native_bool_to_boolean(left is not right)

    if left.type != right.type:
        return new_error(f"type mismatch: {left.type} {operator} {right.type}")
    return new_error(f"unknown operator: {left.type} {operator} {right.type}")


def _eval_integer_infix_expression(operator: str, left: IntegerObj, right: IntegerObj) -> Obj:
    lval, rval = left.value, right.value

    if operator == "+":
        return IntegerObj(lval + rval)
    if operator == "-":
        return IntegerObj(lval - rval)
    if operator == "*":
        return IntegerObj(lval * rval)
    if operator == "/":
        if rval == 0:
            return new_error("division by zero")
        # Floor division for all signs
        return IntegerObj(lval // rval)
    if operator == "<":
        return native_bool_to_boolean(lval < rval)
    if operator == ">":
        return native_bool_to_boolean(lval > rval)
    if operator == "==":
        return native_bool_to_boolean(lval == rval)
    if operator == "!=":
        return native_bool_to_boolean(lval != rval)

    return new_error(f"unknown operator: {left.type} {operator} {right.type}")


def _eval_string_infix_expression(operator: str, left: StringObj, right: StringObj) -> Obj:
    if operator != "+":
        return new_error(f"unknown operator: {left.type} {operator} {right.type}")
    return StringObj(left.value + right.value)


def _eval_if_expression(node: IfExpression, env: Environment) -> Obj:
    condition = evaluate(node.condition, env)
    if _is_terminal(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def _eval_expressions(expressions: list[Expression], env: Environment) -> list[Obj]:
    """Evaluate left to right. On the first error or return, return a list holding only it."""
    results: list[Obj] = []
    for expr in expressions:
        value = evaluate(expr, env)
        if _is_terminal(value):
            return [value]
        results.append(value)
    return results


def _apply_function(function: Obj, args: list[Obj]) -> Obj:
    if not isinstance(function, FunctionObj):
        return new_error(f"not a function: {function.type}")

    if len(args) != len(function.parameters):
        return new_error(
            f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}"
        )

    extended_env = _extend_function_env(function, args)
    evaluated = evaluate(function.body, extended_env)
    return _unwrap_return_value(evaluated)


def _extend_function_env(function: FunctionObj, args: list[Obj]) -> Environment:
    # Enclosed by the defining scope, not the caller's
    env = Environment.enclosed(function.env)
    for param, arg in zip(function.parameters, args, strict=True):
        env.set(param.value, arg)
    return env


def _unwrap_return_value(obj: Obj) -> Obj:
    if isinstance(obj, ReturnValue):
        return obj.value
    return obj
