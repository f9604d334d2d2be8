"""
Cacti language front end and evaluator.

Lexer, Pratt parser, environments and tree-walking evaluator.

Usage:
    from cacti.core.lang import Environment, evaluate, parse

    program, diagnostics = parse("let add = fn(a, b) { a + b }; add(1, 2);")
    if not diagnostics:
        result = evaluate(program, Environment())
        # result.inspect() == "3"
"""

from cacti.core.lang.environment import Environment
from cacti.core.lang.evaluator import evaluate, is_truthy
from cacti.core.lang.lexer import Lexer, tokenize
from cacti.core.lang.parser import Parser, parse

__all__ = ["Environment", "Lexer", "Parser", "evaluate", "is_truthy", "parse", "tokenize"]
