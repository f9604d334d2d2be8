"""
Cacti - a small C-like expression scripting language.

Lexer, Pratt parser and tree-walking evaluator with first-class
functions and lexically scoped closures.

Usage:
    from cacti import Environment, parse, evaluate

    program, diagnostics = parse("let x = 5; x * 2;")
    result = evaluate(program, Environment())
    # result.inspect() == "10"
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import CactiError, ProgramParseError, SourceFileError
from .core.lang import Environment, evaluate, parse, tokenize
from .core.runner import run_source

__version__ = get_version()

__all__ = [
    "__version__",
    "CactiError",
    "Environment",
    "ProgramParseError",
    "SourceFileError",
    "evaluate",
    "parse",
    "run_source",
    "tokenize",
]
