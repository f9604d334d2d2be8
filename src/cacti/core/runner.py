"""
Entry points used by front ends (CLI, REPL, embedding applications).

They only call tokenize/parse/evaluate; this module adds the two checks a
front end needs around them: refuse to evaluate a program with parse
diagnostics, and only accept source files with the configured suffix.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cacti.core.config import CactiConfig
from cacti.core.errors import ProgramParseError, SourceFileError
from cacti.core.ir.objects import Obj
from cacti.core.lang.environment import Environment
from cacti.core.lang.evaluator import evaluate
from cacti.core.lang.parser import parse

logger = logging.getLogger(__name__)


def run_source(source: str, env: Environment | None = None) -> Obj:
    """Parse and evaluate source text.

    Args:
        source: Cacti program text.
        env: Root environment; a fresh one is used when omitted. Passing
            the same environment across calls keeps earlier bindings.

    Returns:
        The program's value (an ErrorObj for a runtime error).

    Raises:
        ProgramParseError: If the parser recorded any diagnostics.
    """
    program, diagnostics = parse(source)
    if diagnostics:
        raise ProgramParseError(diagnostics)
    if env is None:
        env = Environment()
    return evaluate(program, env)


def read_source_file(path: Path, config: CactiConfig | None = None) -> str:
    """Read a source file after checking its suffix.

    Raises:
        SourceFileError: If the suffix is wrong or the file is missing.
    """
    config = config or CactiConfig()
    if path.suffix != config.source_suffix:
        raise SourceFileError(f"File does not end with {config.source_suffix}: {path}")
    if not path.is_file():
        raise SourceFileError(f"File not found: {path}")
    logger.debug("Reading %s", path)
    return path.read_text(encoding="utf-8")
