"""Shared pytest fixtures for Cacti tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cacti.core.ir.objects import Obj
from cacti.core.lang.environment import Environment
from cacti.core.lang.evaluator import evaluate
from cacti.core.lang.parser import parse


@pytest.fixture
def env() -> Environment:
    """Return a fresh root environment."""
    return Environment()


@pytest.fixture
def eval_source():
    """Return a helper that parses (asserting no diagnostics) and evaluates source."""

    def _eval(source: str, env: Environment | None = None) -> Obj:
        program, diagnostics = parse(source)
        assert diagnostics == [], f"unexpected diagnostics: {diagnostics}"
        return evaluate(program, env if env is not None else Environment())

    return _eval


@pytest.fixture
def examples_dir() -> Path:
    """Return path to the bundled example programs."""
    return Path(__file__).parent.parent / "examples"
