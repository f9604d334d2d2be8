"""
Cacti command-line interface.

Commands:
- tokenize: Print the token stream of a source file
- parse:    Print parse diagnostics, or the canonical form of each statement
- run:      Evaluate a source file and print its value
- repl:     Interactive read-eval-print loop
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cacti._version import get_version
from cacti.core.config import CactiConfig, load_config
from cacti.core.errors import CactiError, ProgramParseError
from cacti.core.ir.objects import ErrorObj, Obj
from cacti.core.lang.environment import Environment
from cacti.core.lang.lexer import Lexer
from cacti.core.lang.parser import parse
from cacti.core.runner import read_source_file, run_source

app = typer.Typer(
    help="Cacti: a small C-like expression scripting language",
    no_args_is_help=True,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

logger = logging.getLogger(__name__)

REPL_PROMPT = ">> "


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        console.print(f"cacti {get_version()}")
        console.print(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to cacti.toml (default: ./cacti.toml)"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Logging level (overrides configuration)"
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """Cacti CLI main callback for global options."""
    try:
        config = load_config(config_path)
        if log_level is not None:
            config = CactiConfig.model_validate({**config.model_dump(), "log_level": log_level})
    except ValueError as e:
        err_console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    _configure_logging(config.log_level)
    ctx.obj = config


def _load(ctx: typer.Context, file: Path) -> str:
    config: CactiConfig = ctx.obj
    try:
        return read_source_file(file, config)
    except CactiError as e:
        err_console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


def _print_diagnostics(diagnostics: list[str]) -> None:
    for message in diagnostics:
        err_console.print(message, style="red", markup=False, highlight=False)


def _print_value(value: Obj) -> None:
    if isinstance(value, ErrorObj):
        err_console.print(value.inspect(), style="red", markup=False, highlight=False)
    else:
        console.print(value.inspect(), markup=False, highlight=False)


@app.command("tokenize")
def tokenize_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file to tokenize"),
) -> None:
    """Tokenize a file and print the individual tokens."""
    source = _load(ctx, file)

    table = Table(title=f"Tokens: {file.name}")
    table.add_column("Position", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Literal")

    for token in Lexer(source):
        table.add_row(f"{token.line}:{token.column}", token.kind.name, token.literal)

    console.print(table)


@app.command("parse")
def parse_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file to parse"),
) -> None:
    """Parse a file and print each statement in canonical form."""
    source = _load(ctx, file)

    program, diagnostics = parse(source)
    if diagnostics:
        _print_diagnostics(diagnostics)
        raise typer.Exit(1)

    for stmt in program.statements:
        console.print(str(stmt), markup=False, highlight=False)


@app.command("run")
def run_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file to evaluate"),
) -> None:
    """Evaluate a file and print the resulting value."""
    config: CactiConfig = ctx.obj
    source = _load(ctx, file)

    try:
        result = run_source(source, Environment())
    except ProgramParseError as e:
        _print_diagnostics(e.diagnostics)
        raise typer.Exit(1)
    except RecursionError:
        err_console.print("[red]ERROR: maximum recursion depth exceeded[/red]")
        raise typer.Exit(1)

    if isinstance(result, ErrorObj):
        _print_value(result)
        raise typer.Exit(1)
    if config.echo_result:
        _print_value(result)


@app.command("repl")
def repl_command() -> None:
    """Start an interactive session. Bindings persist between lines."""
    console.print(f"cacti {get_version()} (Ctrl-D to exit)")
    env = Environment()

    while True:
        try:
            line = console.input(REPL_PROMPT)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line.strip():
            continue

        try:
            result = run_source(line, env)
        except ProgramParseError as e:
            _print_diagnostics(e.diagnostics)
            continue
        except RecursionError:
            err_console.print("[red]ERROR: maximum recursion depth exceeded[/red]")
            continue

        _print_value(result)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
