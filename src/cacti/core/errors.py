"""
Error types raised by the Cacti harness layer.

Parse diagnostics and runtime errors are ordinary values inside the
language pipeline; these exceptions are only raised where a caller asks
for a source file to be loaded or a program to be run.
"""

from __future__ import annotations


class CactiError(Exception):
    """Base exception for all Cacti errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ProgramParseError(CactiError):
    """
    Raised when a program has parse diagnostics and so must not be evaluated.

    Attributes:
        diagnostics: Parser messages, in the order they were recorded
    """

    def __init__(self, diagnostics: list[str]):
        self.diagnostics = list(diagnostics)
        count = len(self.diagnostics)
        noun = "error" if count == 1 else "errors"
        summary = "\n".join(f"  {d}" for d in self.diagnostics)
        super().__init__(f"{count} parse {noun}:\n{summary}")


class SourceFileError(CactiError):
    """
    Raised when a source path cannot be used.

    Examples:
    - File does not end with the configured suffix
    - File does not exist
    """

    pass
