"""
Exception types raised by option parsing, grammar reading, and code generation.

Provides typed exceptions for the three failure families:
- UsageError for bad, conflicting, or missing command-line input.
- GrammarError for grammar text the reader cannot interpret.
- InternalError for contract violations inside a backend (e.g., a category
  that can never appear at a declaration position).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - UsageError and GrammarError are reported to the user by bnfc.cli and end
      the run with a non-zero exit code.
    - InternalError is never caught by library code; it signals a bug in the
      producer of the grammar model, not a user mistake.

Examples:
    >>> from bnfc.core.errors import UsageError
    >>> try:
    ...     raise UsageError("Invalid target foo")
    ... except UsageError as e:
    ...     msg = str(e)
    >>> msg
    'Invalid target foo'
"""

from __future__ import annotations

__all__ = [
    "UsageError",
    "GrammarError",
    "InternalError",
]


class UsageError(ValueError):
    """Invalid or conflicting command-line arguments."""


class GrammarError(ValueError):
    """Grammar source that cannot be read into a grammar model."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message if line is None else f"line {line}: {message}")
        self.line = line


class InternalError(RuntimeError):
    """Malformed input reached a translator; generation must abort."""
