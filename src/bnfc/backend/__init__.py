"""
Backend registry: maps a selected target to the generator that serves it.

Only the Haskell family of targets is served, by the Agda binding backend; the
remaining targets are recognized by the option parser but have no generator here.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from ..core.cf import Grammar
from ..core.errors import UsageError
from ..options.model import SharedOptions, Target
from .agda import GeneratedFile, make_agda

__all__ = [
    "Backend",
    "BACKENDS",
    "GeneratedFile",
    "backend_for",
]

Backend = Callable[[str, SharedOptions, Grammar], list[GeneratedFile]]

BACKENDS: Final[dict[Target, Backend]] = {
    Target.HASKELL: make_agda,
    Target.HASKELL_GADT: make_agda,
    Target.PROFILE: make_agda,
}


def backend_for(target: Target) -> Backend:
    """
    Look up the generator for a target.

    Raises:
      UsageError: If no generator serves the target.
    """
    try:
        return BACKENDS[target]
    except KeyError:
        raise UsageError(f"no backend available for target {target.value}") from None
