"""
Agda backend: bindings to the Haskell abstract syntax and pretty printer.

## Responsibilities
- Translate data declarations into Agda ``data`` types plus GHC ``COMPILE`` pragmas.
- Postulate one printer per category, bound to the generated Haskell ``printTree``.
- Assemble the module (preamble, imports, FOREIGN pragmas, mutual block, printers).

## Public API
- make_agda: backend entry point returning the generated file.
- cf2agda: module text for explicit module names and data declarations.
"""

from __future__ import annotations

from .module import GeneratedFile, cf2agda, make_agda

__all__ = [
    "GeneratedFile",
    "cf2agda",
    "make_agda",
]
