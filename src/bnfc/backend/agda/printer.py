"""
Agda bindings to the Haskell pretty printer generated for the same grammar.

Every category gets a postulated ``print<C> : C → #String`` whose GHC
implementation calls ``printTree`` at type ``C`` and packs the result into
``Data.Text``. Identifiers are printed directly in Agda.

Examples
--------
>>> from bnfc.core.cf import Cat
>>> from bnfc.core.doc import render
>>> print(render(printer([Cat("Exp"), Cat("Stm")])))
postulate
  printExp : Exp → #String
  printStm : Stm → #String
<BLANKLINE>
{-# COMPILE GHC printExp = \\ x -> Data.Text.pack (printTree (x :: Exp)) #-}
{-# COMPILE GHC printStm = \\ x -> Data.Text.pack (printTree (x :: Stm)) #-}
"""

from __future__ import annotations

from collections.abc import Iterable

from ...core.cf import Category
from ...core.doc import Doc, INDENT, blank_above, hsep, nest, parens, text, vcat
from .syntax import ARROW, IDENT_CAT, STRING_FROM_LIST_T, STRING_T, cat_name

__all__ = ["print_ident", "printer"]


def print_ident() -> Doc:
    """
    Print function for identifiers.

    >>> from bnfc.core.doc import render
    >>> print(render(print_ident()))
    printId : Id → #String
    printId (mkId s) = #stringFromList s
    """
    name = f"print{IDENT_CAT}"
    return vcat(
        [
            hsep([name, ":", IDENT_CAT, ARROW, STRING_T]),
            hsep([name, parens(hsep(["mkId", "s"])), "=", STRING_FROM_LIST_T, "s"]),
        ]
    )


def _type_signature(x: str) -> Doc:
    return hsep([f"print{x}", ":", x, ARROW, STRING_T])


def _pragma_bind(x: str) -> Doc:
    return hsep(
        [
            "{-#", "COMPILE", "GHC", f"print{x}", "=", "\\", "x", "->",
            "Data.Text.pack", parens(hsep(["printTree", parens(hsep(["x", "::", x]))])),
            "#-}",
        ]
    )


def printer(cats: Iterable[Category]) -> Doc:
    names = [cat_name(cat, "printer") for cat in cats]
    return blank_above(
        vcat([text("postulate"), *(nest(INDENT, _type_signature(x)) for x in names)]),
        vcat([_pragma_bind(x) for x in names]),
    )
