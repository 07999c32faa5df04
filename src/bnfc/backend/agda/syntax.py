"""
Agda surface tokens and the category-to-type mapping.

Built-in Agda types are renamed on import with a ``#`` prefix so they cannot
collide with nonterminals of the user's grammar; ``#`` cannot occur in a
grammar-derived identifier. ``Integer`` and ``Double`` are the names BNFC
grammars already use for those token types, so they are imported unprefixed.
"""

from __future__ import annotations

from typing import Final

from ...core.cf import Category, CoercCat, Cat, InternalCat, ListCat, TokenCat
from ...core.doc import Doc, beside_space, parens_if, text
from ...core.errors import InternalError

__all__ = [
    "ARROW",
    "CHAR_T",
    "INT_T",
    "DOUBLE_T",
    "LIST_T",
    "STRING_T",
    "STRING_FROM_LIST_T",
    "IDENT_CAT",
    "pretty_fun",
    "pretty_cat",
    "composite_cat",
    "cat_name",
]

ARROW: Final[str] = "→"
CHAR_T: Final[str] = "#Char"
INT_T: Final[str] = "Integer"
DOUBLE_T: Final[str] = "Double"
LIST_T: Final[str] = "#List"
STRING_T: Final[str] = "#String"
STRING_FROM_LIST_T: Final[str] = "#stringFromList"

# Identifier category bound by hand rather than through printTree.
IDENT_CAT: Final[str] = "Id"


def pretty_fun(fun: str) -> Doc:
    return text(fun)


def composite_cat(cat: Category) -> bool:
    """Is the Agda type for ``cat`` composite (needs parentheses as an argument)?"""
    return isinstance(cat, ListCat)


def pretty_cat(cat: Category) -> Doc:
    """
    Pretty-print a category as an Agda type.

    Examples:
      >>> from bnfc.core.doc import render
      >>> render(pretty_cat(ListCat(ListCat(Cat("Stm")))))
      '#List (#List Stm)'

    Raises:
      InternalError: For the internal marker category.
    """
    if isinstance(cat, (Cat, TokenCat, CoercCat)):
        return text(cat.name)
    if isinstance(cat, ListCat):
        return beside_space(LIST_T, parens_if(composite_cat(cat.cat), pretty_cat(cat.cat)))
    if isinstance(cat, InternalCat):
        raise InternalError("pretty_cat: unexpected case InternalCat")
    raise InternalError(f"pretty_cat: not a category: {cat!r}")


def cat_name(cat: Category, where: str) -> str:
    """Bare name of a plain category; anything else cannot name a declaration."""
    if isinstance(cat, Cat):
        return cat.name
    raise InternalError(f"{where}: unexpected category {cat!r}")
