"""
Translate data declarations into Agda ``data`` types and GHC ``COMPILE`` pragmas.

All declarations are emitted in one ``mutual`` block instead of being sorted by
dependency, so no forward reference can break the generated module.

Examples
--------
>>> from bnfc.core.cf import Cat, Constructor
>>> from bnfc.core.doc import render, vsep
>>> nat = [Constructor("zero"), Constructor("suc", (Cat("Nat"),))]
>>> print(render(pretty_data("Nat", nat)))
data Nat : Set where
  zero : Nat
  suc : Nat → Nat
>>> print(render(pragma_data("Nat", nat)))
{-# COMPILE GHC Nat = data Nat
  ( zero
  | suc
  ) #-}
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ...core.cf import Cat, Constructor, DataDecl, ListCat
from ...core.doc import Doc, INDENT, blank_above, hsep, nest, pretty_list, text, vcat, vsep
from ...logging import get_logger
from .syntax import ARROW, CHAR_T, IDENT_CAT, cat_name, pretty_cat, pretty_fun

__all__ = [
    "pretty_constructor",
    "pretty_data",
    "pragma_data",
    "pr_data",
    "absyn",
    "pr_ident",
]

logger = get_logger(__name__)


def pretty_constructor(d: str, constructor: Constructor) -> Doc:
    """
    Pretty-print a constructor as an Agda constructor signature.

    Examples:
      >>> from bnfc.core.doc import render
      >>> render(pretty_constructor("D", Constructor("c", (Cat("A"), Cat("B"), Cat("C")))))
      'c : A → B → C → D'
      >>> render(pretty_constructor("D", Constructor("c")))
      'c : D'
    """
    types: list[Doc] = []
    for cat in (*constructor.args, Cat(d)):
        if types:
            types.append(text(ARROW))
        types.append(pretty_cat(cat))
    return hsep([pretty_fun(constructor.name), text(":"), *types])


def pretty_data(d: str, constructors: Iterable[Constructor]) -> Doc:
    header = hsep(["data", d, ":", "Set", "where"])
    return vcat([header, *(nest(INDENT, pretty_constructor(d, c)) for c in constructors)])


def pragma_data(d: str, constructors: Sequence[Constructor]) -> Doc:
    """Bind the Agda type to the Haskell data type of the same name."""
    pre = hsep(["{-#", "COMPILE", "GHC", d, "=", "data", d])
    return pretty_list(
        pre, "(", hsep([")", "#-}"]), "|", [pretty_fun(c.name) for c in constructors]
    )


def pr_data(data: DataDecl) -> list[Doc]:
    """
    Declaration and pragma for one data type.

    A list is returned instead of a single document so the caller can nest the
    parts and separate them without producing indented blank lines.
    """
    d = cat_name(data.category, "pr_data")
    return [pretty_data(d, data.constructors), pragma_data(d, data.constructors)]


def absyn(datas: Iterable[DataDecl]) -> Doc:
    parts: list[Doc] = [text("mutual")]
    count = 0
    for data in datas:
        parts.extend(nest(INDENT, part) for part in pr_data(data))
        count += 1
    logger.debug("translated %d data declarations", count)
    return vsep(parts)


def pr_ident() -> Doc:
    """Data type and binding for the identifier category."""
    return blank_above(
        pretty_data(IDENT_CAT, [Constructor("mkId", (ListCat(Cat(CHAR_T)),))]),
        pragma_data(IDENT_CAT, [Constructor(IDENT_CAT)]),
    )
