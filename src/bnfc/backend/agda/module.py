"""
Assemble the complete Agda binding module.

Layout of the generated file (pieces separated by one blank line):

1. preamble comment with the generation time
2. ``module <mod> where``
3. renaming imports of the Agda built-ins
4. FOREIGN pragmas importing Data.Text, the Haskell Abs and Print modules
5. identifier type and binding
6. ``mutual`` block with all data types and their bindings
7. section comment
8. identifier print function
9. postulated printers and their bindings
10. a final empty line, so the file ends with a newline

The output depends only on its arguments; two runs with the same timestamp,
grammar and options produce byte-identical files.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from ...core.cf import DataDecl, Grammar
from ...core.doc import Doc, empty, hsep, pretty_list, render, text, vcat, vsep
from ...logging import get_logger
from ...options.model import SharedOptions
from ..naming import abs_module, agda_file, agda_module, printer_module
from .declarations import absyn, pr_ident
from .printer import print_ident, printer
from .syntax import CHAR_T, DOUBLE_T, INT_T, LIST_T, STRING_FROM_LIST_T, STRING_T

__all__ = [
    "GeneratedFile",
    "BUILTIN_IMPORTS",
    "preamble",
    "imports",
    "import_pragmas",
    "cf2agda",
    "make_agda",
]

logger = get_logger(__name__)

# (module, [(name, renamed-to)]) for every imported built-in.
BUILTIN_IMPORTS: Final[tuple[tuple[str, tuple[tuple[str, str], ...]], ...]] = (
    ("Agda.Builtin.Char", (("Char", CHAR_T),)),
    ("Agda.Builtin.Float", (("Float", DOUBLE_T),)),
    ("Agda.Builtin.Int", (("Int", INT_T),)),
    ("Agda.Builtin.List", (("List", LIST_T),)),
    ("Agda.Builtin.String", (("String", STRING_T), ("primStringFromList", STRING_FROM_LIST_T))),
)


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """A file produced by a backend: relative path and full text."""

    path: str
    content: str


def preamble(time: str) -> Doc:
    return vcat(
        [
            "-- Agda bindings for the Haskell abstract syntax data types.",
            f"-- Generated by BNFC at {time}.",
        ]
    )


def imports() -> Doc:
    """
    Renaming imports of the Agda built-ins.

    >>> print(render(imports()).splitlines()[0])
    open import Agda.Builtin.Char using () renaming (Char to #Char)
    """

    def pretty_import(module: str, renamings: Sequence[tuple[str, str]]) -> Doc:
        pre = hsep(["open", "import", module, "using", "()", "renaming"])
        return pretty_list(pre, "(", ")", ";", [hsep([x, "to", y]) for x, y in renamings])

    return vcat([pretty_import(m, ren) for m, ren in BUILTIN_IMPORTS])


def import_pragmas(amod: str, pmod: str) -> Doc:
    """
    >>> print(render(import_pragmas("Foo.Abs", "Foo.Print")))
    {-# FOREIGN GHC import qualified Data.Text #-}
    {-# FOREIGN GHC import Foo.Abs #-}
    {-# FOREIGN GHC import Foo.Print #-}
    """
    return vcat(
        [hsep(["{-#", "FOREIGN", "GHC", "import", s, "#-}"]) for s in ("qualified Data.Text", amod, pmod)]
    )


def cf2agda(time: str, mod: str, amod: str, pmod: str, datas: Sequence[DataDecl]) -> str:
    """
    Generate AST bindings for Agda.

    Args:
      time: Generation time stamped into the preamble.
      mod: Name of the Agda module to generate.
      amod: Haskell module holding the abstract syntax.
      pmod: Haskell module holding the pretty printer.
      datas: Data declarations in grammar order.

    Returns:
      str: Module text ending in a newline.
    """
    cats = [data.category for data in datas]
    return render(
        vsep(
            [
                preamble(time),
                hsep(["module", mod, "where"]),
                imports(),
                import_pragmas(amod, pmod),
                pr_ident(),
                absyn(datas),
                text("-- Binding the BNFC pretty printer"),
                print_ident(),
                printer(cats),
                empty(),
            ]
        )
    )


def make_agda(time: str, options: SharedOptions, grammar: Grammar) -> list[GeneratedFile]:
    """Entry point of the Agda backend: one binding module per grammar."""
    datas = grammar.data_declarations()
    mod = agda_module(options)
    logger.debug("generating Agda module %s from %d categories", mod, len(datas))
    content = cf2agda(time, mod, abs_module(options), printer_module(options), datas)
    return [GeneratedFile(agda_file(options), content)]
