"""
Grammar model: categories, rules, constructors and data declarations.

Responsibilities
- Define the Category variants (Cat, TokenCat, CoercCat, ListCat, InternalCat).
- Represent labelled rules and the grammar they belong to.
- Derive the abstract-syntax data declarations backends translate (cf2data).

Design principles
-----------------
1) Structural identity:
   - All model types are frozen dataclasses; equality and hashing are by
     tag and payload, so categories can be used as dict keys.

2) Declaration order:
   - Category and constructor order always mirrors the order in which rules
     appear in the grammar. Nothing is sorted.

3) Zero IO:
   - Reading grammar text lives in bnfc.core.lbnf; this module only models.

Examples
--------
>>> from bnfc.core.cf import Cat, ListCat, Rule, Grammar, show_cat
>>> show_cat(ListCat(Cat("Stm")))
'[Stm]'
>>> g = Grammar(rules=(
...     Rule("Zero", Cat("Nat"), ("0",)),
...     Rule("Suc", Cat("Nat"), ("S", Cat("Nat"))),
... ))
>>> [c.name for c in g.data_declarations()[0].constructors]
['Zero', 'Suc']
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Final, Union

__all__ = [
    "Cat",
    "TokenCat",
    "CoercCat",
    "ListCat",
    "InternalCat",
    "INTERNAL_CAT",
    "Category",
    "Item",
    "Rule",
    "Constructor",
    "DataDecl",
    "Grammar",
    "BASE_TOKEN_NAMES",
    "normalize",
    "is_list",
    "show_cat",
    "str_to_cat",
    "is_coercion_label",
    "is_list_label",
]


@dataclass(frozen=True, slots=True)
class Cat:
    """Plain nonterminal category, e.g. ``Exp``."""

    name: str


@dataclass(frozen=True, slots=True)
class TokenCat:
    """Token category, built-in (``Ident``, ``Integer``, ...) or user-declared."""

    name: str


@dataclass(frozen=True, slots=True)
class CoercCat:
    """Precedence level of a category, e.g. ``Exp2`` is ``CoercCat("Exp", 2)``."""

    name: str
    level: int


@dataclass(frozen=True, slots=True)
class ListCat:
    """List of another category, written ``[C]``."""

    cat: Category


@dataclass(frozen=True, slots=True)
class InternalCat:
    """Marker for internal-use rules; never a valid declaration type."""


INTERNAL_CAT: Final[InternalCat] = InternalCat()

Category = Union[Cat, TokenCat, CoercCat, ListCat, InternalCat]
# Right-hand side item: a category or a terminal string.
Item = Union[Cat, TokenCat, CoercCat, ListCat, InternalCat, str]

BASE_TOKEN_NAMES: Final[tuple[str, ...]] = ("Ident", "Integer", "Double", "Char", "String")

_COERC_RE: Final[re.Pattern[str]] = re.compile(r"^(.*?[^0-9])([0-9]+)$")
_LIST_LABELS: Final[frozenset[str]] = frozenset({"[]", "(:)", "(:[])"})


def normalize(cat: Category) -> Category:
    """
    Strip precedence levels from a category (recursively through lists).

    Args:
      cat (Category): Category as written in the grammar.

    Returns:
      Category: ``CoercCat(n, k)`` becomes ``Cat(n)``; lists are normalized inside.
    """
    if isinstance(cat, CoercCat):
        return Cat(cat.name)
    if isinstance(cat, ListCat):
        return ListCat(normalize(cat.cat))
    return cat


def is_list(cat: Category) -> bool:
    return isinstance(cat, ListCat)


def show_cat(cat: Category) -> str:
    """Render a category in LBNF surface syntax (``Exp``, ``Exp2``, ``[Stm]``)."""
    if isinstance(cat, (Cat, TokenCat)):
        return cat.name
    if isinstance(cat, CoercCat):
        return f"{cat.name}{cat.level}"
    if isinstance(cat, ListCat):
        return f"[{show_cat(cat.cat)}]"
    return "#"


def str_to_cat(name: str, token_names: Iterable[str] = ()) -> Category:
    """
    Classify a category name as written in LBNF.

    Args:
      name (str): Name such as ``Exp``, ``Exp1``, ``[Stm]`` or ``Ident``.
      token_names (Iterable[str]): User-declared token categories.

    Returns:
      Category: The classified category.

    Examples:
      >>> str_to_cat("Exp2")
      CoercCat(name='Exp', level=2)
      >>> str_to_cat("[Ident]")
      ListCat(cat=TokenCat(name='Ident'))
    """
    name = name.strip()
    if name.startswith("[") and name.endswith("]"):
        return ListCat(str_to_cat(name[1:-1], token_names))
    tokens = set(token_names)
    if name in BASE_TOKEN_NAMES or name in tokens:
        return TokenCat(name)
    match = _COERC_RE.match(name)
    if match:
        return CoercCat(match.group(1), int(match.group(2)))
    return Cat(name)


def is_coercion_label(fun: str) -> bool:
    return fun == "_"


def is_list_label(fun: str) -> bool:
    return fun in _LIST_LABELS


@dataclass(frozen=True, slots=True)
class Rule:
    """
    Labelled grammar rule ``fun. category ::= rhs``.

    Attributes:
      fun (str): Rule label; ``_`` marks a coercion, ``[]``/``(:)``/``(:[])`` list rules.
      category (Category): Result category (as written, possibly a coercion level).
      rhs (tuple[Item, ...]): Right-hand side; strings are terminals.
      internal (bool): Declared with the ``internal`` pragma (abstract syntax only).
    """

    fun: str
    category: Category
    rhs: tuple[Item, ...] = ()
    internal: bool = False

    def arguments(self) -> tuple[Category, ...]:
        """Nonterminal arguments of the rule, normalized, in order."""
        return tuple(normalize(item) for item in self.rhs if not isinstance(item, str))


@dataclass(frozen=True, slots=True)
class Constructor:
    """Abstract-syntax constructor: a name plus ordered argument categories."""

    name: str
    args: tuple[Category, ...] = ()


@dataclass(frozen=True, slots=True)
class DataDecl:
    """One abstract-syntax category together with all of its constructors."""

    category: Category
    constructors: tuple[Constructor, ...]


@dataclass(frozen=True, slots=True)
class Grammar:
    """
    Container for a grammar's rules and token declarations.

    Attributes:
      rules (tuple[Rule, ...]): Rules in declaration order.
      tokens (tuple[str, ...]): User-declared token category names.
      entrypoints (tuple[Category, ...]): Declared entry points (informational).
    """

    rules: tuple[Rule, ...]
    tokens: tuple[str, ...] = ()
    entrypoints: tuple[Category, ...] = field(default=())

    def categories(self) -> tuple[Category, ...]:
        """Normalized result categories, in order of first appearance."""
        seen: dict[Category, None] = {}
        for rule in self.rules:
            seen.setdefault(normalize(rule.category), None)
        return tuple(seen)

    def data_declarations(self) -> tuple[DataDecl, ...]:
        """
        Derive the abstract-syntax data declarations (cf2data).

        Returns:
          tuple[DataDecl, ...]: One declaration per non-list, non-token category with at
          least one constructor. Coercion and list rules contribute no constructors.
          Duplicate constructors (same name and arguments) are kept once.
        """
        grouped: dict[Category, dict[Constructor, None]] = {}
        for rule in self.rules:
            cat = normalize(rule.category)
            if isinstance(cat, (ListCat, TokenCat, InternalCat)):
                continue
            if is_coercion_label(rule.fun) or is_list_label(rule.fun):
                continue
            grouped.setdefault(cat, {}).setdefault(
                Constructor(rule.fun, rule.arguments()), None
            )
        return tuple(
            DataDecl(cat, tuple(constructors))
            for cat, constructors in grouped.items()
            if constructors
        )
