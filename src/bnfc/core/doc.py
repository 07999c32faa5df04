"""
Document layout engine for generated source text.

A Document is an immutable tree (Empty, Text, Beside, Above, Nest) built bottom-up
by the backends and rendered exactly once. Rendering is pure: the same tree always
yields the same string.

Responsibilities
- Horizontal joins (``beside``: no space, ``beside_space``: one space).
- Vertical joins (``above``, ``vcat``) and blank-line separation (``blank_above``, ``vsep``).
- Indentation (``nest``), never emitted on blank lines.
- The list layout rule used for pragmas and import renamings (``pretty_list``).

Layout rules
------------
- ``empty()`` is the unit of every join; ``text("")`` is a real (blank) line.
- When the left operand of a horizontal join spans several lines, the right
  operand attaches to its last line; following lines of the right operand keep
  their indentation relative to the attach column.
- ``render`` joins lines with ``\\n`` and appends nothing; a trailing ``text("")``
  line is how callers end a file with a newline.

Examples
--------
>>> from bnfc.core.doc import text, pretty_list, render
>>> render(pretty_list(text("foo ="), text("["), text("]"), text(","), []))
'foo = []'
>>> render(pretty_list(text("foo ="), text("["), text("]"), text(","), [text("a")]))
'foo = [a]'
>>> print(render(pretty_list(text("foo ="), text("["), text("]"), text(","), [text("a"), text("b")])))
foo =
  [ a
  , b
  ]
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Union

__all__ = [
    "Doc",
    "Empty",
    "Text",
    "Beside",
    "Above",
    "Nest",
    "INDENT",
    "empty",
    "text",
    "beside",
    "beside_space",
    "hcat",
    "hsep",
    "above",
    "vcat",
    "nest",
    "parens",
    "parens_if",
    "blank_above",
    "vsep",
    "pretty_list",
    "layout",
    "render",
]

# Indentation used by generated code.
INDENT = 2


@dataclass(frozen=True, slots=True)
class Empty:
    """The empty document; occupies no lines."""


@dataclass(frozen=True, slots=True)
class Text:
    """A single-line text fragment."""

    value: str


@dataclass(frozen=True, slots=True)
class Beside:
    """Horizontal join; ``space`` inserts one blank between the operands."""

    left: Doc
    right: Doc
    space: bool = False


@dataclass(frozen=True, slots=True)
class Above:
    """Vertical join: ``top`` lines followed by ``bottom`` lines."""

    top: Doc
    bottom: Doc


@dataclass(frozen=True, slots=True)
class Nest:
    """Indent every line of ``body`` by ``indent`` columns."""

    indent: int
    body: Doc


Doc = Union[Empty, Text, Beside, Above, Nest]

_EMPTY = Empty()

# A laid-out line: (indentation, text).
Line = tuple[int, str]


def empty() -> Doc:
    return _EMPTY


def text(value: str) -> Doc:
    return Text(value)


def _coerce(d: Doc | str) -> Doc:
    return Text(d) if isinstance(d, str) else d


def beside(left: Doc | str, right: Doc | str) -> Doc:
    """Join horizontally without a space (``<>``)."""
    left, right = _coerce(left), _coerce(right)
    if isinstance(left, Empty):
        return right
    if isinstance(right, Empty):
        return left
    return Beside(left, right, False)


def beside_space(left: Doc | str, right: Doc | str) -> Doc:
    """Join horizontally with one space (``<+>``)."""
    left, right = _coerce(left), _coerce(right)
    if isinstance(left, Empty):
        return right
    if isinstance(right, Empty):
        return left
    return Beside(left, right, True)


def hcat(docs: Iterable[Doc | str]) -> Doc:
    return reduce(beside, docs, _EMPTY)


def hsep(docs: Iterable[Doc | str]) -> Doc:
    return reduce(beside_space, docs, _EMPTY)


def above(top: Doc | str, bottom: Doc | str) -> Doc:
    top, bottom = _coerce(top), _coerce(bottom)
    if isinstance(top, Empty):
        return bottom
    if isinstance(bottom, Empty):
        return top
    return Above(top, bottom)


def vcat(docs: Iterable[Doc | str]) -> Doc:
    return reduce(above, docs, _EMPTY)


def nest(indent: int, body: Doc | str) -> Doc:
    body = _coerce(body)
    if isinstance(body, Empty) or indent == 0:
        return body
    return Nest(indent, body)


def parens(d: Doc | str) -> Doc:
    return hcat(["(", d, ")"])


def parens_if(condition: bool, d: Doc | str) -> Doc:
    return parens(d) if condition else _coerce(d)


def blank_above(top: Doc | str, bottom: Doc | str) -> Doc:
    """Stack two documents with exactly one blank line between them."""
    return above(above(top, Text("")), bottom)


def vsep(docs: Sequence[Doc | str]) -> Doc:
    """Stack documents separated by blank lines (right fold, like ``foldr1``)."""
    if not docs:
        return _EMPTY
    return reduce(lambda acc, d: blank_above(d, acc), reversed(docs[:-1]), _coerce(docs[-1]))


def pretty_list(
    pre: Doc | str,
    lpar: Doc | str,
    rpar: Doc | str,
    sep: Doc | str,
    items: Sequence[Doc | str],
) -> Doc:
    """
    Print a list of 0-1 items on the same line as a preamble and 2+ items on the
    following lines, indented.

    Args:
      pre: Preamble.
      lpar: Left bracket.
      rpar: Right bracket (may carry a trailer such as ``) #-}``).
      sep: Separator placed before every item after the first (no spaces).
      items: List items.

    Returns:
      Doc: ``pre lpar rpar`` / ``pre lpar item rpar`` inline, otherwise a block with
      ``lpar item`` then ``sep item`` lines and ``rpar`` on its own line.
    """
    if not items:
        return beside_space(pre, beside(lpar, rpar))
    if len(items) == 1:
        return beside_space(pre, hcat([lpar, items[0], rpar]))
    first, *rest = items
    block = [beside_space(lpar, first), *(beside_space(sep, d) for d in rest), _coerce(rpar)]
    return vcat([pre, *(nest(INDENT, d) for d in block)])


def layout(d: Doc) -> list[Line]:
    """Lay a document out as ``(indent, text)`` lines."""
    if isinstance(d, Empty):
        return []
    if isinstance(d, Text):
        return [(0, d.value)]
    if isinstance(d, Nest):
        return [(indent + d.indent, s) for indent, s in layout(d.body)]
    if isinstance(d, Above):
        return layout(d.top) + layout(d.bottom)
    if isinstance(d, Beside):
        left, right = layout(d.left), layout(d.right)
        if not left:
            return right
        if not right:
            return left
        last_indent, last_text = left[-1]
        gap = " " if d.space else ""
        (first_indent, first_text), *tail = right
        joined = last_text + gap + first_text
        shift = last_indent + len(last_text) + len(gap) - first_indent
        return [
            *left[:-1],
            (last_indent, joined),
            *((max(0, indent + shift), s) for indent, s in tail),
        ]
    raise TypeError(f"not a document: {d!r}")


def render(d: Doc) -> str:
    """Render a document to text; blank lines carry no indentation."""
    return "\n".join(" " * indent + s if s else "" for indent, s in layout(d))
