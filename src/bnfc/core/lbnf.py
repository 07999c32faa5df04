"""
Reader for labelled BNF (LBNF) grammar files.

Builds a bnfc.core.cf.Grammar from grammar text. Only what the abstract syntax
needs is interpreted; the reader does not validate the grammar.

Supported statements
--------------------
- ``Label. Cat ::= item* ;`` where items are ``"terminal"``, ``Cat``, ``[Cat]``
- ``internal Label. Cat ::= item* ;``
- ``token Name <regex> ;`` and ``position token Name <regex> ;``
- ``separator [nonempty] Cat "sep" ;`` and ``terminator [nonempty] Cat "term" ;``
- ``coercions Cat n ;``
- ``entrypoints Cat, ... ;``
- ``comment ...``, ``layout ...``, ``define ...``, ``delimiters ...`` (ignored)

Comments are ``--`` to end of line and ``{- ... -}``.

Examples
--------
>>> g = parse_grammar('''
... EAdd. Exp  ::= Exp "+" Exp1 ;
... EInt. Exp1 ::= Integer ;
... coercions Exp 1 ;
... ''')
>>> [(d.category.name, [c.name for c in d.constructors]) for d in g.data_declarations()]
[('Exp', ['EAdd', 'EInt'])]
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..logging import get_logger
from .cf import Category, CoercCat, Cat, Grammar, Item, ListCat, Rule, normalize, str_to_cat
from .errors import GrammarError

__all__ = ["Token", "tokenize", "parse_grammar", "read_grammar"]

logger = get_logger(__name__)

_SYMBOLS: Final[tuple[str, ...]] = ("::=", ".", ";", "[", "]", "(", ")", ":", "|", ",")
_IGNORED_PRAGMAS: Final[frozenset[str]] = frozenset({"comment", "layout", "define", "delimiters"})


@dataclass(frozen=True, slots=True)
class Token:
    """Lexical token: kind is one of ID, INT, STR, CHR, SYM."""

    kind: str
    value: str
    line: int


def _read_quoted(text: str, i: int, quote: str, line: int) -> tuple[str, int]:
    # text[i] is the opening quote; returns (value, index after closing quote).
    out: list[str] = []
    i += 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            out.append(text[i + 1])
            i += 2
            continue
        if ch == quote:
            return "".join(out), i + 1
        if ch == "\n":
            break
        out.append(ch)
        i += 1
    raise GrammarError(f"unterminated literal starting with {quote}", line)


def tokenize(text: str) -> Iterator[Token]:
    """Split grammar text into tokens, dropping whitespace and comments."""
    i = 0
    line = 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\n":
            line += 1
            i += 1
        elif ch.isspace():
            i += 1
        elif text.startswith("--", i):
            end = text.find("\n", i)
            i = n if end < 0 else end
        elif text.startswith("{-", i):
            end = text.find("-}", i + 2)
            if end < 0:
                raise GrammarError("unterminated block comment", line)
            line += text.count("\n", i, end)
            i = end + 2
        elif ch == '"':
            value, i = _read_quoted(text, i, '"', line)
            yield Token("STR", value, line)
        elif ch == "'":
            value, i = _read_quoted(text, i, "'", line)
            yield Token("CHR", value, line)
        elif ch.isalpha() or ch == "_":
            j = i + 1
            while j < n and (text[j].isalnum() or text[j] in "_'"):
                j += 1
            yield Token("ID", text[i:j], line)
            i = j
        elif ch.isdigit():
            j = i + 1
            while j < n and text[j].isdigit():
                j += 1
            yield Token("INT", text[i:j], line)
            i = j
        else:
            sym = next((s for s in _SYMBOLS if text.startswith(s, i)), ch)
            yield Token("SYM", sym, line)
            i += len(sym)


def _statements(tokens: Iterator[Token]) -> Iterator[list[Token]]:
    current: list[Token] = []
    for tok in tokens:
        if tok.kind == "SYM" and tok.value == ";":
            if current:
                yield current
            current = []
        else:
            current.append(tok)
    if current:
        yield current


class _Cursor:
    """Position inside one statement."""

    def __init__(self, tokens: list[Token], token_names: frozenset[str]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.token_names = token_names

    @property
    def line(self) -> int:
        tok = self.tokens[min(self.pos, len(self.tokens) - 1)]
        return tok.line

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> Token | None:
        return None if self.at_end() else self.tokens[self.pos]

    def take(self) -> Token:
        if self.at_end():
            raise GrammarError("unexpected end of statement", self.line)
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, kind: str, value: str | None = None) -> Token:
        tok = self.take()
        if tok.kind != kind or (value is not None and tok.value != value):
            want = value if value is not None else kind
            raise GrammarError(f"expected {want!r}, found {tok.value!r}", tok.line)
        return tok

    def accept_sym(self, value: str) -> bool:
        tok = self.peek()
        if tok is not None and tok.kind == "SYM" and tok.value == value:
            self.pos += 1
            return True
        return False

    def category(self) -> Category:
        if self.accept_sym("["):
            inner = self.category()
            self.expect("SYM", "]")
            return ListCat(inner)
        return str_to_cat(self.expect("ID").value, self.token_names)

    def label(self) -> str:
        tok = self.peek()
        if tok is not None and tok.kind == "ID":
            return self.take().value
        parts: list[str] = []
        # Special list labels: [] (:) (:[])
        while not self.at_end() and not (self.peek().kind == "SYM" and self.peek().value == "."):
            tok = self.take()
            if tok.kind != "SYM":
                raise GrammarError(f"malformed rule label near {tok.value!r}", tok.line)
            parts.append(tok.value)
        label = "".join(parts)
        if label not in ("[]", "(:)", "(:[])"):
            raise GrammarError(f"malformed rule label {label!r}", self.line)
        return label


def _rule(cur: _Cursor, internal: bool) -> Rule:
    fun = cur.label()
    cur.expect("SYM", ".")
    cat = cur.category()
    cur.expect("SYM", "::=")
    rhs: list[Item] = []
    while not cur.at_end():
        tok = cur.peek()
        if tok.kind == "STR":
            rhs.append(cur.take().value)
        elif tok.kind == "ID" or (tok.kind == "SYM" and tok.value == "["):
            rhs.append(cur.category())
        else:
            raise GrammarError(f"unexpected {tok.value!r} in rule {fun}", tok.line)
    return Rule(fun, cat, tuple(rhs), internal)


def _list_rules(cur: _Cursor, terminator: bool) -> list[Rule]:
    nonempty = False
    tok = cur.peek()
    if tok is not None and tok.kind == "ID" and tok.value == "nonempty":
        cur.take()
        nonempty = True
    cat = cur.category()
    delim = cur.expect("STR").value
    lst = ListCat(cat)
    one: tuple[Item, ...] = (cat, delim) if terminator else (cat,)
    rules: list[Rule] = [] if nonempty else [Rule("[]", lst, ())]
    if nonempty or not terminator:
        rules.append(Rule("(:[])", lst, one))
    rules.append(Rule("(:)", lst, (cat, delim, lst) if delim or terminator else (cat, lst)))
    return rules


def _coercion_rules(cur: _Cursor) -> list[Rule]:
    base = cur.expect("ID").value
    levels = int(cur.expect("INT").value)

    def at(k: int) -> Category:
        return Cat(base) if k == 0 else CoercCat(base, k)

    rules = [Rule("_", at(k), (at(k + 1),)) for k in range(levels)]
    rules.append(Rule("_", at(levels), ("(", Cat(base), ")")))
    return rules


def parse_grammar(text: str) -> Grammar:
    """
    Read LBNF text into a Grammar.

    Raises:
      GrammarError: On a statement the reader cannot interpret.
    """
    statements = list(_statements(tokenize(text)))

    token_names: list[str] = []
    for stmt in statements:
        words = [t.value for t in stmt[:3]]
        if words[:1] == ["token"] and len(stmt) > 1:
            token_names.append(stmt[1].value)
        elif words[:2] == ["position", "token"] and len(stmt) > 2:
            token_names.append(stmt[2].value)
    known = frozenset(token_names)

    rules: list[Rule] = []
    entrypoints: list[Category] = []
    for stmt in statements:
        cur = _Cursor(stmt, known)
        head = stmt[0]
        keyword = head.value if head.kind == "ID" else None
        nxt = stmt[1] if len(stmt) > 1 else None
        # A keyword followed by "." is a rule label, e.g. "token. T ::= ...".
        if nxt is not None and nxt.kind == "SYM" and nxt.value == ".":
            keyword = None
        if keyword in ("token", "position"):
            continue
        if keyword in _IGNORED_PRAGMAS:
            logger.debug("ignoring %s pragma on line %d", keyword, head.line)
        elif keyword == "internal":
            cur.take()
            rules.append(_rule(cur, internal=True))
        elif keyword in ("separator", "terminator"):
            cur.take()
            rules.extend(_list_rules(cur, terminator=keyword == "terminator"))
        elif keyword == "coercions":
            cur.take()
            rules.extend(_coercion_rules(cur))
        elif keyword == "entrypoints":
            cur.take()
            while not cur.at_end():
                entrypoints.append(normalize(cur.category()))
                cur.accept_sym(",")
        elif keyword == "rules":
            raise GrammarError("the 'rules' pragma is not supported", head.line)
        else:
            rules.append(_rule(cur, internal=False))

    logger.debug("read %d rules, %d token types", len(rules), len(token_names))
    return Grammar(rules=tuple(rules), tokens=tuple(token_names), entrypoints=tuple(entrypoints))


def read_grammar(path: str | Path) -> Grammar:
    """
    Read and parse a grammar file (UTF-8).

    Raises:
      GrammarError: If the file is not valid UTF-8 or cannot be interpreted.
      OSError: If the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise GrammarError(f"grammar file {path} is not valid UTF-8 (byte {exc.start})") from exc
    return parse_grammar(text)

