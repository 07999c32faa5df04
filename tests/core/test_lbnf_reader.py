from __future__ import annotations

from pathlib import Path

import pytest

from bnfc.core.cf import Cat, Constructor, ListCat, TokenCat
from bnfc.core.errors import GrammarError
from bnfc.core.lbnf import parse_grammar, read_grammar, tokenize

CALC = """
-- A small calculator.
entrypoints Stm ;

SExp.  Stm  ::= Exp ";" ;
SBlk.  Stm  ::= "{" [Stm] "}" ;
EAdd.  Exp  ::= Exp "+" Exp1 ;
EVar.  Exp1 ::= Ident ;
ELit.  Exp1 ::= Num ;
{- block
   comment ; with a semicolon -}
coercions Exp 1 ;
terminator Stm "" ;
token Num (digit+) ;
comment "//" ;
"""


def test_reader_builds_data_declarations() -> None:
    g = parse_grammar(CALC)
    datas = {d.category: d.constructors for d in g.data_declarations()}
    assert list(datas) == [Cat("Stm"), Cat("Exp")]
    assert datas[Cat("Stm")] == (
        Constructor("SExp", (Cat("Exp"),)),
        Constructor("SBlk", (ListCat(Cat("Stm")),)),
    )
    assert datas[Cat("Exp")] == (
        Constructor("EAdd", (Cat("Exp"), Cat("Exp"))),
        Constructor("EVar", (TokenCat("Ident"),)),
        Constructor("ELit", (TokenCat("Num"),)),
    )
    assert g.tokens == ("Num",)
    assert g.entrypoints == (Cat("Stm"),)


def test_separator_generates_list_rules() -> None:
    g = parse_grammar('separator nonempty Ident "," ;')
    assert [r.fun for r in g.rules] == ["(:[])", "(:)"]
    assert all(r.category == ListCat(TokenCat("Ident")) for r in g.rules)
    assert g.data_declarations() == ()


def test_list_labels_and_internal_rules() -> None:
    g = parse_grammar('[]. [Exp] ::= ; (:). [Exp] ::= Exp "," [Exp] ; internal ETyped. Exp ::= Exp Type ;')
    assert [r.fun for r in g.rules] == ["[]", "(:)", "ETyped"]
    assert g.rules[2].internal is True
    assert [c.name for c in g.data_declarations()[0].constructors] == ["ETyped"]


def test_semicolons_inside_literals_do_not_split() -> None:
    g = parse_grammar("Semi. T ::= \";\" ; token Sym (';') ;")
    assert g.rules[0].rhs == (";",)
    assert g.tokens == ("Sym",)


def test_tokens_track_lines() -> None:
    toks = list(tokenize("A. B ::= ;\n\nC. D ::= \"x\" ;"))
    assert toks[0].line == 1
    assert toks[-1].line == 3


def test_rules_pragma_is_rejected_with_line() -> None:
    with pytest.raises(GrammarError) as exc:
        parse_grammar("Zero. Nat ::= \"0\" ;\nrules Bool ::= \"true\" | \"false\" ;")
    assert exc.value.line == 2
    assert "rules" in str(exc.value)


def test_malformed_rule_raises() -> None:
    with pytest.raises(GrammarError):
        parse_grammar("Foo Bar ::= ;")
    with pytest.raises(GrammarError):
        parse_grammar('X. Y ::= "unterminated ;')


def test_read_grammar_from_file(tmp_path: Path) -> None:
    p = tmp_path / "Nat.cf"
    p.write_text('zero. Nat ::= "0" ;\nsuc. Nat ::= "S" Nat ;\n', encoding="utf-8")
    g = read_grammar(p)
    assert [c.name for c in g.data_declarations()[0].constructors] == ["zero", "suc"]


def test_read_grammar_rejects_invalid_utf8(tmp_path: Path) -> None:
    p = tmp_path / "Bad.cf"
    p.write_bytes(b'zero. Nat ::= "\xff" ;\n')
    with pytest.raises(GrammarError, match="not valid UTF-8"):
        read_grammar(p)
