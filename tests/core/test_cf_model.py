from __future__ import annotations

from bnfc.core.cf import (
    Cat,
    CoercCat,
    Constructor,
    Grammar,
    INTERNAL_CAT,
    ListCat,
    Rule,
    TokenCat,
    normalize,
    show_cat,
    str_to_cat,
)


def test_str_to_cat_classifies_names() -> None:
    assert str_to_cat("Exp") == Cat("Exp")
    assert str_to_cat("Exp2") == CoercCat("Exp", 2)
    assert str_to_cat("Integer") == TokenCat("Integer")
    assert str_to_cat("MyTok", ["MyTok"]) == TokenCat("MyTok")
    assert str_to_cat("[Stm]") == ListCat(Cat("Stm"))
    assert str_to_cat("[[Exp1]]") == ListCat(ListCat(CoercCat("Exp", 1)))


def test_normalize_and_show() -> None:
    assert normalize(CoercCat("Exp", 3)) == Cat("Exp")
    assert normalize(ListCat(CoercCat("Exp", 1))) == ListCat(Cat("Exp"))
    assert show_cat(ListCat(CoercCat("Exp", 1))) == "[Exp1]"


def test_rule_arguments_drop_terminals_and_levels() -> None:
    r = Rule("EAdd", Cat("Exp"), (Cat("Exp"), "+", CoercCat("Exp", 1)))
    assert r.arguments() == (Cat("Exp"), Cat("Exp"))


def test_data_declarations_group_in_order_and_skip_non_constructors() -> None:
    g = Grammar(
        rules=(
            Rule("SExp", Cat("Stm"), (Cat("Exp"), ";")),
            Rule("EAdd", Cat("Exp"), (Cat("Exp"), "+", CoercCat("Exp", 1))),
            Rule("EInt", CoercCat("Exp", 1), (TokenCat("Integer"),)),
            Rule("_", CoercCat("Exp", 1), ("(", Cat("Exp"), ")")),
            Rule("[]", ListCat(Cat("Stm")), ()),
            Rule("(:)", ListCat(Cat("Stm")), (Cat("Stm"), ListCat(Cat("Stm")))),
            Rule("SExp", Cat("Stm"), (Cat("Exp"), ";")),
            Rule("Hidden", INTERNAL_CAT, ()),
        )
    )
    datas = g.data_declarations()
    assert [d.category for d in datas] == [Cat("Stm"), Cat("Exp")]
    assert datas[0].constructors == (Constructor("SExp", (Cat("Exp"),)),)
    assert [c.name for c in datas[1].constructors] == ["EAdd", "EInt"]
    assert datas[1].constructors[1].args == (TokenCat("Integer"),)


def test_categories_first_appearance_order() -> None:
    g = Grammar(rules=(Rule("A", Cat("X")), Rule("B", CoercCat("Y", 1)), Rule("C", Cat("X"))))
    assert g.categories() == (Cat("X"), Cat("Y"))
