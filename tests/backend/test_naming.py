from __future__ import annotations

from bnfc.backend.naming import abs_module, agda_file, agda_module, file_name, module_name, printer_module
from bnfc.options.model import SharedOptions


def test_flat_names() -> None:
    opts = SharedOptions(lang="Calc")
    assert module_name(opts, "Abs") == "AbsCalc"
    assert agda_module(opts) == "ASTCalc"
    assert agda_file(opts) == "ASTCalc.agda"
    assert printer_module(opts) == "PrintCalc"


def test_in_dir_names() -> None:
    opts = SharedOptions(lang="Calc", in_dir=True)
    assert abs_module(opts) == "Calc.Abs"
    assert agda_file(opts) == "Calc/AST.agda"


def test_package_prefix() -> None:
    opts = SharedOptions(lang="Calc", in_package="org.example")
    assert abs_module(opts) == "org.example.AbsCalc"
    assert file_name(opts, "AST", "agda") == "org/example/ASTCalc.agda"
    assert file_name(opts, "Makefile", "") == "org/example/MakefileCalc"
