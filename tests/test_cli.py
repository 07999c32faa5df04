from __future__ import annotations

import logging
from pathlib import Path

import pytest

from bnfc import __version__
from bnfc.cli import main, run
from bnfc.io.config import GeneratorSettings

NAT = 'zero. Nat ::= "0" ;\nsuc. Nat ::= "S" Nat ;\n'


@pytest.fixture(autouse=True)
def _restore_logger(monkeypatch):
    for key in ("BNFC_OUT_DIR", "BNFC_LOG_LEVEL", "BNFC_TIMESTAMP", "SOURCE_DATE_EPOCH"):
        monkeypatch.delenv(key, raising=False)
    logger = logging.getLogger("bnfc")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture()
def grammar(tmp_path: Path) -> Path:
    p = tmp_path / "Nat.cf"
    p.write_text(NAT, encoding="utf-8")
    return p


@pytest.fixture()
def settings(tmp_path: Path) -> GeneratorSettings:
    return GeneratorSettings(out_dir=str(tmp_path / "out"), timestamp="2024-01-01 00:00 UTC")


def test_help_and_version(capsys, settings) -> None:
    assert run([], settings) == 0
    assert "usage: bnfc" in capsys.readouterr().out

    assert run(["--version"], settings) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_generates_agda_module(grammar: Path, settings, tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.INFO, logger="bnfc")

    assert run(["haskell", str(grammar)], settings) == 0

    out = tmp_path / "out" / "ASTNat.agda"
    text = out.read_text(encoding="utf-8")
    assert text.startswith("-- Agda bindings for the Haskell abstract syntax data types.\n")
    assert "-- Generated by BNFC at 2024-01-01 00:00 UTC." in text
    assert "module ASTNat where" in text
    assert "  data Nat : Set where" in text
    assert text.endswith("#-}\n")
    assert any("writing file" in r.getMessage() for r in caplog.records)


def test_generation_is_byte_stable(grammar: Path, settings, tmp_path: Path) -> None:
    assert run(["haskell-gadt", "-d", "-p", "Gen", str(grammar)], settings) == 0
    out = tmp_path / "out" / "Gen" / "Nat" / "AST.agda"
    first = out.read_bytes()
    assert run(["haskell-gadt", "-d", "-p", "Gen", str(grammar)], settings) == 0
    assert out.read_bytes() == first


def test_legacy_command_line_warns_and_generates(grammar: Path, settings, tmp_path: Path, caplog) -> None:
    assert run(["-gadt", str(grammar)], settings) == 0
    assert (tmp_path / "out" / "ASTNat.agda").exists()
    assert "Option -gadt is deprecated, use --haskell --gadt instead" in caplog.messages


def test_legacy_grammar_only(grammar: Path, settings, tmp_path: Path) -> None:
    assert run([str(grammar)], settings) == 0
    assert (tmp_path / "out" / "ASTNat.agda").exists()


@pytest.mark.parametrize(
    "argv, message",
    [
        (["fortran", "Nat.cf"], "bnfc: Invalid target fortran"),
        (["--bogus"], "bnfc: unrecognized option `--bogus'"),
        (["haskell", "Nat.txt"], "bnfc: Error: the input file must end with .cf"),
        (["-java", "-csharp", "Nat.cf"], "bnfc: Error: only one language mode may be chosen"),
        (["java", "Nat.cf"], "bnfc: no backend available for target java"),
    ],
)
def test_usage_errors_exit_one(argv, message, capsys, settings) -> None:
    assert run(argv, settings) == 1
    assert capsys.readouterr().err.strip() == message


def test_missing_and_bad_grammar(tmp_path: Path, capsys, settings) -> None:
    assert run(["haskell", str(tmp_path / "Nope.cf")], settings) == 1
    assert "cannot read grammar file" in capsys.readouterr().err

    bad = tmp_path / "Bad.cf"
    bad.write_text('rules B ::= "t" | "f" ;\n')
    assert run(["haskell", str(bad)], settings) == 1
    assert "line 1" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_main_uses_environment_settings(grammar: Path, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BNFC_OUT_DIR", "env_out")
    monkeypatch.setenv("SOURCE_DATE_EPOCH", "0")

    with pytest.raises(SystemExit) as exc:
        main(["haskell", str(grammar)])

    assert exc.value.code == 0
    text = (tmp_path / "env_out" / "ASTNat.agda").read_text(encoding="utf-8")
    assert "-- Generated by BNFC at 1970-01-01 00:00 UTC." in text


def test_grammar_that_is_not_utf8_exits_one(tmp_path: Path, capsys, settings) -> None:
    bad = tmp_path / "Latin.cf"
    bad.write_bytes(b'zero. Nat ::= "\xff" ;\n')

    assert run(["haskell", str(bad)], settings) == 1
    assert "not valid UTF-8" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_unwritable_output_directory_exits_one(grammar: Path, tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a regular file")
    settings = GeneratorSettings(out_dir=str(blocker / "sub"), timestamp="t")

    assert run(["haskell", str(grammar)], settings) == 1
    err = capsys.readouterr().err
    assert err.startswith("bnfc: cannot write ")
    assert "ASTNat.agda" in err


def test_legacy_multi_flag_is_honoured(grammar: Path, settings, caplog) -> None:
    assert run(["-multi", str(grammar)], settings) == 0
    assert "-multi is deprecated, use --multilingual instead" in caplog.messages
