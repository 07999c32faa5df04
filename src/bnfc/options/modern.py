"""
Sub-command command line (``bnfc [global options] <target> [target options] FILE``).

Responsibilities
- Scan the global options ``--help``, ``--version``, ``--multilingual`` with
  getopt rules: options must precede the first positional argument, long
  options may be abbreviated to any unique prefix, ``--`` ends option
  processing.
- Resolve the run mode: Help, Version, a UsageError, or a TargetMode carrying
  the target and the unexamined remaining arguments.
- Re-parse a target's remaining arguments into SharedOptions.

Mode resolution
---------------
- The first scan error becomes a UsageError.
- Global options rank Help < Version < Multilingual; the lowest present wins.
- Multilingual marks the resolved target multilingual; resolution continues.
- No global option and no positional argument resolves to Help.
- Otherwise the first positional argument must name a target.

Examples
--------
>>> str(parse_mode(["--version", "--help"]))
'--help'
>>> str(parse_mode(["cpp", "-l", "Calc.cf"]))
'cpp -l Calc.cf'
>>> str(parse_mode(["fortran", "Calc.cf"]))
'Error "Invalid target fortran"'
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import NoReturn, Union

from ..core.errors import UsageError
from .legacy import grammar_lang, is_cf_file
from .model import (
    XML_BASIC,
    XML_EXTENDED,
    XML_NONE,
    AlexVersion,
    HappyMode,
    SharedOptions,
    Target,
    build_options,
    target_from_value,
)

__all__ = [
    "GlobalOption",
    "Help",
    "Version",
    "ModeError",
    "TargetMode",
    "Mode",
    "scan_global_options",
    "parse_mode",
    "is_usage_error",
    "build_target_parser",
    "parse_target_options",
]


class GlobalOption(IntEnum):
    """Options accepted before the sub-command; the value is the priority."""

    HELP = 0
    VERSION = 1
    MULTILINGUAL = 2

    @property
    def flag(self) -> str:
        return "--" + self.name.lower()


@dataclass(frozen=True, slots=True)
class Help:
    def __str__(self) -> str:
        return "--help"


@dataclass(frozen=True, slots=True)
class Version:
    def __str__(self) -> str:
        return "--version"


@dataclass(frozen=True, slots=True)
class ModeError:
    """The user made a mistake; ``message`` says which."""

    message: str

    def __str__(self) -> str:
        escaped = self.message.replace("\\", "\\\\").replace('"', '\\"')
        return f'Error "{escaped}"'


@dataclass(frozen=True, slots=True)
class TargetMode:
    """Run ``target``; ``args`` are handed to the target's own parser."""

    target: Target
    args: tuple[str, ...] = ()
    multilingual: bool = False

    def __str__(self) -> str:
        return " ".join([self.target.value, *self.args])


Mode = Union[Help, Version, ModeError, TargetMode]


def is_usage_error(mode: Mode) -> bool:
    return isinstance(mode, ModeError)


def _match_long(name: str) -> tuple[GlobalOption | None, str | None]:
    # Exact match first, then a unique prefix.
    options = list(GlobalOption)
    for opt in options:
        if opt.flag[2:] == name:
            return opt, None
    candidates = [opt for opt in options if opt.flag[2:].startswith(name)]
    if len(candidates) == 1:
        return candidates[0], None
    if not candidates:
        return None, f"unrecognized option `--{name}'"
    names = ", ".join(opt.flag for opt in candidates)
    return None, f"option `--{name}' is ambiguous; could be one of: {names}"


def scan_global_options(
    args: Sequence[str],
) -> tuple[list[GlobalOption], list[str], list[str]]:
    """
    getopt-style scan in require-order mode.

    Args:
      args: Raw arguments.

    Returns:
      tuple: (options found, remaining arguments, error messages).
    """
    found: list[GlobalOption] = []
    errors: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            i += 1
            break
        if arg.startswith("--"):
            name, has_value, _ = arg[2:].partition("=")
            opt, error = _match_long(name)
            if error is not None:
                errors.append(error)
            elif has_value:
                errors.append(f"option `{opt.flag}' doesn't allow an argument")
            else:
                found.append(opt)
        elif arg.startswith("-") and arg != "-":
            errors.extend(f"unrecognized option `-{ch}'" for ch in arg[1:])
        else:
            break
        i += 1
    return found, list(args[i:]), errors


def parse_mode(args: Sequence[str]) -> Mode:
    """
    Resolve the run mode from the raw arguments.

    Args:
      args: Arguments without the program name.

    Returns:
      Mode: Help, Version, ModeError or TargetMode.
    """
    found, rest, errors = scan_global_options(args)
    if errors:
        return ModeError(errors[0])
    top = min(found, default=None)
    if top is GlobalOption.HELP:
        return Help()
    if top is GlobalOption.VERSION:
        return Version()
    if not rest:
        return Help()
    target = target_from_value(rest[0])
    if target is None:
        return ModeError(f"Invalid target {rest[0]}")
    return TargetMode(target, tuple(rest[1:]), multilingual=top is GlobalOption.MULTILINGUAL)


class _TargetArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems as UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_target_parser(target: Target) -> argparse.ArgumentParser:
    p = _TargetArgumentParser(
        prog=f"bnfc {target.value}",
        description=f"Generate {target.value} code from an LBNF grammar.",
        add_help=False,
    )
    p.add_argument("-m", "--make", action="store_true", help="Also generate a Makefile.")
    p.add_argument("-d", dest="in_dir", action="store_true", help="Put modules in a directory named after the grammar.")
    p.add_argument("-p", "--package", dest="in_package", default=None, metavar="NAME", help="Prefix every module with NAME.")
    alex = p.add_mutually_exclusive_group()
    for version in AlexVersion:
        alex.add_argument(
            f"--{version.value}",
            dest="alex_mode",
            action="store_const",
            const=version,
            help=f"Use {version.value} as lexer generator.",
        )
    p.add_argument("--sharestrings", dest="share_strings", action="store_true", help="String sharing in Alex 2 lexers.")
    p.add_argument("--bytestrings", dest="byte_strings", action="store_true", help="Byte strings in Alex 2 lexers.")
    p.add_argument("--glr", action="store_true", help="Output a GLR parser.")
    xml = p.add_mutually_exclusive_group()
    xml.add_argument("--xml", dest="xml", action="store_const", const=XML_BASIC, help="Also generate a DTD and an XML printer.")
    xml.add_argument("--xmlt", dest="xml", action="store_const", const=XML_EXTENDED, help="DTD and XML printer, another encoding.")
    p.add_argument("--cnf", action="store_true", help="Generate CNF-like tables.")
    p.add_argument("-l", dest="line_numbers", action="store_true", help="Add line numbers to syntax classes.")
    p.add_argument("--vs", dest="visual_studio", action="store_true", help="Generate Visual Studio files.")
    p.add_argument("--wcf", action="store_true", help="WCF data-contract annotations.")
    p.add_argument("grammar", help="Grammar file (.cf, .bnf, .lbnf, .bnfc).")
    p.set_defaults(alex_mode=AlexVersion.ALEX3, xml=XML_NONE)
    return p


def parse_target_options(
    target: Target, args: Sequence[str], multilingual: bool = False
) -> tuple[SharedOptions, str]:
    """
    Parse the arguments that follow the sub-command.

    Returns:
      tuple[SharedOptions, str]: Validated options and the grammar path.

    Raises:
      UsageError: On unknown or malformed arguments, or a bad grammar extension.
    """
    ns = build_target_parser(target).parse_args(list(args))
    if not is_cf_file(ns.grammar):
        raise UsageError("Error: the input file must end with .cf")
    options = build_options(
        target=target,
        make=ns.make,
        alex_mode=ns.alex_mode,
        in_dir=ns.in_dir,
        share_strings=ns.share_strings,
        byte_strings=ns.byte_strings,
        glr=HappyMode.GLR if ns.glr else HappyMode.STANDARD,
        xml=ns.xml,
        in_package=ns.in_package,
        lang=grammar_lang(ns.grammar),
        multi=multilingual,
        cnf=ns.cnf,
        line_numbers=ns.line_numbers,
        visual_studio=ns.visual_studio,
        wcf=ns.wcf,
    )
    return options, ns.grammar
