"""
Legacy single-dash command line (``bnfc -java -p pkg Calc.cf``).

Responsibilities
- Parse the old flag vocabulary into SharedOptions plus the grammar path.
- Translate old flags to their double-dash equivalents, producing one
  deprecation message per translated flag.
- Detect deprecated spellings of global options.

Notes
- The last argument is always the grammar file; it must end in one of
  ``.cf``, ``.bnf``, ``.lbnf``, ``.bnfc``.
- At most one language flag may be given; none selects Haskell.
- Parsing fails fast: the first problem is raised as a UsageError. The
  translation pass is independent and reports its warnings whether or not
  parsing succeeds.

Examples
--------
>>> translate_arguments(["-cpp_stl", "-l", "grammar.cf"])
(['--cpp', '--stl', '--l', 'grammar.cf'], ['Option -cpp_stl is deprecated, use --cpp --stl instead', 'Option -l is deprecated, use --l instead'])
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePath
from typing import Final

from ..core.errors import UsageError
from .model import (
    XML_BASIC,
    XML_EXTENDED,
    XML_NONE,
    AlexVersion,
    HappyMode,
    SharedOptions,
    Target,
    build_options,
)

__all__ = [
    "ALLOWED_EXTENSIONS",
    "LEGACY_TRANSLATIONS",
    "DEPRECATED_OPTIONS",
    "is_cf_file",
    "grammar_lang",
    "parse_arguments",
    "translate_arguments",
    "look_for_deprecated_options",
    "looks_legacy",
]

ALLOWED_EXTENSIONS: Final[tuple[str, ...]] = ("cf", "bnf", "lbnf", "bnfc")

# Old flag -> replacement flags. Order is significant for lookup: first match wins.
LEGACY_TRANSLATIONS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("-java1.4", ("--java4",)),
    ("-java1.5", ("--java5",)),
    ("-java", ("--java",)),
    ("-c", ("--c",)),
    ("-cpp", ("--cpp",)),
    ("-cpp_stl", ("--cpp", "--stl")),
    ("-cpp_no_stl", ("--cpp", "--no-stl")),
    ("-csharp", ("--csharp",)),
    ("-ocaml", ("--ocaml",)),
    ("-haskell", ("--haskell",)),
    ("-prof", ("--haskell", "--prof")),
    ("-gadt", ("--haskell", "--gadt")),
    ("-alex1", ("--alex1",)),
    ("-alex2", ("--alex2",)),
    ("-alex3", ("--alex3",)),
    ("-sharestrings", ("--sharestrings",)),
    ("-bytestrings", ("--bytestrings",)),
    ("-glr", ("--glr",)),
    ("-xml", ("--xml",)),
    ("-xmlt", ("--xmlt",)),
    ("-vs", ("--vs",)),
    ("-wcf", ("--wcf",)),
    ("-l", ("--l",)),
)

DEPRECATED_OPTIONS: Final[tuple[tuple[str, str], ...]] = (
    ("--numeric-version", "--version"),
    ("-multi", "--multilingual"),
)

_TRANSLATION_MAP: Final[dict[str, tuple[str, ...]]] = {}
for _old, _new in LEGACY_TRANSLATIONS:
    _TRANSLATION_MAP.setdefault(_old, _new)


def is_cf_file(path: str) -> bool:
    """
    Does the path end in an allowed grammar extension?

    The check runs on the reversed string, so it is exact and case-sensitive.

    Examples:
      >>> is_cf_file("Calc.cf"), is_cf_file("Calc.lbnf"), is_cf_file("Calc.CF")
      (True, True, False)
    """
    reversed_path = path[::-1]
    return any(reversed_path.startswith(("." + ext)[::-1]) for ext in ALLOWED_EXTENSIONS)


def grammar_lang(path: str) -> str:
    # Base name up to the first dot.
    return PurePath(path).name.split(".", 1)[0]


def parse_arguments(args: Sequence[str]) -> tuple[SharedOptions, str]:
    """
    Parse a legacy command line.

    Args:
      args: Arguments without the program name; the last one is the grammar file.

    Returns:
      tuple[SharedOptions, str]: Validated options and the grammar path.

    Raises:
      UsageError: Missing grammar file, ``-p`` without argument, more than one
        language flag, or a grammar path with an unsupported extension.
    """
    args = ["".join(ch for ch in arg if not ch.isspace()) for arg in args]
    if not args or not args[-1] or args[-1].startswith("-"):
        raise UsageError("Missing grammar file")
    path = args[-1]
    flags = set(args)

    alex_mode = AlexVersion.ALEX3
    for arg in args:
        if arg in ("-alex1", "-alex2", "-alex3"):
            alex_mode = AlexVersion(arg[1:])

    if "-xml" in flags:
        xml = XML_BASIC
    elif "-xmlt" in flags:
        xml = XML_EXTENDED
    else:
        xml = XML_NONE

    in_package: str | None = None
    if "-p" in flags:
        i = args.index("-p")
        if i >= len(args) - 1:
            raise UsageError("-p option requires an argument")
        in_package = args[i + 1]

    # "-fsharp" is accepted for compatibility but selects no target.
    selected = [
        target
        for target, present in (
            (Target.C, "-c" in flags),
            (Target.CPP, "-cpp_no_stl" in flags),
            (Target.CPP_STL, "-cpp_stl" in flags or "-cpp" in flags),
            (Target.C_SHARP, "-csharp" in flags),
            (Target.HASKELL_GADT, "-gadt" in flags),
            (Target.JAVA, "-java1.5" in flags or "-java" in flags),
            (Target.OCAML, "-ocaml" in flags),
            (Target.PROFILE, "-prof" in flags),
        )
        if present
    ]
    targets = selected or [Target.HASKELL]
    if len(targets) != 1:
        raise UsageError("Error: only one language mode may be chosen")
    if not is_cf_file(path):
        raise UsageError("Error: the input file must end with .cf")

    options = build_options(
        target=targets[0],
        make="-m" in flags,
        alex_mode=alex_mode,
        in_dir="-d" in flags,
        share_strings="-sharestrings" in flags,
        byte_strings="-bytestrings" in flags,
        glr=HappyMode.GLR if "-glr" in flags else HappyMode.STANDARD,
        xml=xml,
        in_package=in_package,
        lang=grammar_lang(path),
        multi="--multilingual" in flags or "-multi" in flags,
        cnf="-cnf" in flags,
        line_numbers="-l" in flags,
        visual_studio="-vs" in flags,
        wcf="-wcf" in flags,
    )
    return options, path


def translate_arguments(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """
    Rewrite legacy flags to their double-dash equivalents.

    Args:
      args: Raw arguments.

    Returns:
      tuple[list[str], list[str]]: Translated arguments (expansion order kept) and
      one deprecation message per translated flag. Unknown tokens pass through.
    """
    translated: list[str] = []
    warnings: list[str] = []
    for arg in args:
        new = _TRANSLATION_MAP.get(arg)
        if new is None:
            translated.append(arg)
            continue
        warnings.append(f"Option {arg} is deprecated, use {' '.join(new)} instead")
        translated.extend(new)
    return translated, warnings


def look_for_deprecated_options(args: Sequence[str]) -> list[str]:
    """One message per deprecated spelling of a global option."""
    deprecated = dict(DEPRECATED_OPTIONS)
    return [
        f"{arg} is deprecated, use {deprecated[arg]} instead"
        for arg in args
        if arg in deprecated
    ]


def looks_legacy(args: Sequence[str]) -> bool:
    """
    Heuristic used by the CLI: does this look like an old-style command line?

    True when the first token is a single-dash flag, or when the only token is
    a grammar file.
    """
    if not args:
        return False
    first = args[0]
    if first.startswith("-") and not first.startswith("--") and first != "-":
        return True
    return len(args) == 1 and is_cf_file(first)
