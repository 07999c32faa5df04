"""
Command-line entry point.

Usage
-----
- ``bnfc [--help|--version|--multilingual] <target> [options] FILE``
- ``bnfc [-flags ...] FILE`` (legacy form; flags are translated and a
  deprecation warning is logged for each)

Exit codes
- 0 on success, ``--help`` and ``--version``.
- 1 on usage errors, unreadable or uninterpretable grammars, and targets
  without a backend. The message is printed as ``bnfc: <msg>`` on stderr.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from . import __version__
from .backend import backend_for
from .core.errors import GrammarError, UsageError
from .core.lbnf import read_grammar
from .io import GeneratorSettings, generation_timestamp, write_text_atomic
from .logging import get_logger, setup_logging
from .options import (
    Help,
    ModeError,
    SharedOptions,
    Target,
    TargetMode,
    Version,
    look_for_deprecated_options,
    looks_legacy,
    parse_arguments,
    parse_mode,
    parse_target_options,
    translate_arguments,
)

logger = get_logger(__name__)

USAGE = f"""\
usage: bnfc [--help | --version | --multilingual] TARGET [OPTIONS] FILE

Generate Agda bindings for the Haskell abstract syntax of an LBNF grammar.

Global options:
  --help          show this message and exit
  --version       show the version number and exit
  --multilingual  mark the run as multilingual

Targets:
  {", ".join(t.value for t in Target)}

Target options:
  -m, --make            also generate a Makefile
  -d                    put modules in a directory named after the grammar
  -p, --package NAME    prefix every module with NAME
  --alex1 | --alex2 | --alex3
  --sharestrings, --bytestrings, --glr
  --xml | --xmlt
  --cnf, -l, --vs, --wcf

FILE must end in .cf, .bnf, .lbnf or .bnfc.
"""


def _resolve(argv: list[str]) -> tuple[SharedOptions, str] | int:
    """Turn the arguments into options and a grammar path, or an exit code."""
    mode = parse_mode(argv)
    if isinstance(mode, Help):
        print(USAGE, end="")
        return 0
    if isinstance(mode, Version):
        print(__version__)
        return 0
    if isinstance(mode, TargetMode):
        return parse_target_options(mode.target, mode.args, multilingual=mode.multilingual)

    # Only ModeError is left; fall back to the legacy command line.
    for warning in look_for_deprecated_options(argv):
        logger.warning(warning)
    if not looks_legacy(argv):
        raise UsageError(mode.message)
    _, warnings = translate_arguments(argv)
    for warning in warnings:
        logger.warning(warning)
    return parse_arguments(argv)


def _generate(options: SharedOptions, path: str, settings: GeneratorSettings) -> None:
    backend = backend_for(options.target)
    try:
        grammar = read_grammar(path)
    except OSError as exc:
        raise UsageError(f"cannot read grammar file {path}: {exc.strerror or exc}") from exc
    time = generation_timestamp(settings)
    for generated in backend(time, options, grammar):
        dest = os.path.join(settings.out_dir, *generated.path.split("/"))
        logger.info("writing file %s", dest)
        try:
            write_text_atomic(dest, generated.content)
        except OSError as exc:
            raise UsageError(f"cannot write {dest}: {exc.strerror or exc}") from exc


def run(argv: Sequence[str], settings: GeneratorSettings | None = None) -> int:
    """
    Execute one command line and return its exit code.

    Args:
        argv: Arguments without the program name.
        settings: Run settings; loaded from the environment and TOML when None.
    """
    settings = settings or GeneratorSettings.load()
    try:
        resolved = _resolve(list(argv))
        if isinstance(resolved, int):
            return resolved
        options, path = resolved
        logger.debug("target %s, grammar %s", options.target.value, path)
        _generate(options, path, settings)
    except (UsageError, GrammarError) as exc:
        print(f"bnfc: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    settings = GeneratorSettings.load()
    setup_logging(settings.log_level)
    raise SystemExit(run(argv, settings))


if __name__ == "__main__":
    main()
