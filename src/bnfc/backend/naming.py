"""
Module and file names of generated artifacts.

Names derive from three option fields:
- ``lang``: grammar base name, appended to the module name (``AbsCalc``) or, with
  ``in_dir``, used as the parent module (``Calc.Abs``).
- ``in_dir``: put modules in a hierarchy under ``lang``.
- ``in_package``: optional dotted prefix for every module (``My.Pkg.AbsCalc``).

Examples
--------
>>> from bnfc.options.model import SharedOptions
>>> opts = SharedOptions(lang="Calc")
>>> module_name(opts, "Abs")
'AbsCalc'
>>> file_name(SharedOptions(lang="Calc", in_dir=True, in_package="A.B"), "AST", "agda")
'A/B/Calc/AST.agda'
"""

from __future__ import annotations

import posixpath

from ..options.model import SharedOptions

__all__ = [
    "module_name",
    "file_name",
    "agda_module",
    "agda_file",
    "abs_module",
    "printer_module",
]


def module_name(options: SharedOptions, name: str) -> str:
    base = f"{options.lang}.{name}" if options.in_dir else f"{name}{options.lang}"
    return f"{options.in_package}.{base}" if options.in_package else base


def file_name(options: SharedOptions, name: str, ext: str) -> str:
    suffix = f".{ext}" if ext else ""
    if options.in_dir:
        path = posixpath.join(options.lang, name + suffix)
    else:
        path = f"{name}{options.lang}{suffix}"
    if options.in_package:
        return posixpath.join(*options.in_package.split("."), path)
    return path


def agda_module(options: SharedOptions) -> str:
    return module_name(options, "AST")


def agda_file(options: SharedOptions) -> str:
    return file_name(options, "AST", "agda")


def abs_module(options: SharedOptions) -> str:
    return module_name(options, "Abs")


def printer_module(options: SharedOptions) -> str:
    return module_name(options, "Print")
