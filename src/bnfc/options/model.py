"""
Target vocabulary and the validated generator configuration.

Defines the Target enum (serialized values are the sub-command names), the
lexer/parser mode enums, and SharedOptions, the pydantic model every option
parser produces. A SharedOptions instance is frozen once validated.

Design principles
-----------------
1) One naming standard:
   - Enum member names: UPPER_SNAKE
   - Target values: the command-line spelling (``cpp-stl``, ``c-sharp``)

2) Validation at construction:
   - ``xml`` is one of 0 (none), 1 (basic), 2 (extended).
   - ``in_package`` is a dot-separated sequence of identifiers.

Examples
--------
>>> from bnfc.options.model import SharedOptions, Target, target_from_value
>>> target_from_value("cpp-stl") is Target.CPP_STL
True
>>> SharedOptions(lang="Calc").target is Target.HASKELL
True
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.errors import UsageError

__all__ = [
    "Target",
    "AlexVersion",
    "HappyMode",
    "XML_NONE",
    "XML_BASIC",
    "XML_EXTENDED",
    "SharedOptions",
    "target_from_value",
    "build_options",
]


class Target(Enum):
    """Backend language modes; values are the sub-command names."""

    C = "c"
    CPP = "cpp"
    CPP_STL = "cpp-stl"
    C_SHARP = "c-sharp"
    HASKELL = "haskell"
    HASKELL_GADT = "haskell-gadt"
    JAVA = "java"
    OCAML = "ocaml"
    PROFILE = "profile"


class AlexVersion(Enum):
    """Version of the Alex lexer generator targeted by Haskell backends."""

    ALEX1 = "alex1"
    ALEX2 = "alex2"
    ALEX3 = "alex3"


class HappyMode(Enum):
    """Happy parser flavor."""

    STANDARD = "standard"
    GLR = "glr"


XML_NONE: Final[int] = 0
XML_BASIC: Final[int] = 1
XML_EXTENDED: Final[int] = 2

_PACKAGE_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_][A-Za-z0-9_']*(\.[A-Za-z_][A-Za-z0-9_']*)*$")

# Lookup order of the sub-command vocabulary.
_TARGET_NAMES: Final[dict[str, Target]] = {
    "haskell": Target.HASKELL,
    "c": Target.C,
    "cpp": Target.CPP,
    "cpp-stl": Target.CPP_STL,
    "java": Target.JAVA,
    "c-sharp": Target.C_SHARP,
    "ocaml": Target.OCAML,
    "haskell-gadt": Target.HASKELL_GADT,
    "profile": Target.PROFILE,
}


def target_from_value(name: str) -> Target | None:
    """Map a sub-command name to its Target, or None if it names no target."""
    return _TARGET_NAMES.get(name)


class SharedOptions(BaseModel):
    """
    Configuration shared by all backends for one generation run.

    Attributes:
        target (Target): Selected backend language mode.
        make (bool): Also generate a Makefile.
        alex_mode (AlexVersion): Alex version for Haskell lexers.
        in_dir (bool): Put modules under ``lang`` (``Calc.Abs``) instead of ``AbsCalc``.
        share_strings (bool): String sharing in Alex 2 lexers.
        byte_strings (bool): Byte strings in Alex 2 lexers.
        glr (HappyMode): Standard or GLR Happy parser.
        xml (int): XML printer level (0 none, 1 basic, 2 extended).
        in_package (str | None): Hierarchical package prefix for generated modules.
        lang (str): Module-name prefix, the grammar file's base name.
        multi (bool): Multilingual grammar.
        cnf (bool): Generate CNF-like tables.
        line_numbers (bool): C++ line-number fields in syntax classes.
        visual_studio (bool): C# Visual Studio solution files.
        wcf (bool): C# WCF data-contract annotations.

    Raises:
        pydantic.ValidationError: If ``xml`` is out of range or ``in_package`` is malformed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: Target = Target.HASKELL
    make: bool = False
    alex_mode: AlexVersion = AlexVersion.ALEX3
    in_dir: bool = False
    share_strings: bool = False
    byte_strings: bool = False
    glr: HappyMode = HappyMode.STANDARD
    xml: int = Field(default=XML_NONE, ge=XML_NONE, le=XML_EXTENDED)
    in_package: str | None = None
    lang: str = ""
    multi: bool = False
    cnf: bool = False
    line_numbers: bool = False
    visual_studio: bool = False
    wcf: bool = False

    @field_validator("in_package")
    @classmethod
    def _validate_package(cls, v: str | None) -> str | None:
        if v is not None and not _PACKAGE_RE.match(v):
            raise ValueError(f"package must be a dotted module path (got {v!r})")
        return v


def build_options(**fields: object) -> SharedOptions:
    """
    Construct SharedOptions, reporting validation failures as a UsageError.

    Raises:
      UsageError: With the first validation message.
    """
    try:
        return SharedOptions(**fields)  # type: ignore[arg-type]
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first.get("loc", ()))
        raise UsageError(f"invalid option {where}: {first['msg']}") from exc
