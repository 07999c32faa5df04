"""
bnfc.options: target selection and the validated generator configuration.

## Responsibilities
- Model the target vocabulary and SharedOptions (pydantic, frozen).
- Parse the sub-command command line (``bnfc <target> ...``) into a Mode.
- Parse and translate the legacy single-dash command line.

## Public API
- Target, SharedOptions: configuration model.
- parse_mode, parse_target_options: modern command line.
- parse_arguments, translate_arguments, look_for_deprecated_options: legacy command line.

## Import DAG discipline
- Depends on stdlib, pydantic and bnfc.core only; never imports bnfc.backend.
"""

from __future__ import annotations

from .legacy import (
    is_cf_file,
    look_for_deprecated_options,
    looks_legacy,
    parse_arguments,
    translate_arguments,
)
from .model import AlexVersion, HappyMode, SharedOptions, Target, target_from_value
from .modern import Help, Mode, ModeError, TargetMode, Version, parse_mode, parse_target_options

__all__ = [
    "AlexVersion",
    "HappyMode",
    "SharedOptions",
    "Target",
    "target_from_value",
    "Help",
    "Version",
    "ModeError",
    "TargetMode",
    "Mode",
    "parse_mode",
    "parse_target_options",
    "is_cf_file",
    "parse_arguments",
    "translate_arguments",
    "look_for_deprecated_options",
    "looks_legacy",
]
