"""
Runtime settings for the command line.

Defines GeneratorSettings, a frozen dataclass carrying where output goes, how
much is logged, and which timestamp is stamped into generated files.

Precedence
- environment (``BNFC_*``) > TOML > defaults.
- TOML search when no path is given: ``./bnfc.toml`` (top-level keys or a
  ``[bnfc]`` table), then ``./pyproject.toml`` under ``[tool.bnfc]``.

Notes
- Generated text is stable for a fixed timestamp. ``generation_timestamp``
  honours an explicit setting first, then ``SOURCE_DATE_EPOCH``, then the
  current UTC time.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..logging import get_logger

__all__ = ["GeneratorSettings", "generation_timestamp", "TIMESTAMP_FORMAT"]

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class GeneratorSettings:
    """
    Settings for one command-line run.

    Attributes:
        out_dir (str): Directory generated files are written under.
        log_level (str): Logging level name for the ``bnfc`` logger.
        timestamp (str | None): Fixed generation time for the preamble; None means
            "derive it" (see generation_timestamp).

    Examples:
        >>> GeneratorSettings(out_dir="gen").out_dir
        'gen'
    """

    out_dir: str = "."
    log_level: str = "INFO"
    timestamp: str | None = None

    @classmethod
    def _apply_mapping(cls, base: GeneratorSettings, cfg: dict[str, Any] | None) -> GeneratorSettings:
        """Apply a loose config mapping, ignoring unknown keys and bad values."""
        if not isinstance(cfg, dict):
            return base

        s = base
        if isinstance(cfg.get("out_dir"), str) and cfg["out_dir"]:
            s = replace(s, out_dir=cfg["out_dir"])
        if isinstance(cfg.get("log_level"), str):
            level = cfg["log_level"].strip().upper()
            if level in _LEVELS:
                s = replace(s, log_level=level)
            else:
                logger.debug("ignoring unknown log level %r", cfg["log_level"])
        if isinstance(cfg.get("timestamp"), str) and cfg["timestamp"]:
            s = replace(s, timestamp=cfg["timestamp"])
        return s

    @classmethod
    def from_env(cls, base: GeneratorSettings | None = None, prefix: str = "BNFC_") -> GeneratorSettings:
        """
        Build settings from environment variables over ``base`` (or defaults).

        Recognized variables:
            - BNFC_OUT_DIR
            - BNFC_LOG_LEVEL
            - BNFC_TIMESTAMP
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in ("out_dir", "log_level", "timestamp"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> GeneratorSettings:
        """
        Build settings from a TOML file; defaults when none is found.
        """
        s = cls()
        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "bnfc.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.debug("skipping unreadable config %s: %s", p, exc)
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("bnfc") if isinstance(tool, dict) else None
            else:
                cfg = data["bnfc"] if isinstance(data.get("bnfc"), dict) else data
            if cfg:
                logger.debug("loaded settings from %s", p)
                return cls._apply_mapping(s, cfg)
        return s

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> GeneratorSettings:
        """Load settings applying precedence: environment > TOML > defaults."""
        return cls.from_env(base=cls.from_toml(path))


def generation_timestamp(settings: GeneratorSettings, now: datetime | None = None) -> str:
    """
    Timestamp stamped into generated files.

    Args:
        settings: Run settings; an explicit ``timestamp`` wins.
        now: Current time override.

    Returns:
        str: ``settings.timestamp``, else ``SOURCE_DATE_EPOCH`` formatted, else ``now``
        (default: current UTC time) formatted as ``YYYY-MM-DD HH:MM UTC``.
    """
    if settings.timestamp:
        return settings.timestamp
    epoch = os.getenv("SOURCE_DATE_EPOCH")
    if epoch:
        try:
            return datetime.fromtimestamp(int(epoch), UTC).strftime(TIMESTAMP_FORMAT)
        except (ValueError, OverflowError, OSError):
            logger.warning("ignoring malformed SOURCE_DATE_EPOCH=%r", epoch)
    return (now or datetime.now(UTC)).strftime(TIMESTAMP_FORMAT)
