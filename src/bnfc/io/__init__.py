"""
bnfc.io: settings and file output for the command line.

## Public API
- GeneratorSettings: run settings with env > TOML > defaults precedence.
- generation_timestamp: timestamp stamped into generated files.
- write_text_atomic: atomic tmp → fsync → rename writes.
"""

from __future__ import annotations

from .config import GeneratorSettings, generation_timestamp
from .fs import write_text_atomic

__all__ = [
    "GeneratorSettings",
    "generation_timestamp",
    "write_text_atomic",
]
