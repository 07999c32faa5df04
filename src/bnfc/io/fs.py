"""
Filesystem helpers for writing generated files.

Responsibilities
- Create output directories.
- Write a file atomically: tmp write → fsync → os.replace(tmp, final).

Notes
- Atomicity via os.replace holds only when tmp and final share a filesystem;
  the tmp file is created next to its destination for that reason.
"""

from __future__ import annotations

import os
import tempfile

__all__ = ["makedirs", "write_text_atomic"]


def makedirs(path: str, exist_ok: bool = True) -> None:
    """
    Create directories recursively; a no-op for the empty path.

    Args:
        path (str): Directory path to create.
        exist_ok (bool): Do not error if the directory already exists.
    """
    if path:
        os.makedirs(path, exist_ok=exist_ok)


def write_text_atomic(path: str, content: str) -> None:
    """
    Write UTF-8 text to ``path`` atomically, creating parent directories.

    Args:
        path (str): Destination path.
        content (str): Full file text, written verbatim (no newline translation).

    Notes:
        On failure the temporary file is removed and the exception propagates.
    """
    directory = os.path.dirname(path)
    makedirs(directory)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=directory or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        # mkstemp creates 0600 files.
        os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
