"""Filesystem helpers."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a UTF-8 text file in one go."""

    text = path.read_text(encoding="utf-8")
    logger.debug("Read %s characters from %s", len(text), path)
    return text


def write_bytes_atomic(path: Path, data: bytes) -> int:
    """Write ``data`` to ``path`` through a sibling temporary file.

    The destination is replaced only once every byte has been written, so an
    interrupted or failed write never leaves a truncated file behind.
    """

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        # mkstemp creates 0600 files; match what a plain open() would produce
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s bytes to %s", len(data), path)
    return len(data)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask
