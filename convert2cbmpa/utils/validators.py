"""Validation helpers for user inputs and header values."""

from __future__ import annotations

from pathlib import Path

from ..core import INT32_MAX, UINT16_MAX
from ..core.errors import EncodeError, ImageDecodeError, MetadataParseError


def validate_image_path(path: Path) -> Path:
    """Ensure the source image path points at an existing file."""

    if not path:
        raise ImageDecodeError(Path("<unset>"), reason="No path provided")
    if not path.exists():
        raise ImageDecodeError(path, reason="File not found")
    if not path.is_file():
        raise ImageDecodeError(path, reason="Not a file")
    return path


def validate_metadata_path(path: Path) -> Path:
    """Ensure the metadata path points at an existing file."""

    if not path.exists():
        raise MetadataParseError(path, "File not found")
    if not path.is_file():
        raise MetadataParseError(path, "Not a file")
    return path


def check_uint16(value: int, field: str) -> int:
    """Ensure a value fits an unsigned 16-bit field."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"{field} must be an integer, got {value!r}")
    if value < 0 or value > UINT16_MAX:
        raise EncodeError(f"{field} must be between 0 and 65535, got {value}")
    return value


def check_int32(value: int, field: str) -> int:
    """Ensure a value fits a non-negative signed 32-bit field."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"{field} must be an integer, got {value!r}")
    if value < 0 or value > INT32_MAX:
        raise EncodeError(f"{field} must be between 0 and 2147483647, got {value}")
    return value


def check_comment(comment: str) -> bytes:
    """Return the UTF-8 bytes of a comment that can be NUL-terminated."""

    if not isinstance(comment, str):
        raise EncodeError(f"Comment must be text, got {type(comment).__name__}")
    if "\0" in comment:
        raise EncodeError("Comment must not contain a NUL character")
    return comment.encode("utf-8")
