"""Domain-specific exceptions for bmpa conversion."""

from pathlib import Path


class BmpaError(Exception):
    """Base class for every fatal conversion error."""

    exit_code = 1


class MetadataParseError(BmpaError, ValueError):
    """Raised when the metadata file is missing, unreadable or not a JSON object."""

    exit_code = 3

    def __init__(self, path: Path | None, reason: str):
        message = f"Error parsing metadata: {reason}"
        if path is not None:
            message = f"Error parsing metadata {path}: {reason}"
        super().__init__(message)


class MetadataSchemaError(BmpaError, ValueError):
    """Raised when well-formed metadata does not match the expected structure."""

    exit_code = 4


class ImageDecodeError(BmpaError, ValueError):
    """Raised when the source image cannot be decoded."""

    exit_code = 5

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Could not decode image: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class OutputWriteError(BmpaError, RuntimeError):
    """Raised when the destination file cannot be written."""

    exit_code = 6

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Could not write output file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EncodeError(BmpaError, ValueError):
    """Raised when a document cannot be represented in the bmpa layout."""

    exit_code = 7
