"""bmpa serialization.

Layout (all integers little-endian)::

    comment      N bytes UTF-8, followed by a single NUL
    width        int32
    height       int32
    gridW        uint16
    gridH        uint16
    rotatePointX uint16
    rotatePointY uint16
    pixels       width * height * 4 bytes, R G B A, row-major
    count        int32
    animations   count * (baseFrame, startFrame, endFrame, rate) as uint16
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path

import numpy as np

from . import INT32_MAX, BmpaDocument
from .errors import EncodeError, OutputWriteError
from .image_source import ImageSource
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)

HEADER_FORMAT = "<iiHHHH"
COUNT_FORMAT = "<i"
ANIMATION_FORMAT = "<HHHH"
CHANNEL_MAX = 255


def _scale(fractions: np.ndarray) -> np.ndarray:
    """Scale ``[0, 1]`` fractions to bytes, rounding half up."""

    scaled = np.floor(fractions * CHANNEL_MAX + 0.5)
    return np.clip(scaled, 0, CHANNEL_MAX).astype(np.uint8)


def convert_pixels(source: ImageSource) -> np.ndarray:
    """Convert source samples into an RGBA buffer of shape ``(height, width, 4)``.

    Each channel is converted on its own: red, green and blue are scaled to
    bytes and opacity is inverted into alpha. No neighbouring pixel is read.
    """

    samples = np.asarray(source.samples(), dtype=np.float64)
    expected = (source.height, source.width, 4)
    if samples.shape != expected:
        raise EncodeError(f"Image source returned samples of shape {samples.shape}, expected {expected}")

    fractions = samples / float(source.max_value)
    pixels = np.empty(expected, dtype=np.uint8)
    pixels[..., :3] = _scale(fractions[..., :3])
    pixels[..., 3] = CHANNEL_MAX - _scale(fractions[..., 3])
    return pixels


def validate_document(document: BmpaDocument) -> bytes:
    """Check every layout invariant and return the encoded comment."""

    comment = validators.check_comment(document.comment)
    validators.check_int32(document.width, "width")
    validators.check_int32(document.height, "height")
    validators.check_uint16(document.grid_w, "gridW")
    validators.check_uint16(document.grid_h, "gridH")
    validators.check_uint16(document.rotate_point_x, "rotatePointX")
    validators.check_uint16(document.rotate_point_y, "rotatePointY")
    if document.animation_count > INT32_MAX:
        raise EncodeError(f"Too many animations: {document.animation_count}")
    for index, clip in enumerate(document.animations):
        for name, value in (
            ("baseFrame", clip.base_frame),
            ("startFrame", clip.start_frame),
            ("endFrame", clip.end_frame),
            ("rate", clip.rate),
        ):
            validators.check_uint16(value, f"Animation at {index} {name}")

    pixel_count = document.width * document.height
    if document.pixels is None:
        if pixel_count:
            raise EncodeError("Document has no pixel data")
    elif document.pixels.dtype != np.uint8 or document.pixels.shape != (document.height, document.width, 4):
        raise EncodeError(
            f"Pixel buffer of shape {document.pixels.shape} does not match "
            f"{document.width}x{document.height} RGBA"
        )
    return comment


def encode_document(document: BmpaDocument) -> bytes:
    """Serialize a document into bmpa bytes."""

    comment = validate_document(document)

    parts = [
        comment,
        b"\0",
        struct.pack(
            HEADER_FORMAT,
            document.width,
            document.height,
            document.grid_w,
            document.grid_h,
            document.rotate_point_x,
            document.rotate_point_y,
        ),
    ]
    if document.pixels is not None:
        parts.append(np.ascontiguousarray(document.pixels).tobytes())
    parts.append(struct.pack(COUNT_FORMAT, document.animation_count))
    for clip in document.animations:
        parts.append(struct.pack(ANIMATION_FORMAT, clip.base_frame, clip.start_frame, clip.end_frame, clip.rate))
    return b"".join(parts)


def write_document(document: BmpaDocument, path: Path) -> int:
    """Encode ``document`` and write it to ``path``; returns the byte count.

    The document is fully encoded before the destination is opened.
    """

    data = encode_document(document)
    try:
        written = file_tools.write_bytes_atomic(path, data)
    except OSError as exc:
        raise OutputWriteError(path, reason=exc.strerror or str(exc)) from exc

    logger.info("Wrote bmpa to %s (%s bytes)", path, written)
    return written
