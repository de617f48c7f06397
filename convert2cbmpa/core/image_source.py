"""Image decoding and pixel sampling using Pillow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError
from ..utils import validators

logger = logging.getLogger(__name__)

SAMPLE_MAX_8BIT = 255
SAMPLE_MAX_16BIT = 65535
WIDE_GRAYSCALE_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N"}


class ImageSource(Protocol):
    """Read-only access to decoded samples.

    Samples are ``(red, green, blue, opacity)`` in ``[0, max_value]``, where an
    opacity of 0 means fully opaque.
    """

    width: int
    height: int
    max_value: int

    def query(self, x: int, y: int) -> tuple[int, int, int, int]:
        ...

    def samples(self) -> np.ndarray:
        """Return every sample as an array of shape ``(height, width, 4)``."""
        ...


class ArraySource:
    """Image source backed by a ``(height, width, 4)`` sample array."""

    def __init__(self, samples: np.ndarray, max_value: int = SAMPLE_MAX_8BIT):
        samples = np.asarray(samples)
        if samples.ndim != 3 or samples.shape[2] != 4:
            raise ValueError(f"Samples must have shape (height, width, 4), got {samples.shape}")
        if max_value <= 0:
            raise ValueError("max_value must be greater than zero")
        self._samples = samples
        self.height, self.width = int(samples.shape[0]), int(samples.shape[1])
        self.max_value = max_value

    def query(self, x: int, y: int) -> tuple[int, int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside {self.width}x{self.height}")
        r, g, b, o = (int(v) for v in self._samples[y, x])
        return r, g, b, o

    def samples(self) -> np.ndarray:
        return self._samples


class PillowImageSource(ArraySource):
    """Image source for a decoded Pillow image.

    8-bit modes go through ``convert("RGBA")``. 16-bit and 32-bit integer
    grayscale modes keep their native samples on a 0-65535 scale, since
    converting them to RGBA clips every value above 255.
    """

    def __init__(self, image: Image.Image):
        self.mode = image.mode
        if image.mode in WIDE_GRAYSCALE_MODES:
            gray = np.clip(np.asarray(image).astype(np.int64), 0, SAMPLE_MAX_16BIT)
            samples = np.zeros(gray.shape + (4,), dtype=np.int64)
            samples[..., 0] = samples[..., 1] = samples[..., 2] = gray
            super().__init__(samples, max_value=SAMPLE_MAX_16BIT)
            return

        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
        samples = rgba.astype(np.int32)
        samples[..., 3] = SAMPLE_MAX_8BIT - samples[..., 3]
        super().__init__(samples, max_value=SAMPLE_MAX_8BIT)


@dataclass
class DecodeResult:
    """Outcome of decoding an image: either a source or the error that stopped it."""

    path: Path
    source: Optional[ArraySource] = None
    error: Optional[ImageDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ArraySource:
        if self.error is not None:
            raise self.error
        if self.source is None:
            raise ImageDecodeError(self.path, reason="no image decoded")
        return self.source


def decode_image(path: Path) -> DecodeResult:
    """Decode ``path`` with Pillow, capturing failures in the result."""

    try:
        validators.validate_image_path(path)
    except ImageDecodeError as exc:
        return DecodeResult(path=path, error=exc)

    try:
        with Image.open(path) as image:
            image.load()
            source = PillowImageSource(image)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.debug("Pillow failed to decode %s: %s", path, exc)
        return DecodeResult(path=path, error=ImageDecodeError(path, reason=str(exc)))

    logger.debug("Decoded %s (%s) -> %sx%s", path, source.mode, source.width, source.height)
    return DecodeResult(path=path, source=source)
