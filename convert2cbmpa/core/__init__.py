"""Core data model for bmpa conversion."""

__all__ = [
    "AnimationClip",
    "BmpaDocument",
    "ConversionSettings",
    "ConversionOutcome",
    "UINT16_MAX",
    "INT32_MAX",
]

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import numpy as np

UINT16_MAX = 0xFFFF
INT32_MAX = 0x7FFFFFFF


@dataclass(frozen=True)
class AnimationClip:
    """A playback range on a sprite sheet."""

    base_frame: int
    start_frame: int
    end_frame: int
    rate: int


@dataclass
class BmpaDocument:
    """Logical content of a bmpa file, independent of its byte layout.

    ``pixels`` holds one ``uint8`` RGBA quad per pixel with shape
    ``(height, width, 4)``; it stays ``None`` until the image has been
    converted.
    """

    comment: str = ""
    width: int = 0
    height: int = 0
    grid_w: int = 0
    grid_h: int = 0
    rotate_point_x: int = 0
    rotate_point_y: int = 0
    pixels: Optional[np.ndarray] = None
    animations: list[AnimationClip] = field(default_factory=list)

    @property
    def animation_count(self) -> int:
        return len(self.animations)

    def add_animation(self, clip: AnimationClip) -> None:
        self.animations.append(clip)

    def set_pixels(self, pixels: np.ndarray) -> None:
        """Attach a converted pixel buffer and take the image size from it."""

        if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Pixel buffer must be uint8 with shape (height, width, 4), got {pixels.dtype} {pixels.shape}")
        self.height, self.width = int(pixels.shape[0]), int(pixels.shape[1])
        self.pixels = pixels


@dataclass
class ConversionSettings:
    """User-supplied settings for a single conversion run."""

    input_path: Path
    output_path: Path
    metadata_path: Optional[Path] = None
    verbose: bool = False


@dataclass
class ConversionOutcome:
    """Summary of a finished conversion."""

    output_path: Path
    width: int
    height: int
    animation_count: int
    bytes_written: int
