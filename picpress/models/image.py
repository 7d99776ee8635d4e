from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import numpy as np


class PixelLayout(Enum):
    """Channel layouts an Image can carry after decode."""
    L = "L"          # (H, W) uint8 gray
    LA = "LA"        # (H, W, 2) uint8 gray + alpha
    RGB = "RGB"      # (H, W, 3) uint8
    RGBA = "RGBA"    # (H, W, 4) uint8
    I16 = "I;16"     # (H, W) uint16 gray


@dataclass(frozen=True)
class Image:
    """
    Simple data object: decoded pixels tagged with their layout
    (+ optional source path for bookkeeping).
    Stages that change pixels return a new Image instead of mutating this one.
    """
    pixels: np.ndarray  # Shape (H, W) or (H, W, C), dtype per layout.
    layout: PixelLayout
    path: Path | None = None  # Source of the image.

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height), the order Pillow and OpenCV take sizes in."""
        return self.width, self.height

    def with_pixels(self, pixels: np.ndarray) -> Image:
        return Image(pixels=pixels, layout=self.layout, path=self.path)
