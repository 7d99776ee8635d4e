from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage, features

from picpress.models.image import Image, PixelLayout

AVIF_AVAILABLE = features.check("avif")

requires_avif = pytest.mark.skipif(not AVIF_AVAILABLE, reason="Pillow built without AVIF support")


def gradient_rgb(width: int = 64, height: int = 48) -> np.ndarray:
    """Smooth RGB test pattern, shape (height, width, 3)."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    r = np.tile(xs, (height, 1))
    g = np.tile(ys[:, None], (1, width))
    b = (r + g) / 2
    return np.dstack((r, g, b)).astype(np.uint8)


def noise_rgb(width: int = 64, height: int = 64, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def write_image(path: Path, pixels: np.ndarray, **save_options) -> Path:
    PILImage.fromarray(pixels).save(path, **save_options)
    return path


@pytest.fixture
def rgb_image() -> Image:
    return Image(pixels=gradient_rgb(), layout=PixelLayout.RGB)


@pytest.fixture
def rgba_image() -> Image:
    rgb = gradient_rgb()
    alpha = np.full(rgb.shape[:2], 128, dtype=np.uint8)
    return Image(pixels=np.dstack((rgb, alpha)), layout=PixelLayout.RGBA)


@pytest.fixture
def rgb_png(tmp_path: Path) -> Path:
    return write_image(tmp_path / "source.png", gradient_rgb())


@pytest.fixture
def rgba_png(tmp_path: Path) -> Path:
    rgb = gradient_rgb()
    alpha = np.full(rgb.shape[:2], 255, dtype=np.uint8)
    alpha[:8, :8] = 0
    return write_image(tmp_path / "source_rgba.png", np.dstack((rgb, alpha)))


@pytest.fixture
def noise_png(tmp_path: Path) -> Path:
    return write_image(tmp_path / "noise.png", noise_rgb())
