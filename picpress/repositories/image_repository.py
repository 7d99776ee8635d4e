from __future__ import annotations

import logging
import os
import shutil
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError

from ..errors import DecodeError, IoError
from ..models.image import Image, PixelLayout

logger = logging.getLogger(__name__)

# Pillow modes that map straight onto a PixelLayout.
_NATIVE_MODES = {
    "L": PixelLayout.L,
    "LA": PixelLayout.LA,
    "RGB": PixelLayout.RGB,
    "RGBA": PixelLayout.RGBA,
    "I;16": PixelLayout.I16,
    "I;16L": PixelLayout.I16,
    "I;16B": PixelLayout.I16,
    "I;16N": PixelLayout.I16,
}

# Created with 0o666 so the process umask applies, as for a plain open().
_TMP_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)


class PendingOutput:
    """
    Write handle for an output that only appears at its final path once
    the surrounding ``ImageRepository.open_output`` block succeeds.
    """

    def __init__(self, path: Path, handle: BinaryIO):
        self.path = path
        self._handle = handle
        self.bytes_written = 0

    def write(self, data: bytes) -> int:
        try:
            written = self._handle.write(data)
        except OSError as exc:
            raise IoError(self.path, str(exc)) from exc
        self.bytes_written += written
        return written

    def flush(self) -> None:
        try:
            self._handle.flush()
        except OSError as exc:
            raise IoError(self.path, str(exc)) from exc


class ImageRepository:
    """
    Handles file I/O for Image entities: decoding inputs and committing outputs.
    """

    @staticmethod
    def create_image(pixels: np.ndarray, layout: PixelLayout, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels=pixels, layout=layout)
        return Image(pixels=pixels, layout=layout, path=Path(path))

    @staticmethod
    def _has_alpha(pil_img: PILImage.Image) -> bool:
        bands = pil_img.getbands()
        return "A" in bands or "a" in bands or "transparency" in pil_img.info

    def _to_native(self, pil_img: PILImage.Image) -> tuple[np.ndarray, PixelLayout]:
        """
        Convert whatever Pillow decoded into one of the supported layouts.
        Palette, bilevel and non-RGB colour spaces become L, RGB or RGBA.
        """
        mode = pil_img.mode
        if mode in _NATIVE_MODES:
            layout = _NATIVE_MODES[mode]
            pixels = np.array(pil_img)
            if layout is PixelLayout.I16:
                pixels = pixels.astype(np.uint16)
            return pixels, layout
        if mode == "I":
            # 32-bit integer gray (e.g. some 16-bit PNGs): clip into 16 bits.
            pixels = np.clip(np.array(pil_img), 0, 65535).astype(np.uint16)
            return pixels, PixelLayout.I16
        if mode in ("1", "F"):
            return np.array(pil_img.convert("L")), PixelLayout.L
        if self._has_alpha(pil_img):
            return np.array(pil_img.convert("RGBA")), PixelLayout.RGBA
        return np.array(pil_img.convert("RGB")), PixelLayout.RGB

    def load(self, path: Union[str, Path]) -> Image:
        """
        Decode an image file into an Image.

        Raises:
            DecodeError: if the path cannot be read or is not a decodable image.
        """
        path = Path(path)
        try:
            with PILImage.open(path) as pil_img:
                pil_img.load()
                pixels, layout = self._to_native(pil_img)
                source_mode = pil_img.mode
        except FileNotFoundError as exc:
            raise DecodeError(path, "file not found") from exc
        except UnidentifiedImageError as exc:
            raise DecodeError(path, "not a recognised image format") from exc
        except PILImage.DecompressionBombError as exc:
            raise DecodeError(path, str(exc)) from exc
        except (OSError, ValueError) as exc:
            raise DecodeError(path, str(exc)) from exc

        logger.debug(f"Decoded {path}: mode={source_mode} -> {layout.value}, shape={pixels.shape}")
        return self.create_image(pixels, layout, path)

    @staticmethod
    @contextmanager
    def open_output(path: Union[str, Path]) -> Iterator[PendingOutput]:
        """
        Open ``path`` for writing through a temporary sibling file.

        The temporary file is renamed onto ``path`` when the block exits
        cleanly and removed when it raises, so ``path`` is either the complete
        new file or left exactly as it was.
        """
        path = Path(path)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            fd = os.open(tmp_path, _TMP_FLAGS, 0o666)
        except OSError as exc:
            raise IoError(path, str(exc)) from exc

        try:
            with os.fdopen(fd, "wb") as handle:
                pending = PendingOutput(path, handle)
                yield pending
                pending.flush()
            try:
                # Overwriting keeps the existing file's permission bits.
                if path.exists():
                    shutil.copymode(path, tmp_path)
                os.replace(tmp_path, path)
            except OSError as exc:
                raise IoError(path, str(exc)) from exc
            logger.debug(f"Committed {path}")
        finally:
            tmp_path.unlink(missing_ok=True)
