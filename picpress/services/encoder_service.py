from __future__ import annotations

import logging
from io import BytesIO

import numpy as np
from PIL import Image as PILImage

from ..config import AVIF_SUBSAMPLING, PNG_COMPRESS_LEVEL
from ..errors import CompressError, InvalidFormatError
from ..models.output_format import OutputFormat

logger = logging.getLogger(__name__)


class EncoderService:
    """
    Thin wrapper over Pillow's codecs: pixel array in, encoded bytes out.
    Callers hand in pixels already normalised by ColorService.
    """

    @staticmethod
    def _save_options(output_format: OutputFormat, quality: int, speed: int) -> dict:
        if output_format is OutputFormat.JPEG:
            return {"quality": quality}
        if output_format is OutputFormat.PNG:
            # PNG is lossless; quality has no meaning here.
            return {"compress_level": PNG_COMPRESS_LEVEL}
        if output_format is OutputFormat.WEBP:
            return {"quality": quality, "lossless": False}
        if output_format is OutputFormat.AVIF:
            return {"quality": quality, "speed": speed, "subsampling": AVIF_SUBSAMPLING}
        raise InvalidFormatError(str(output_format))

    def encode(self, pixels: np.ndarray, output_format: OutputFormat, quality: int, speed: int) -> bytes:
        """
        Encode pixels with the codec for ``output_format``.

        Raises:
            CompressError: if the codec rejects the buffer or fails mid-encode.
        """
        options = self._save_options(output_format, quality, speed)
        codec = output_format.value
        try:
            pil_img = PILImage.fromarray(np.ascontiguousarray(pixels))
            buffer = BytesIO()
            pil_img.save(buffer, format=output_format.pil_format, **options)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise CompressError(codec, str(exc) or type(exc).__name__) from exc

        data = buffer.getvalue()
        logger.debug(f"Encoded {pil_img.width}x{pil_img.height} {pil_img.mode} as {codec}: {len(data)} bytes {options}")
        return data
