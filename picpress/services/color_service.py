import cv2
import numpy as np

from ..errors import InvalidFormatError
from ..models.image import Image, PixelLayout
from ..models.output_format import OutputFormat


class ColorService:
    """
    Converts decoded pixels into the layout each encoder expects.
    Always returns a fresh array; the Image handed in is never modified.
    """

    @staticmethod
    def _gray8(image: Image) -> np.ndarray:
        """Single 8-bit gray plane for the gray layouts."""
        if image.layout is PixelLayout.L:
            return np.ascontiguousarray(image.pixels)
        if image.layout is PixelLayout.LA:
            return np.ascontiguousarray(image.pixels[:, :, 0])
        # 16-bit gray keeps its high byte.
        return (image.pixels >> 8).astype(np.uint8)

    def to_rgb8(self, image: Image) -> np.ndarray:
        """
        Opaque (H, W, 3) uint8 RGB. Alpha is truncated, not composited:
        the colour channels are copied through untouched.
        """
        if image.layout is PixelLayout.RGB:
            return image.pixels.copy()
        if image.layout is PixelLayout.RGBA:
            return np.ascontiguousarray(image.pixels[:, :, :3])
        return cv2.cvtColor(self._gray8(image), cv2.COLOR_GRAY2RGB)

    def to_rgba8(self, image: Image) -> np.ndarray:
        """(H, W, 4) uint8 RGBA; a missing alpha channel is filled with 255."""
        if image.layout is PixelLayout.RGBA:
            return image.pixels.copy()
        if image.layout is PixelLayout.RGB:
            return cv2.cvtColor(image.pixels, cv2.COLOR_RGB2RGBA)
        if image.layout is PixelLayout.LA:
            rgb = cv2.cvtColor(self._gray8(image), cv2.COLOR_GRAY2RGB)
            return np.dstack((rgb, image.pixels[:, :, 1]))
        return cv2.cvtColor(self._gray8(image), cv2.COLOR_GRAY2RGBA)

    def to_encodable(self, image: Image, target_format: OutputFormat) -> np.ndarray:
        """
        Pixels in the layout required by ``target_format``:
        RGB8 for JPEG and WebP, RGBA8 for AVIF, native pixels for PNG.
        """
        if target_format in (OutputFormat.JPEG, OutputFormat.WEBP):
            return self.to_rgb8(image)
        if target_format is OutputFormat.AVIF:
            return self.to_rgba8(image)
        if target_format is OutputFormat.PNG:
            return image.pixels
        raise InvalidFormatError(str(target_format))
