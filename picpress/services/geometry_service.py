from __future__ import annotations

import logging
from typing import Optional, Tuple

import cv2

from ..errors import ParameterError
from ..models.image import Image
from ..models.resize_spec import ResizeMethod, ResizeSpec

logger = logging.getLogger(__name__)

# One filter for every mode so fit/fill/exact outputs look alike.
RESAMPLING_FILTER = cv2.INTER_LANCZOS4


class GeometryService:
    """
    Resizes Image objects according to a ResizeSpec.
    Works only on in-memory pixels; no I/O here.
    """

    @staticmethod
    def _scaled_size(width: int, height: int, target_w: int, target_h: int, cover: bool) -> Tuple[int, int]:
        """
        Size of (width, height) scaled uniformly to fit inside (cover=False)
        or cover (cover=True) the target box. Never below 1 px per side.
        """
        w_ratio = target_w / width
        h_ratio = target_h / height
        ratio = max(w_ratio, h_ratio) if cover else min(w_ratio, h_ratio)
        return max(round(width * ratio), 1), max(round(height * ratio), 1)

    @staticmethod
    def _resample(image: Image, width: int, height: int) -> Image:
        if (width, height) == image.size:
            return image.with_pixels(image.pixels.copy())
        resized = cv2.resize(image.pixels, (width, height), interpolation=RESAMPLING_FILTER)
        return image.with_pixels(resized)

    def fit(self, image: Image, width: int, height: int) -> Image:
        new_w, new_h = self._scaled_size(image.width, image.height, width, height, cover=False)
        return self._resample(image, new_w, new_h)

    def fill(self, image: Image, width: int, height: int) -> Image:
        new_w, new_h = self._scaled_size(image.width, image.height, width, height, cover=True)
        scaled = self._resample(image, new_w, new_h)

        # Centre crop the overflow.
        left = (new_w - width) // 2
        top = (new_h - height) // 2
        cropped = scaled.pixels[top:top + height, left:left + width].copy()
        return scaled.with_pixels(cropped)

    def exact(self, image: Image, width: int, height: int) -> Image:
        return self._resample(image, width, height)

    def apply(self, image: Image, spec: ResizeSpec) -> Image:
        handlers = {
            ResizeMethod.FIT: self.fit,
            ResizeMethod.FILL: self.fill,
            ResizeMethod.EXACT: self.exact,
        }
        resized = handlers[spec.method](image, spec.width, spec.height)
        logger.debug(
            f"Resized {image.width}x{image.height} -> {resized.width}x{resized.height} "
            f"({spec.method.value})"
        )
        return resized

    def plan_resize(
        self,
        image: Image,
        target: Optional[Tuple[int, int]] = None,
        method: str | ResizeMethod | None = None,
    ) -> Image:
        """
        Apply the optional resize request to an image.

        Args:
            image: Decoded image.
            target: Optional (width, height) box. ``None`` leaves the image as is.
            method: "fit" (default), "fill" or "exact". Ignored without a target.

        Returns:
            Image: The input itself when no target is given, otherwise a new Image.

        Raises:
            InvalidMethodError: if ``method`` is not a known resize mode.
            ParameterError: if a target dimension is not positive.
        """
        if target is None:
            return image
        if len(target) != 2:
            raise ParameterError(f"resize target must be (width, height), got {target!r}")
        spec = ResizeSpec(int(target[0]), int(target[1]), ResizeMethod.parse(method))
        return self.apply(image, spec)
