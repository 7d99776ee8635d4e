from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..errors import InvalidMethodError, ParameterError


class ResizeMethod(Enum):
    FIT = "fit"      # scale to fit inside the box, keep aspect ratio
    FILL = "fill"    # scale to cover the box, crop the excess (centred)
    EXACT = "exact"  # scale each axis independently

    @classmethod
    def parse(cls, value: str | ResizeMethod | None) -> ResizeMethod:
        """
        Map a method name onto a ResizeMethod; ``None`` means the default, fit.

        Raises:
            InvalidMethodError: if the name is not fit, fill or exact.
        """
        if value is None:
            return cls.FIT
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidMethodError(value) from None


@dataclass(frozen=True)
class ResizeSpec:
    """Target box plus the policy used to reach it."""
    width: int
    height: int
    method: ResizeMethod = ResizeMethod.FIT

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ParameterError(f"resize dimensions must be positive, got {self.width}x{self.height}")


def parse_dimensions(text: str) -> Tuple[int, int]:
    """
    Parse ``WIDTHxHEIGHT`` (e.g. ``800x600``) into a (width, height) pair.

    Raises:
        ParameterError: if the text is not two positive integers joined by 'x'.
    """
    parts = text.strip().lower().split("x")
    if len(parts) != 2:
        raise ParameterError("Dimensions must be in WIDTHxHEIGHT format")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        raise ParameterError(f"Dimensions must be integers, got {text!r}") from None
    if width <= 0 or height <= 0:
        raise ParameterError(f"Dimensions must be positive, got {text!r}")
    return width, height
