from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from ..config import DEFAULT_QUALITY, DEFAULT_SPEED
from ..errors import ParameterError
from .output_format import OutputFormat


@dataclass(frozen=True)
class CompressOptions:
    """
    Everything one compression run needs. Built by the CLI and the C adapter
    after they have validated or clamped their raw inputs.
    """
    input_path: Union[str, Path]
    output_path: Union[str, Path]
    format: Optional[str] = None
    quality: int = DEFAULT_QUALITY
    resize: Optional[Tuple[int, int]] = None
    method: Optional[str] = None
    speed: int = DEFAULT_SPEED

    def validate(self, output_format: OutputFormat) -> None:
        """Range checks; speed only matters (and is only checked) for AVIF."""
        if not 1 <= self.quality <= 100:
            raise ParameterError("The quality must be between 1-100.")
        if output_format is OutputFormat.AVIF and not 1 <= self.speed <= 10:
            raise ParameterError("The speed must be between 1-10.")


@dataclass(frozen=True)
class CompressResult:
    output_path: Path
    format: OutputFormat
    width: int
    height: int
    bytes_written: int
