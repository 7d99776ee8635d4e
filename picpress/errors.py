"""
Error taxonomy shared by every layer.

Each error kind is its own exception class so callers (the CLI and the
C adapter in particular) can branch on the kind instead of parsing messages.
Every class carries the stable integer status code the C adapter returns.
"""
from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Union


class StatusCode(IntEnum):
    """Stable status codes returned by ``picpress.c_api.compress_img_c``."""
    OK = 0
    PARAMETER_ERROR = -1
    INVALID_FORMAT = -2
    INFER_FORMAT_ERROR = -3
    INVALID_METHOD = -4
    IMAGE_ERROR = -5
    IO_ERROR = -6
    COMPRESS_ERROR = -7
    OTHER_ERROR = -8


class PicPressError(Exception):
    """Base class for every error raised by picpress."""
    status_code: StatusCode = StatusCode.OTHER_ERROR


class ParameterError(PicPressError):
    status_code = StatusCode.PARAMETER_ERROR

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"Invalid parameter: {details}")


class InvalidFormatError(PicPressError):
    status_code = StatusCode.INVALID_FORMAT

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unsupported format: {value}")


class InferFormatError(PicPressError):
    status_code = StatusCode.INFER_FORMAT_ERROR

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Cannot infer the output format from {self.path}")


class InvalidMethodError(PicPressError):
    status_code = StatusCode.INVALID_METHOD

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unsupported resize method: {value}")


class DecodeError(PicPressError):
    """The input could not be read or is not an image the codecs understand."""
    status_code = StatusCode.IMAGE_ERROR

    def __init__(self, path: Union[str, Path], details: str):
        self.path = Path(path)
        self.details = details
        super().__init__(f"Cannot open the picture {self.path}: {details}")


class IoError(PicPressError):
    status_code = StatusCode.IO_ERROR

    def __init__(self, path: Union[str, Path], details: str):
        self.path = Path(path)
        self.details = details
        super().__init__(f"Cannot write output file {self.path}: {details}")


class CompressError(PicPressError):
    """The encoder rejected the pixel buffer or failed mid-encode."""
    status_code = StatusCode.COMPRESS_ERROR

    def __init__(self, format: str, details: str):
        self.format = format
        self.details = details
        super().__init__(f"Failed to compress the picture. format = {format}: {details}")
