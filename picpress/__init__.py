"""picpress: convert and compress raster images to JPEG, PNG, WebP or AVIF."""

__version__ = "1.0.0"

from .errors import (
    CompressError,
    DecodeError,
    InferFormatError,
    InvalidFormatError,
    InvalidMethodError,
    IoError,
    ParameterError,
    PicPressError,
    StatusCode,
)
from .models.output_format import OutputFormat
from .pipeline.compress import compress, compress_with_options

__all__ = [
    "compress",
    "compress_with_options",
    "OutputFormat",
    "StatusCode",
    "PicPressError",
    "ParameterError",
    "InvalidFormatError",
    "InferFormatError",
    "InvalidMethodError",
    "DecodeError",
    "IoError",
    "CompressError",
]
