"""
C-callable entry point.

``compress_img_c`` takes the primitive arguments a C caller has (nullable
byte strings and unsigned integers), clamps them into the ranges the pipeline
accepts and returns an integer status code instead of raising:

    int compress_img_c(const char* input, const char* output, const char* format,
                       uint8_t quality, uint32_t width, uint32_t height,
                       int method, uint8_t speed);

Status codes (stable, see ``StatusCode``):

     0  OK
    -1  PARAMETER_ERROR      null/undecodable path or format string
    -2  INVALID_FORMAT
    -3  INFER_FORMAT_ERROR
    -4  INVALID_METHOD
    -5  IMAGE_ERROR          input could not be decoded
    -6  IO_ERROR
    -7  COMPRESS_ERROR
    -8  OTHER_ERROR          anything uncategorised

``COMPRESS_IMG_C`` is the matching ctypes prototype and ``compress_img_c_ptr``
a callback object that can be passed to native code as a function pointer.
"""

import ctypes
import logging
from enum import IntEnum
from typing import Optional, Tuple, Union

from .errors import PicPressError, StatusCode
from .models.compress_options import CompressOptions
from .models.resize_spec import ResizeMethod
from .pipeline.compress import compress_with_options

logger = logging.getLogger(__name__)

FALLBACK_QUALITY = 100
FALLBACK_SPEED = 4

CString = Union[bytes, str, None]


class ResizeStyle(IntEnum):
    """Numeric resize method codes used across the C boundary."""
    DEFAULT = 0
    FILL = 1
    FIT = 2
    EXACT = 3


_STYLE_TO_METHOD = {
    ResizeStyle.DEFAULT: ResizeMethod.FIT,
    ResizeStyle.FILL: ResizeMethod.FILL,
    ResizeStyle.FIT: ResizeMethod.FIT,
    ResizeStyle.EXACT: ResizeMethod.EXACT,
}


# ─── Clamping rules ──────────────────────────────────────────────────
def clamp_quality(quality: int) -> int:
    return quality if 1 <= quality <= 100 else FALLBACK_QUALITY


def clamp_speed(speed: int) -> int:
    return speed if 1 <= speed <= 10 else FALLBACK_SPEED


def method_from_code(code: int) -> ResizeMethod:
    """Unknown codes fall back to fit."""
    try:
        return _STYLE_TO_METHOD[ResizeStyle(code)]
    except ValueError:
        return ResizeMethod.FIT


def resize_from_dimensions(width: int, height: int) -> Optional[Tuple[int, int]]:
    """A zero in either axis means no resize."""
    if width == 0 or height == 0:
        return None
    return width, height


def _decode_c_string(value: CString) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return value.decode("utf-8")


def build_options(
    input: CString,
    output: CString,
    format: CString,
    quality: int,
    width: int,
    height: int,
    method: int,
    speed: int,
) -> Optional[CompressOptions]:
    """
    Convert raw C arguments into CompressOptions.
    Returns None when a path is missing or any string is not valid UTF-8.
    """
    try:
        input_path = _decode_c_string(input)
        output_path = _decode_c_string(output)
        format_name = _decode_c_string(format)
    except UnicodeDecodeError:
        return None
    if not input_path or not output_path:
        return None

    return CompressOptions(
        input_path=input_path,
        output_path=output_path,
        format=format_name,
        quality=clamp_quality(quality),
        resize=resize_from_dimensions(width, height),
        method=method_from_code(method).value,
        speed=clamp_speed(speed),
    )


def compress_img_c(
    input: CString,
    output: CString,
    format: CString,
    quality: int,
    width: int,
    height: int,
    method: int,
    speed: int,
) -> int:
    options = build_options(input, output, format, quality, width, height, method, speed)
    if options is None:
        logger.error("compress_img_c: input and output must be non-null UTF-8 paths")
        return int(StatusCode.PARAMETER_ERROR)

    try:
        compress_with_options(options)
    except PicPressError as exc:
        logger.error(f"compress_img_c failed ({exc.status_code.name}): {exc}")
        return int(exc.status_code)
    except Exception:
        # Nothing may propagate into a C caller's stack.
        logger.exception("compress_img_c failed with an unexpected error")
        return int(StatusCode.OTHER_ERROR)
    return int(StatusCode.OK)


COMPRESS_IMG_C = ctypes.CFUNCTYPE(
    ctypes.c_int,
    ctypes.c_char_p,
    ctypes.c_char_p,
    ctypes.c_char_p,
    ctypes.c_uint8,
    ctypes.c_uint32,
    ctypes.c_uint32,
    ctypes.c_int,
    ctypes.c_uint8,
)

# Keep a module-level reference so the callback is not garbage collected
# while native code holds the pointer.
compress_img_c_ptr = COMPRESS_IMG_C(compress_img_c)
