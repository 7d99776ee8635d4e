"""
Compression Pipeline
Decodes one image, resizes it if asked, and re-encodes it to the chosen format.

Stages run strictly in order and the first failure aborts the run:
decode -> resolve format -> create output -> resize -> normalise + encode -> commit.
The output path is only replaced once the encoded bytes are fully written.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..config import DEFAULT_QUALITY, DEFAULT_SPEED
from ..models.compress_options import CompressOptions, CompressResult
from ..repositories.image_repository import ImageRepository
from ..services.color_service import ColorService
from ..services.encoder_service import EncoderService
from ..services.format_service import FormatService
from ..services.geometry_service import GeometryService

logger = logging.getLogger(__name__)


def compress_with_options(
    options: CompressOptions,
    *,
    image_repository: ImageRepository = ImageRepository(),
    format_service: FormatService = FormatService(),
    geometry_service: GeometryService = GeometryService(),
    color_service: ColorService = ColorService(),
    encoder_service: EncoderService = EncoderService(),
) -> CompressResult:
    """
    Run the whole pipeline for one set of options.

    Args:
        options: Validated input/output paths and encoding parameters.
        image_repository: Decoding and output-file handling.
        format_service: Output codec resolution.
        geometry_service: Resize policy.
        color_service: Per-codec pixel layout conversion.
        encoder_service: Codec dispatch.

    Returns:
        CompressResult: What was written and where.

    Raises:
        PicPressError: the subclass matching the first stage that failed.
    """
    output_path = Path(options.output_path)

    # 1. Decode
    image = image_repository.load(options.input_path)

    # 2. Resolve the output codec before the output path is touched
    output_format = format_service.resolve(output_path, options.format)
    options.validate(output_format)
    logger.debug(f"Output format for {output_path}: {output_format.value}")

    # 3. Create output (temporary sibling, renamed on success)
    with image_repository.open_output(output_path) as pending:
        # 4. Resize
        image = geometry_service.plan_resize(image, options.resize, options.method)

        # 5. Normalise colour and encode
        pixels = color_service.to_encodable(image, output_format)
        data = encoder_service.encode(pixels, output_format, options.quality, options.speed)
        pending.write(data)

    result = CompressResult(
        output_path=output_path,
        format=output_format,
        width=image.width,
        height=image.height,
        bytes_written=pending.bytes_written,
    )
    logger.info(
        f"Compressed {options.input_path} -> {output_path} "
        f"({output_format.value}, {result.width}x{result.height}, {result.bytes_written} bytes)"
    )
    return result


def compress(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    format: Optional[str] = None,
    quality: int = DEFAULT_QUALITY,
    resize: Optional[Tuple[int, int]] = None,
    method: Optional[str] = None,
    speed: int = DEFAULT_SPEED,
) -> CompressResult:
    """
    Convert/compress ``input_path`` into ``output_path``.

    Args:
        input_path: Image to read.
        output_path: Where to write; its extension picks the format unless ``format`` is given.
        format: Explicit output format (jpeg/jpg, png, webp, avif), overrides the extension.
        quality: 1-100; ignored for PNG.
        resize: Optional (width, height) target box.
        method: "fit" (default), "fill" or "exact"; only used with ``resize``.
        speed: AVIF encoder speed 1-10, lower is slower and smaller.
    """
    options = CompressOptions(
        input_path=input_path,
        output_path=output_path,
        format=format,
        quality=quality,
        resize=resize,
        method=method,
        speed=speed,
    )
    return compress_with_options(options)
