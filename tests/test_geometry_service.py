from __future__ import annotations

import numpy as np
import pytest

from picpress.errors import InvalidMethodError, ParameterError
from picpress.models.image import Image, PixelLayout
from picpress.models.resize_spec import ResizeMethod, ResizeSpec
from picpress.services.geometry_service import GeometryService

from conftest import gradient_rgb


def _image(width: int, height: int, layout: PixelLayout = PixelLayout.RGB) -> Image:
    rgb = gradient_rgb(width, height)
    if layout is PixelLayout.RGBA:
        alpha = np.full((height, width), 200, dtype=np.uint8)
        return Image(pixels=np.dstack((rgb, alpha)), layout=layout)
    if layout is PixelLayout.L:
        return Image(pixels=rgb[:, :, 0].copy(), layout=layout)
    if layout is PixelLayout.I16:
        return Image(pixels=rgb[:, :, 0].astype(np.uint16) * 257, layout=layout)
    return Image(pixels=rgb, layout=layout)


def test_no_target_returns_input_unchanged() -> None:
    image = _image(120, 80)
    result = GeometryService().plan_resize(image)
    assert result is image
    assert result.size == (120, 80)


def test_no_target_ignores_method() -> None:
    image = _image(120, 80)
    assert GeometryService().plan_resize(image, None, "bogus") is image


@pytest.mark.parametrize("size", [(400, 200), (50, 300), (17, 17), (1000, 10)])
def test_exact_always_matches_target(size) -> None:
    result = GeometryService().plan_resize(_image(*size), (200, 100), "exact")
    assert result.size == (200, 100)


def test_fit_scales_longer_side_to_box() -> None:
    result = GeometryService().plan_resize(_image(400, 200), (100, 100), "fit")
    assert result.size == (100, 50)


def test_fit_is_the_default_method() -> None:
    result = GeometryService().plan_resize(_image(400, 200), (100, 100))
    assert result.size == (100, 50)


def test_fit_upscales_to_box() -> None:
    result = GeometryService().plan_resize(_image(50, 100), (300, 300), "fit")
    assert result.size == (150, 300)


def test_fit_keeps_at_least_one_pixel() -> None:
    result = GeometryService().plan_resize(_image(1000, 2), (10, 10), "fit")
    assert result.size == (10, 1)


@pytest.mark.parametrize("size", [(400, 200), (200, 400), (100, 100), (33, 71)])
def test_fill_always_matches_target(size) -> None:
    result = GeometryService().plan_resize(_image(*size), (100, 100), "fill")
    assert result.size == (100, 100)


def test_fill_crops_from_centre() -> None:
    # Left half black, right half white; a centred crop keeps both halves.
    pixels = np.zeros((100, 300, 3), dtype=np.uint8)
    pixels[:, 150:] = 255
    image = Image(pixels=pixels, layout=PixelLayout.RGB)

    result = GeometryService().plan_resize(image, (100, 100), "fill")

    assert result.size == (100, 100)
    assert result.pixels[50, 5].max() < 10
    assert result.pixels[50, 95].min() > 245


@pytest.mark.parametrize("layout", [PixelLayout.RGB, PixelLayout.RGBA, PixelLayout.L, PixelLayout.I16])
def test_resize_preserves_layout_and_dtype(layout: PixelLayout) -> None:
    image = _image(80, 40, layout)
    result = GeometryService().plan_resize(image, (40, 40), "fill")
    assert result.layout is layout
    assert result.pixels.dtype == image.pixels.dtype
    assert result.pixels.ndim == image.pixels.ndim


def test_resize_does_not_mutate_input() -> None:
    image = _image(80, 40)
    before = image.pixels.copy()
    GeometryService().plan_resize(image, (40, 40), "exact")
    np.testing.assert_array_equal(image.pixels, before)


def test_unknown_method_is_rejected() -> None:
    with pytest.raises(InvalidMethodError) as excinfo:
        GeometryService().plan_resize(_image(10, 10), (5, 5), "stretch")
    assert excinfo.value.value == "stretch"


def test_zero_target_is_rejected() -> None:
    with pytest.raises(ParameterError):
        GeometryService().plan_resize(_image(10, 10), (0, 5), "fit")


def test_resize_method_parse() -> None:
    assert ResizeMethod.parse(None) is ResizeMethod.FIT
    assert ResizeMethod.parse("fill") is ResizeMethod.FILL
    assert ResizeMethod.parse(ResizeMethod.EXACT) is ResizeMethod.EXACT


def test_apply_with_spec() -> None:
    spec = ResizeSpec(30, 20, ResizeMethod.EXACT)
    assert GeometryService().apply(_image(90, 90), spec).size == (30, 20)
