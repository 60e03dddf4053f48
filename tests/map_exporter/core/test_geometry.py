from __future__ import annotations

import pytest

from map_exporter.core.geometry import ExportGeometry, calculate_export_image_size, scale_from_image_size
from map_exporter.core.presets import PresetRegistry, Ratio, Resolution


@pytest.mark.parametrize("ratio", list(Ratio))
@pytest.mark.parametrize("resolution", list(Resolution))
@pytest.mark.parametrize("map_w,map_h", [(1, 1), (800, 600), (1280, 720), (333, 1000)])
def test_positive_map_gives_positive_image(ratio, resolution, map_w, map_h):
    geometry = calculate_export_image_size(map_w, map_h, ratio, resolution)
    assert geometry is not None
    assert geometry.image_width > 0
    assert geometry.image_height > 0


@pytest.mark.parametrize("ratio", list(Ratio))
@pytest.mark.parametrize("resolution", list(Resolution))
def test_sub_pixel_map_still_gives_positive_image(ratio, resolution):
    geometry = calculate_export_image_size(0.5, 0.5, ratio, resolution)
    assert geometry.image_width >= 1
    assert geometry.image_height >= 1


def test_fractional_map_size_is_scaled_before_rounding():
    # 400.6 x 300.3 at 2x is 801.2 x 600.6
    screen = calculate_export_image_size(400.6, 300.3, Ratio.SCREEN, Resolution.TWO_X)
    assert (screen.image_width, screen.image_height) == (801, 601)

    # 801.2 * 0.75 = 600.9
    four_three = calculate_export_image_size(400.6, 300.3, Ratio.FOUR_BY_THREE, Resolution.TWO_X)
    assert (four_three.image_width, four_three.image_height) == (801, 601)


@pytest.mark.parametrize("map_w,map_h", [(0, 600), (800, 0), (-1, 600), (800, -5), (0, 0)])
def test_zero_area_map_returns_none(map_w, map_h):
    assert calculate_export_image_size(map_w, map_h, Ratio.SCREEN, Resolution.ONE_X) is None


@pytest.mark.parametrize("resolution", list(Resolution))
def test_custom_ratio_leaves_scale_undefined(resolution):
    geometry = calculate_export_image_size(800, 600, Ratio.CUSTOM, resolution)
    assert geometry.scale is None


def test_two_x_then_four_by_three():
    geometry = calculate_export_image_size(800, 500, Ratio.FOUR_BY_THREE, Resolution.TWO_X)
    assert geometry == ExportGeometry(scale=2, image_width=1600, image_height=1200)


def test_sixteen_by_nine_rounds_half_up():
    # 1002 * 0.5625 = 563.625 -> 564; 1000 * 0.5625 = 562.5 -> 563
    assert calculate_export_image_size(1002, 10, Ratio.SIXTEEN_BY_NINE, Resolution.ONE_X).image_height == 564
    assert calculate_export_image_size(1000, 10, Ratio.SIXTEEN_BY_NINE, Resolution.ONE_X).image_height == 563


def test_screen_ratio_keeps_scaled_size():
    geometry = calculate_export_image_size(640, 480, "SCREEN", "TWO_X")
    assert (geometry.image_width, geometry.image_height, geometry.scale) == (1280, 960, 2)


def test_unknown_ids_fall_back_to_defaults():
    geometry = calculate_export_image_size(800, 100, "nope", "also-nope")
    # default ratio 4:3, default resolution 1x
    assert geometry == ExportGeometry(scale=1, image_width=800, image_height=600)


def test_injected_defaults_are_used():
    presets = PresetRegistry(default_ratio=Ratio.SCREEN, default_resolution=Resolution.TWO_X)
    geometry = calculate_export_image_size(300, 200, None, None, presets=presets)
    assert geometry == ExportGeometry(scale=2, image_width=600, image_height=400)


@pytest.mark.parametrize(
    "args",
    [(0, 10, 10, 10), (10, 0, 10, 10), (10, 10, 0, 10), (10, 10, 10, 0), (-3, 10, 10, 10)],
)
def test_scale_from_image_size_is_neutral_for_non_positive(args):
    assert scale_from_image_size(*args) == 1


def test_scale_from_image_size_uses_width_for_landscape():
    assert scale_from_image_size(1600, 900, 800, 600) == 2


def test_scale_from_image_size_uses_height_for_portrait():
    assert scale_from_image_size(600, 1200, 500, 400) == 3


def test_scale_from_image_size_square_uses_width():
    assert scale_from_image_size(1000, 1000, 500, 250) == 2
