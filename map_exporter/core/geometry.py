from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .presets import DEFAULT_PRESETS, PresetRegistry, round_half_up


@dataclass(frozen=True)
class ExportGeometry:
    """
    Final output size of an image export.

    scale is None exactly when the ratio preset is CUSTOM, since a custom
    output is not a simple multiple of the source surface.
    """
    scale: Optional[float]
    image_width: int
    image_height: int


def calculate_export_image_size(
    map_width: float,
    map_height: float,
    ratio_id=None,
    resolution_id=None,
    presets: PresetRegistry = DEFAULT_PRESETS,
) -> Optional[ExportGeometry]:
    """
    Derive output pixel dimensions and the scale factor for an image export.

    The resolution preset is applied to the raw map size first, then the ratio
    preset is applied to the scaled size. Fractional map sizes are scaled as
    they are; the final dimensions are rounded half-up and clamped to at
    least one pixel. Unknown ids fall back to the registry
    defaults.

    :param map_width: width of the rendered map surface
    :param map_height: height of the rendered map surface
    :param ratio_id: Ratio member or its string value
    :param resolution_id: Resolution member or its string value
    :param presets: registry holding the presets and their defaults
    :return: ExportGeometry, or None when the map surface has no area
    """
    if map_width <= 0 or map_height <= 0:
        return None

    ratio = presets.resolve_ratio(ratio_id)
    resolution = presets.resolve_resolution(resolution_id)

    scaled_width, scaled_height = resolution.compute(map_width, map_height)
    image_width, image_height = ratio.compute(scaled_width, scaled_height)

    return ExportGeometry(
        scale=None if ratio.is_custom else resolution.scale,
        image_width=max(1, round_half_up(image_width)),
        image_height=max(1, round_half_up(image_height)),
    )


def scale_from_image_size(image_w: float, image_h: float, map_w: float, map_h: float) -> float:
    """
    Scale converting on-screen overlay coordinates into export-image
    coordinates. Measured along the image's longer axis (width when the image
    is landscape or square).

    Returns 1 when any dimension is <= 0.
    """
    if any(d <= 0 for d in (image_w, image_h, map_w, map_h)):
        return 1

    if image_w >= image_h:
        return image_w / map_w
    return image_h / map_h
