from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

Size = Tuple[float, float]


class Resolution(str, Enum):
    ONE_X = "ONE_X"
    TWO_X = "TWO_X"


class Ratio(str, Enum):
    SCREEN = "SCREEN"
    CUSTOM = "CUSTOM"
    FOUR_BY_THREE = "FOUR_BY_THREE"
    SIXTEEN_BY_NINE = "SIXTEEN_BY_NINE"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _same_size(width: float, height: float) -> Size:
    return width, height


def _fixed_ratio(factor: float) -> Callable[[float, float], Size]:
    # width is kept, height follows the ratio
    def compute(width: float, height: float) -> Size:
        return width, round_half_up(width * factor)

    return compute


def _multiply(scale: float) -> Callable[[float, float], Size]:
    def compute(width: float, height: float) -> Size:
        return width * scale, height * scale

    return compute


@dataclass(frozen=True)
class ResolutionPreset:
    """
    Named scaling rule, e.g. 1x or 2x.

    - id: Resolution value
    - label: text shown in the export controls
    - scale: DPI-equivalent multiplier carried into ExportGeometry
    - sizing: (base_width, base_height) -> (scaled_width, scaled_height)
    """
    id: Resolution
    label: str
    scale: float
    sizing: Callable[[float, float], Size] = field(compare=False, repr=False)

    def compute(self, width: float, height: float) -> Size:
        return self.sizing(width, height)


@dataclass(frozen=True)
class RatioPreset:
    """
    Named aspect-ratio rule. CUSTOM passes dimensions through unchanged and
    leaves the export scale undefined.
    """
    id: Ratio
    label: str
    sizing: Callable[[float, float], Size] = field(compare=False, repr=False)
    hidden: bool = False

    @property
    def is_custom(self) -> bool:
        return self.id is Ratio.CUSTOM

    def compute(self, width: float, height: float) -> Size:
        return self.sizing(width, height)


RESOLUTION_PRESETS: Tuple[ResolutionPreset, ...] = (
    ResolutionPreset(Resolution.ONE_X, "1x", 1, _multiply(1)),
    ResolutionPreset(Resolution.TWO_X, "2x", 2, _multiply(2)),
)

RATIO_PRESETS: Tuple[RatioPreset, ...] = (
    RatioPreset(Ratio.SCREEN, "Original Screen", _same_size),
    RatioPreset(Ratio.CUSTOM, "Custom", _same_size, hidden=True),
    RatioPreset(Ratio.FOUR_BY_THREE, "4:3", _fixed_ratio(0.75)),
    RatioPreset(Ratio.SIXTEEN_BY_NINE, "16:9", _fixed_ratio(0.5625)),
)


class PresetRegistry:
    """
    Finite set of resolution and ratio presets plus the defaults used when a
    requested id is unknown.

    Lookups accept either the enum member or its string value, so ids coming
    straight from JSON or a Dash control resolve the same way.
    """

    def __init__(
        self,
        resolutions: Tuple[ResolutionPreset, ...] = RESOLUTION_PRESETS,
        ratios: Tuple[RatioPreset, ...] = RATIO_PRESETS,
        *,
        default_resolution: Resolution = Resolution.ONE_X,
        default_ratio: Ratio = Ratio.FOUR_BY_THREE,
    ) -> None:
        self._resolutions: Dict[str, ResolutionPreset] = {p.id.value: p for p in resolutions}
        self._ratios: Dict[str, RatioPreset] = {p.id.value: p for p in ratios}

        if default_resolution.value not in self._resolutions:
            raise ValueError(f"Default resolution '{default_resolution.value}' is not registered")
        if default_ratio.value not in self._ratios:
            raise ValueError(f"Default ratio '{default_ratio.value}' is not registered")

        self.default_resolution = default_resolution
        self.default_ratio = default_ratio

    @staticmethod
    def _key(preset_id) -> Optional[str]:
        if preset_id is None:
            return None
        return preset_id.value if isinstance(preset_id, Enum) else str(preset_id)

    def resolve_resolution(self, resolution_id) -> ResolutionPreset:
        found = self._resolutions.get(self._key(resolution_id))
        return found or self._resolutions[self.default_resolution.value]

    def resolve_ratio(self, ratio_id) -> RatioPreset:
        found = self._ratios.get(self._key(ratio_id))
        return found or self._ratios[self.default_ratio.value]

    def resolutions(self) -> Tuple[ResolutionPreset, ...]:
        return tuple(self._resolutions.values())

    def ratios(self, include_hidden: bool = False) -> Tuple[RatioPreset, ...]:
        return tuple(p for p in self._ratios.values() if include_hidden or not p.hidden)


DEFAULT_PRESETS = PresetRegistry()
