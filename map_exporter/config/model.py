from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from map_exporter.core.presets import DEFAULT_PRESETS, PresetRegistry, Ratio, Resolution
from map_exporter.export.model import HtmlMapMode


@dataclass
class DatasetConfig:
    """
    Parsed config entry for a single dataset.
    """
    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def id(self) -> str:
        return self.raw.get("id") or self.source_path.stem

    @property
    def label(self) -> str:
        return self.raw.get("label", self.id)

    @property
    def file(self) -> Path:
        return Path(self.raw["file"])

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Path, index: int) -> DatasetConfig:
        return cls(raw=raw, source_path=source_path, index=index)


@dataclass
class ExportConfig:
    """
    Global export settings, from global.json plus env overrides.

    - default_ratio / default_resolution: used when a request names an unknown preset
    - mapbox_export_token: fallback token embedded in HTML exports
    - html_mode: default mode for HTML exports
    - html_include_plotlyjs: "cdn" or True (inline plotly.js)
    - export_dir: folder used by LocalFileSink
    - preview_width / preview_height: map surface size used for captures
    """
    ui_title: str = "Map Exporter"
    default_ratio: Ratio = Ratio.FOUR_BY_THREE
    default_resolution: Resolution = Resolution.ONE_X
    mapbox_export_token: Optional[str] = None
    html_mode: HtmlMapMode = HtmlMapMode.READ
    html_include_plotlyjs: Any = "cdn"
    export_dir: Optional[Path] = None
    preview_width: int = 800
    preview_height: int = 600
    datasets: List[DatasetConfig] = field(default_factory=list)
    filters: List[Dict[str, Any]] = field(default_factory=list)
    map_state: Dict[str, Any] = field(default_factory=dict)
    map_style: Optional[str] = None
    title: str = ""
    description: str = ""

    def presets(self) -> PresetRegistry:
        if (
            self.default_ratio is DEFAULT_PRESETS.default_ratio
            and self.default_resolution is DEFAULT_PRESETS.default_resolution
        ):
            return DEFAULT_PRESETS
        return PresetRegistry(
            default_ratio=self.default_ratio,
            default_resolution=self.default_resolution,
        )
