from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .dataset import Dataset
from .presets import Ratio, Resolution


@dataclass(frozen=True)
class MapInfo:
    title: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "description": self.description}


@dataclass(frozen=True)
class MapState:
    """Viewport of the rendered map, plus the on-screen surface size."""
    latitude: float = 37.75
    longitude: float = -122.45
    zoom: float = 9
    bearing: float = 0
    pitch: float = 0
    width: int = 800
    height: int = 600

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "zoom": self.zoom,
            "bearing": self.bearing,
            "pitch": self.pitch,
        }


@dataclass(frozen=True)
class MapStyle:
    # plotly map (MapLibre) style name, e.g. carto-positron or open-street-map
    style_type: str = "carto-positron"

    def to_dict(self) -> Dict[str, Any]:
        return {"styleType": self.style_type}


@dataclass(frozen=True)
class VisState:
    """
    Visual configuration and data.

    - datasets: ordered id -> Dataset; iteration order is export order
    - layers / filters / interaction_config: kepler-style config dicts
    """
    datasets: Dict[str, Dataset] = field(default_factory=dict)
    layers: List[Dict[str, Any]] = field(default_factory=list)
    filters: List[Dict[str, Any]] = field(default_factory=list)
    interaction_config: Dict[str, Any] = field(default_factory=dict)
    layer_blending: str = "normal"
    map_info: MapInfo = field(default_factory=MapInfo)


@dataclass(frozen=True)
class ExportImageState:
    ratio: Ratio = Ratio.FOUR_BY_THREE
    resolution: Resolution = Resolution.ONE_X
    legend: bool = False
    image_data_uri: Optional[str] = None
    processing: bool = False


@dataclass(frozen=True)
class UiState:
    export_image: ExportImageState = field(default_factory=ExportImageState)


@dataclass(frozen=True)
class AppState:
    """
    Snapshot of application state read by the exporters.

    Exporters never mutate it; helpers below return new snapshots.
    """
    vis_state: VisState = field(default_factory=VisState)
    map_state: MapState = field(default_factory=MapState)
    map_style: MapStyle = field(default_factory=MapStyle)
    ui_state: UiState = field(default_factory=UiState)

    def with_image_data_uri(self, image_data_uri: Optional[str]) -> AppState:
        export_image = replace(self.ui_state.export_image, image_data_uri=image_data_uri, processing=False)
        return replace(self, ui_state=replace(self.ui_state, export_image=export_image))

    def with_export_image_settings(self, *, ratio=None, resolution=None, legend=None) -> AppState:
        current = self.ui_state.export_image
        export_image = replace(
            current,
            ratio=Ratio(ratio) if ratio is not None else current.ratio,
            resolution=Resolution(resolution) if resolution is not None else current.resolution,
            legend=current.legend if legend is None else bool(legend),
            # settings changed, previous capture is stale
            image_data_uri=None,
        )
        return replace(self, ui_state=replace(self.ui_state, export_image=export_image))
