from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import plotly.graph_objs as go

from ..core.data_uri import binary_to_data_uri
from ..core.geometry import ExportGeometry
from ..core.state import AppState
from .schema import MapSchema

logger = logging.getLogger(__name__)

LAT_NAMES = ("lat", "latitude")
LNG_NAMES = ("lng", "lon", "long", "longitude")


@dataclass(frozen=True)
class CaptureOptions:
    """
    Arguments for Figure.to_image. Output pixels are width*scale x height*scale.
    """
    width: int
    height: int
    scale: float = 1
    format: str = "png"


def capture_options_from_geometry(geometry: ExportGeometry) -> CaptureOptions:
    if geometry.scale is None:
        # custom ratio: final size is given directly
        return CaptureOptions(width=geometry.image_width, height=geometry.image_height, scale=1)

    return CaptureOptions(
        width=max(1, round(geometry.image_width / geometry.scale)),
        height=max(1, round(geometry.image_height / geometry.scale)),
        scale=geometry.scale,
    )


def _coordinate_columns(field_names: List[str]) -> Optional[Tuple[int, int]]:
    lowered = [n.lower() for n in field_names]
    lat = next((i for i, n in enumerate(lowered) if n in LAT_NAMES), None)
    lng = next((i for i, n in enumerate(lowered) if n in LNG_NAMES), None)
    if lat is None or lng is None:
        return None
    return lat, lng


def build_map_figure_from_document(document: Dict[str, Any]) -> go.Figure:
    """
    Build a plotly map figure from a saved-map document (MapSchema.save).

    One Scattermap trace per dataset with latitude/longitude fields;
    datasets without coordinates are skipped. The base map is drawn by
    MapLibre with a token-free style, so no access token is needed here.
    """
    config = document.get("config", {})
    map_state = config.get("mapState", {})
    map_style = config.get("mapStyle", {})
    info = document.get("info", {})

    fig = go.Figure()
    for entry in document.get("datasets", []):
        data = entry.get("data", entry)
        names = [f["name"] for f in data.get("fields", [])]
        cols = _coordinate_columns(names)
        if cols is None:
            logger.info("Dataset has no coordinate fields, not drawn", extra={"dataset": data.get("id")})
            continue

        lat_i, lng_i = cols
        rows = data.get("allData", [])
        fig.add_trace(
            go.Scattermap(
                lat=[r[lat_i] for r in rows],
                lon=[r[lng_i] for r in rows],
                mode="markers",
                name=data.get("label") or data.get("id"),
            )
        )

    map_layout: Dict[str, Any] = {
        "style": map_style.get("styleType", "carto-positron"),
        "center": {
            "lat": map_state.get("latitude", 0),
            "lon": map_state.get("longitude", 0),
        },
        "zoom": map_state.get("zoom", 1),
        "bearing": map_state.get("bearing", 0),
        "pitch": map_state.get("pitch", 0),
    }
    fig.update_layout(
        map=map_layout,
        margin={"l": 0, "r": 0, "t": 30 if info.get("title") else 0, "b": 0},
        title=info.get("title") or None,
        showlegend=True,
    )
    return fig


def build_map_figure(state: AppState) -> go.Figure:
    return build_map_figure_from_document(MapSchema.save(state))


def capture_to_data_uri(figure: go.Figure, options: CaptureOptions) -> str:
    """
    Rasterize a figure into a base64 data URI (requires kaleido).
    """
    logger.info(
        "Capturing map image",
        extra={"width": options.width, "height": options.height, "scale": options.scale},
    )
    img_bytes = figure.to_image(
        format=options.format,
        width=options.width,
        height=options.height,
        scale=options.scale,
    )
    return binary_to_data_uri(img_bytes, f"image/{options.format}")
