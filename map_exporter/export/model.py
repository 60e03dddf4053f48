from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.data_uri import DataUriPayload
from ..core.presets import Ratio, Resolution

DEFAULT_IMAGE_NAME = "kepler-gl.png"
DEFAULT_HTML_NAME = "kepler.gl.html"
DEFAULT_JSON_NAME = "keplergl.json"
DEFAULT_DATA_NAME = "kepler-gl"

MIME_JSON = "application/json"
MIME_HTML = "text/html"
MIME_CSV = "text/csv"


class ExportDataType(str, Enum):
    CSV = "csv"


class HtmlMapMode(str, Enum):
    READ = "READ"
    EDIT = "EDIT"


@dataclass(frozen=True)
class ExportRequest:
    """
    Options for a single export action, built by the caller.

    i.e. 'export the selected dataset, filtered, as CSV'
    """
    selected_dataset: Optional[str] = None
    data_type: str = ExportDataType.CSV.value
    filtered: bool = True
    ratio: Optional[Ratio] = None
    resolution: Optional[Resolution] = None
    user_mapbox_token: Optional[str] = None
    mode: HtmlMapMode = HtmlMapMode.READ
    has_data: bool = True


@dataclass(frozen=True)
class NamedPayload:
    """
    Terminal artifact handed to a delivery sink.

    dataset_id is set on per-dataset data exports so callers can route each
    file without relying on its (possibly colliding) filename.
    """
    filename: str
    mime_type: str
    data: bytes
    dataset_id: Optional[str] = None


@dataclass(frozen=True)
class MapBundle:
    """
    Non-delivered export of the whole map, consumed programmatically.
    """
    map: Dict[str, Any]
    info: Dict[str, Any]
    thumbnail: Optional[DataUriPayload] = None
