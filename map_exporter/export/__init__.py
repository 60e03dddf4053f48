"""
Export layer: payload model, dataset dispatch, serializers and the
image/json/html/data orchestrators
"""

from .dispatcher import export_dataset, select_datasets
from .model import ExportDataType, ExportRequest, HtmlMapMode, MapBundle, NamedPayload
from .orchestrators import (
    EXPORTERS,
    export_config_payload,
    export_data_payloads,
    export_image_payload,
    export_map_bundle,
    export_standalone_document_payload,
)

__all__ = [
    "EXPORTERS",
    "ExportDataType",
    "ExportRequest",
    "HtmlMapMode",
    "MapBundle",
    "NamedPayload",
    "export_config_payload",
    "export_data_payloads",
    "export_dataset",
    "export_image_payload",
    "export_map_bundle",
    "export_standalone_document_payload",
    "select_datasets",
]
