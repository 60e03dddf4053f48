"""
Core domain layer: presets, export geometry, data URI codec, datasets,
filtering and the application state snapshot
"""

from .data_uri import DataUriPayload, binary_to_data_uri, data_uri_to_binary
from .dataset import Dataset, Field, FieldType
from .geometry import ExportGeometry, calculate_export_image_size, scale_from_image_size
from .presets import DEFAULT_PRESETS, PresetRegistry, Ratio, Resolution
from .state import AppState

__all__ = [
    "AppState",
    "DataUriPayload",
    "Dataset",
    "DEFAULT_PRESETS",
    "ExportGeometry",
    "Field",
    "FieldType",
    "PresetRegistry",
    "Ratio",
    "Resolution",
    "binary_to_data_uri",
    "calculate_export_image_size",
    "data_uri_to_binary",
    "scale_from_image_size",
]
