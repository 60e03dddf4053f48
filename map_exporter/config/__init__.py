from .loader import load_app_state, load_export_config
from .model import DatasetConfig, ExportConfig

__all__ = ["DatasetConfig", "ExportConfig", "load_app_state", "load_export_config"]
