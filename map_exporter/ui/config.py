from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from map_exporter.config.model import ExportConfig
from map_exporter.core.presets import PresetRegistry
from map_exporter.core.state import AppState
from map_exporter.services.delivery import DeliverySink
from map_exporter.services.export_service import ExportService


@dataclass
class AppContext:
    config_root: Path
    export_config: ExportConfig
    state: AppState
    presets: Optional[PresetRegistry] = None

    def validate(self) -> None:
        """Ensure the context is complete before the app starts."""
        if self.presets is None:
            raise RuntimeError("AppContext.presets must be initialized.")

    def export_service(self, sink: DeliverySink) -> ExportService:
        return ExportService(config=self.export_config, sink=sink)
