from __future__ import annotations

import logging
from typing import Optional

import plotly.graph_objs as go

from map_exporter.config.model import ExportConfig
from map_exporter.core.geometry import calculate_export_image_size
from map_exporter.core.state import AppState
from map_exporter.export import orchestrators
from map_exporter.export.capture import build_map_figure, capture_options_from_geometry, capture_to_data_uri
from map_exporter.export.model import ExportRequest, MapBundle
from map_exporter.services.delivery import DeliverySink

logger = logging.getLogger(__name__)


class ExportService:
    """
    Handles capturing the map preview and running exports against a sink.
    Stateless: every call works on the AppState snapshot it is given.
    """

    def __init__(
            self,
            *,
            config: ExportConfig,
            sink: DeliverySink,
    ) -> None:
        self._config = config
        self._sink = sink
        self._presets = config.presets()

    @property
    def sink(self) -> DeliverySink:
        return self._sink

    def capture_preview(self, state: AppState, figure: Optional[go.Figure] = None) -> AppState:
        """
        Rasterize the map with the state's ratio/resolution settings and
        return a new state holding the image data URI. The state is returned
        unchanged when the map surface has no area.
        """
        settings = state.ui_state.export_image
        geometry = calculate_export_image_size(
            state.map_state.width,
            state.map_state.height,
            settings.ratio,
            settings.resolution,
            presets=self._presets,
        )
        if geometry is None:
            logger.warning(
                "Map surface has no area, skipping capture",
                extra={"width": state.map_state.width, "height": state.map_state.height},
            )
            return state

        if figure is None:
            figure = build_map_figure(state)

        data_uri = capture_to_data_uri(figure, capture_options_from_geometry(geometry))
        return state.with_image_data_uri(data_uri)

    def export_image(self, state: AppState, request: Optional[ExportRequest] = None) -> bool:
        return orchestrators.export_image(state, request or ExportRequest(), self._sink)

    def export_json(self, state: AppState, request: Optional[ExportRequest] = None) -> bool:
        return orchestrators.export_json(state, request or ExportRequest(), self._sink)

    def export_html(self, state: AppState, request: Optional[ExportRequest] = None) -> bool:
        request = request or ExportRequest(mode=self._config.html_mode)
        return orchestrators.export_html(
            state,
            request,
            self._sink,
            fallback_token=self._config.mapbox_export_token,
            include_plotlyjs=self._config.html_include_plotlyjs,
        )

    def export_data(self, state: AppState, request: Optional[ExportRequest] = None) -> bool:
        exported = orchestrators.export_data(state, request or ExportRequest(), self._sink)
        if not exported:
            logger.info("Data export produced no files")
        return exported

    def export_map(self, state: AppState) -> MapBundle:
        return orchestrators.export_map_bundle(state)
