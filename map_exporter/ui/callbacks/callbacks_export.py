from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, exceptions, no_update

from map_exporter.core.exceptions import MapExporterError
from map_exporter.core.geometry import calculate_export_image_size
from map_exporter.export.model import ExportRequest, HtmlMapMode
from map_exporter.export.orchestrators import export_data_payloads
from map_exporter.services.delivery import DashDownloadSink
from map_exporter.ui.ids import ALL_DATASETS, IDs

if TYPE_CHECKING:
    from map_exporter.ui.config import AppContext

logger = logging.getLogger(__name__)


def register_export_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Output size readout
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.IMAGE_SIZE_TEXT, "children"),
        Input(IDs.Control.RATIO_SELECT, "value"),
        Input(IDs.Control.RESOLUTION_SELECT, "value"),
    )
    def update_image_size(ratio, resolution):
        map_state = ctx.state.map_state
        geometry = calculate_export_image_size(
            map_state.width, map_state.height, ratio, resolution, presets=ctx.presets
        )
        if geometry is None:
            return "Map has no size yet."
        return f"Output: {geometry.image_width} x {geometry.image_height} px"

    # ---------------------------------------------------------
    # Image
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_IMAGE, "data"),
        Output(IDs.Control.EXPORT_STATUS, "children", allow_duplicate=True),
        Input(IDs.Control.EXPORT_IMAGE_BTN, "n_clicks"),
        State(IDs.Control.RATIO_SELECT, "value"),
        State(IDs.Control.RESOLUTION_SELECT, "value"),
        prevent_initial_call=True,
    )
    def export_image(n_clicks, ratio, resolution):
        if not n_clicks:
            raise exceptions.PreventUpdate

        sink = DashDownloadSink()
        service = ctx.export_service(sink)
        state = ctx.state.with_export_image_settings(ratio=ratio, resolution=resolution)

        try:
            state = service.capture_preview(state)
            exported = service.export_image(state)
        except (MapExporterError, ValueError, RuntimeError) as e:
            logger.exception("Image export failed")
            return no_update, f"Image export failed: {e}"

        if not exported:
            return no_update, "Map image could not be captured."
        return sink.last, "Exported map image."

    # ---------------------------------------------------------
    # Map config
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_JSON, "data"),
        Output(IDs.Control.EXPORT_STATUS, "children", allow_duplicate=True),
        Input(IDs.Control.EXPORT_JSON_BTN, "n_clicks"),
        State(IDs.Control.INCLUDE_DATA_SWITCH, "value"),
        prevent_initial_call=True,
    )
    def export_json(n_clicks, include_data):
        if not n_clicks:
            raise exceptions.PreventUpdate

        sink = DashDownloadSink()
        ctx.export_service(sink).export_json(ctx.state, ExportRequest(has_data=bool(include_data)))
        return sink.last, "Exported map config."

    # ---------------------------------------------------------
    # HTML
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_HTML, "data"),
        Output(IDs.Control.EXPORT_STATUS, "children", allow_duplicate=True),
        Input(IDs.Control.EXPORT_HTML_BTN, "n_clicks"),
        State(IDs.Control.HTML_MODE_SELECT, "value"),
        State(IDs.Control.MAPBOX_TOKEN_INPUT, "value"),
        prevent_initial_call=True,
    )
    def export_html(n_clicks, mode, token):
        if not n_clicks:
            raise exceptions.PreventUpdate

        request = ExportRequest(
            user_mapbox_token=token or None,
            mode=HtmlMapMode(mode or HtmlMapMode.READ.value),
        )
        sink = DashDownloadSink()
        ctx.export_service(sink).export_html(ctx.state, request)
        return sink.last, "Exported interactive map."

    # ---------------------------------------------------------
    # Data
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.DATA_DOWNLOAD, "index": ALL}, "data"),
        Output(IDs.Control.EXPORT_STATUS, "children", allow_duplicate=True),
        Input(IDs.Control.EXPORT_DATA_BTN, "n_clicks"),
        State(IDs.Control.DATASET_SELECT, "value"),
        State(IDs.Control.DATA_TYPE_SELECT, "value"),
        State(IDs.Control.FILTERED_SWITCH, "value"),
        prevent_initial_call=True,
    )
    def export_data(n_clicks, selected, data_type, filtered):
        if not n_clicks:
            raise exceptions.PreventUpdate

        targets = [o["id"]["index"] for o in dash.ctx.outputs_list[0]]
        selected_id = None if selected == ALL_DATASETS else selected

        payloads = export_data_payloads(
            ctx.state,
            selected_dataset=selected_id,
            data_type=data_type,
            filtered=bool(filtered),
        )

        sink = DashDownloadSink()
        downloads = {}
        for payload in payloads:
            sink.deliver(payload.data, payload.mime_type, payload.filename)
            downloads[payload.dataset_id] = sink.last

        if not downloads:
            return [no_update] * len(targets), "Nothing to export."

        n = len(downloads)
        status = f"Exported {n} dataset{'s' if n != 1 else ''}."
        return [downloads.get(t, no_update) for t in targets], status
