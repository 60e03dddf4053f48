from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from map_exporter.export.model import ExportDataType, HtmlMapMode
from map_exporter.ui.ids import ALL_DATASETS, IDs, data_download_id

if TYPE_CHECKING:
    from map_exporter.ui.config import AppContext


def _section(title: str, children) -> html.Div:
    return html.Div(
        [html.H6(title, className="text-uppercase text-muted small mt-3"), *children],
    )


def build_export_panel(ctx: AppContext) -> dbc.Card:
    """
    Sidebar with one section per export type:
    - image: ratio + resolution, shows the resulting pixel size
    - map config: with or without row data
    - html: read/edit mode + optional access token
    - data: dataset, format, filtered rows
    """
    state = ctx.state
    presets = ctx.presets
    settings = state.ui_state.export_image

    image_section = _section(
        "Image",
        [
            html.Label("Ratio", className="form-label"),
            dbc.RadioItems(
                id=IDs.Control.RATIO_SELECT,
                options=[{"label": p.label, "value": p.id.value} for p in presets.ratios()],
                value=settings.ratio.value,
                inline=True,
            ),
            html.Label("Resolution", className="form-label mt-2"),
            dbc.RadioItems(
                id=IDs.Control.RESOLUTION_SELECT,
                options=[{"label": p.label, "value": p.id.value} for p in presets.resolutions()],
                value=settings.resolution.value,
                inline=True,
            ),
            html.Div(id=IDs.Control.IMAGE_SIZE_TEXT, className="text-muted small mt-1"),
            dbc.Button("Export image", id=IDs.Control.EXPORT_IMAGE_BTN, color="primary", size="sm", className="mt-2"),
            dcc.Download(id=IDs.Control.DOWNLOAD_IMAGE),
        ],
    )

    json_section = _section(
        "Map",
        [
            dbc.Switch(id=IDs.Control.INCLUDE_DATA_SWITCH, label="Include data", value=True),
            dbc.Button("Export map config", id=IDs.Control.EXPORT_JSON_BTN, color="primary", size="sm"),
            dcc.Download(id=IDs.Control.DOWNLOAD_JSON),
        ],
    )

    html_section = _section(
        "Interactive HTML",
        [
            dbc.RadioItems(
                id=IDs.Control.HTML_MODE_SELECT,
                options=[
                    {"label": "Read only", "value": HtmlMapMode.READ.value},
                    {"label": "Editable", "value": HtmlMapMode.EDIT.value},
                ],
                value=ctx.export_config.html_mode.value,
                inline=True,
            ),
            dbc.Input(
                id=IDs.Control.MAPBOX_TOKEN_INPUT,
                placeholder="Mapbox access token (optional)",
                type="text",
                size="sm",
                className="mt-2",
            ),
            dbc.Button("Export HTML", id=IDs.Control.EXPORT_HTML_BTN, color="primary", size="sm", className="mt-2"),
            dcc.Download(id=IDs.Control.DOWNLOAD_HTML),
        ],
    )

    dataset_options = [{"label": "All datasets", "value": ALL_DATASETS}] + [
        {"label": ds.label, "value": ds.id} for ds in state.vis_state.datasets.values()
    ]

    data_section = _section(
        "Data",
        [
            dcc.Dropdown(
                id=IDs.Control.DATASET_SELECT,
                options=dataset_options,
                value=ALL_DATASETS,
                clearable=False,
            ),
            dbc.RadioItems(
                id=IDs.Control.DATA_TYPE_SELECT,
                options=[{"label": t.value.upper(), "value": t.value} for t in ExportDataType],
                value=ExportDataType.CSV.value,
                inline=True,
                className="mt-2",
            ),
            dbc.Switch(id=IDs.Control.FILTERED_SWITCH, label="Filtered rows only", value=True),
            dbc.Button("Export data", id=IDs.Control.EXPORT_DATA_BTN, color="primary", size="sm"),
            # One download target per dataset so each file is delivered on its own
            html.Div([dcc.Download(id=data_download_id(ds_id)) for ds_id in state.vis_state.datasets]),
        ],
    )

    return dbc.Card(
        [
            dbc.CardHeader("Export"),
            dbc.CardBody([image_section, json_section, html_section, data_section]),
        ],
        className="mex-sidebar",
    )
