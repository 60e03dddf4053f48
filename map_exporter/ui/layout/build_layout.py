from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from map_exporter.export.capture import build_map_figure
from map_exporter.ui.ids import IDs
from map_exporter.ui.layout.build_export_panel import build_export_panel

if TYPE_CHECKING:
    from map_exporter.ui.config import AppContext


def build_layout(ctx: AppContext):
    state = ctx.state

    if not state.vis_state.datasets:
        map_body = dbc.CardBody("No datasets configured. Add a dataset config under datasets/.")
    else:
        map_body = dbc.CardBody(
            dcc.Graph(
                id=IDs.Control.MAP_GRAPH,
                figure=build_map_figure(state),
                style={"width": f"{state.map_state.width}px", "height": f"{state.map_state.height}px"},
                config={"displaylogo": False},
            )
        )

    return dbc.Container(
        [
            dbc.NavbarSimple(brand=ctx.export_config.ui_title, color="primary", dark=True, className="mb-3"),
            dbc.Row(
                [
                    dbc.Col(build_export_panel(ctx), md=3),
                    dbc.Col(dbc.Card(map_body, className="mex-map-card"), md=9),
                ]
            ),
            html.Div(id=IDs.Control.EXPORT_STATUS, className="mex-status small text-muted mt-2"),
        ],
        fluid=True,
    )
