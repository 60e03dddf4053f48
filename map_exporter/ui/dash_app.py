from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppContext
from map_exporter.config.loader import load_app_state, load_export_config
from map_exporter.ui.callbacks.callbacks_export import register_export_callbacks
from map_exporter.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config + initial state
    export_config = load_export_config(config_root)
    state = load_app_state(export_config, config_root)
    if not state.vis_state.datasets:
        logger.warning("No datasets were loaded from config", extra={"config_root": str(config_root)})

    # 2) App Context
    ctx = AppContext(
        config_root=config_root,
        export_config=export_config,
        state=state,
        presets=export_config.presets(),
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )

    app.title = export_config.ui_title
    app.layout = build_layout(ctx)

    register_export_callbacks(app, ctx)

    return app
