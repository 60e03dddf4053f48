from __future__ import annotations

import json
from typing import Any, Dict, Union

from .capture import build_map_figure_from_document
from .model import HtmlMapMode

CONFIG_SCRIPT_ID = "map-config"


def _embed_json(document: Dict[str, Any]) -> str:
    text = json.dumps(document, ensure_ascii=False, default=str)
    # keep the payload from closing the script tag early
    return text.replace("</", "<\\/")


def render_standalone_document(
    document: Dict[str, Any],
    include_plotlyjs: Union[bool, str] = "cdn",
) -> str:
    """
    Render a saved-map document into one interactive HTML page.

    Reads 'mode' from the document; the chart is editable only in EDIT
    mode. 'mapboxApiAccessToken' travels with the embedded document for
    viewers that draw Mapbox-hosted tiles. The full document is embedded as
    <script type="application/json" id="map-config"> so it can be reloaded.

    :param document: MapSchema.save output plus token and mode
    :param include_plotlyjs: passed to Figure.to_html ("cdn" or True to inline)
    :return: HTML text
    """
    mode = HtmlMapMode(document.get("mode") or HtmlMapMode.READ.value)
    figure = build_map_figure_from_document(document)

    html = figure.to_html(
        full_html=True,
        include_plotlyjs=include_plotlyjs,
        config={
            "editable": mode is HtmlMapMode.EDIT,
            "displaylogo": False,
            "scrollZoom": True,
        },
    )

    embedded = (
        f'<script type="application/json" id="{CONFIG_SCRIPT_ID}">'
        f"{_embed_json(document)}</script>\n"
    )
    head, sep, tail = html.rpartition("</body>")
    if not sep:
        return html + embedded
    return head + embedded + sep + tail
