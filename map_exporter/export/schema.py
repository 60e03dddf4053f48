from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from ..core.state import AppState

CURRENT_VERSION = "v1"
APP_NAME = "map-exporter"


def now_iso() -> str:
    """Return a current UTC timestamp in ISO-8601 format."""
    return datetime.now(timezone.utc).isoformat()


class MapSchema:
    """
    Serializes AppState into the saved-map document.

    Two shapes:
    - get_config_to_save: visual configuration only (no row data)
    - save: datasets with all rows + config + info
    """

    version = CURRENT_VERSION

    @classmethod
    def get_config_to_save(cls, state: AppState) -> Dict[str, Any]:
        vis = state.vis_state
        return {
            "version": cls.version,
            "config": {
                "visState": {
                    "filters": [dict(f) for f in vis.filters],
                    "layers": [dict(layer) for layer in vis.layers],
                    "interactionConfig": dict(vis.interaction_config),
                    "layerBlending": vis.layer_blending,
                },
                "mapState": state.map_state.to_dict(),
                "mapStyle": state.map_style.to_dict(),
            },
        }

    @classmethod
    def save(cls, state: AppState) -> Dict[str, Any]:
        saved = cls.get_config_to_save(state)
        return {
            "datasets": [
                {"version": cls.version, "data": ds.to_dict()}
                for ds in state.vis_state.datasets.values()
            ],
            "config": saved["config"],
            "info": {
                "app": APP_NAME,
                "created_at": now_iso(),
                **state.vis_state.map_info.to_dict(),
            },
        }

    @staticmethod
    def to_json(document: Dict[str, Any]) -> bytes:
        return json.dumps(document, ensure_ascii=False, default=str).encode("utf-8")
