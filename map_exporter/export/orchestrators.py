from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..core.data_uri import data_uri_to_binary
from ..core.state import AppState
from .dispatcher import export_dataset, select_datasets
from .html_template import render_standalone_document
from .model import (
    DEFAULT_HTML_NAME,
    DEFAULT_IMAGE_NAME,
    DEFAULT_JSON_NAME,
    MIME_HTML,
    MIME_JSON,
    ExportRequest,
    HtmlMapMode,
    MapBundle,
    NamedPayload,
)
from .schema import MapSchema

if TYPE_CHECKING:
    from ..services.delivery import DeliverySink

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Payload builders (no side effects)
# -------------------------------------------------------------------------

def export_image_payload(state: AppState) -> Optional[NamedPayload]:
    """
    Decode the captured preview image. None if nothing has been captured yet.
    """
    image_data_uri = state.ui_state.export_image.image_data_uri
    if not image_data_uri:
        logger.info("No captured map image in state, nothing to export")
        return None

    decoded = data_uri_to_binary(image_data_uri)
    return NamedPayload(filename=DEFAULT_IMAGE_NAME, mime_type=decoded.mime_type, data=decoded.data)


def export_config_payload(state: AppState, has_full_data: bool) -> NamedPayload:
    document = MapSchema.save(state) if has_full_data else MapSchema.get_config_to_save(state)
    return NamedPayload(
        filename=DEFAULT_JSON_NAME,
        mime_type=MIME_JSON,
        data=MapSchema.to_json(document),
    )


def resolve_access_token(user_token: Optional[str], fallback_token: Optional[str]) -> Optional[str]:
    """User token wins only when it is a non-empty string."""
    if isinstance(user_token, str) and user_token != "":
        return user_token
    return fallback_token


def export_standalone_document_payload(
    state: AppState,
    *,
    user_token: Optional[str] = None,
    fallback_token: Optional[str] = None,
    mode: HtmlMapMode = HtmlMapMode.READ,
    include_plotlyjs="cdn",
) -> NamedPayload:
    document = {
        **MapSchema.save(state),
        "mapboxApiAccessToken": resolve_access_token(user_token, fallback_token),
        "mode": HtmlMapMode(mode).value,
    }
    html = render_standalone_document(document, include_plotlyjs=include_plotlyjs)
    return NamedPayload(filename=DEFAULT_HTML_NAME, mime_type=MIME_HTML, data=html.encode("utf-8"))


def export_data_payloads(
    state: AppState,
    *,
    selected_dataset: Optional[str] = None,
    data_type=None,
    filtered: bool = True,
) -> List[NamedPayload]:
    """
    One payload per selected dataset, in selection order.

    An empty list means nothing was exported (no datasets, or no serializer
    for the data type); it is logged, not raised.
    """
    selected = select_datasets(state.vis_state.datasets, selected_dataset)
    if not selected:
        logger.warning(
            "No dataset selected for export",
            extra={"selected_dataset": selected_dataset},
        )
        return []

    payloads: List[NamedPayload] = []
    for dataset in selected:
        payload = export_dataset(dataset, data_type, filtered)
        if payload is not None:
            payloads.append(payload)

    if not payloads:
        logger.warning(
            "Nothing exported",
            extra={"selected_dataset": selected_dataset, "data_type": str(data_type)},
        )
    return payloads


def export_map_bundle(state: AppState) -> MapBundle:
    image_data_uri = state.ui_state.export_image.image_data_uri
    return MapBundle(
        map=MapSchema.save(state),
        info=state.vis_state.map_info.to_dict(),
        thumbnail=data_uri_to_binary(image_data_uri) if image_data_uri else None,
    )


# -------------------------------------------------------------------------
# Delivering exporters
# -------------------------------------------------------------------------

def _deliver(sink: DeliverySink, payload: NamedPayload) -> None:
    logger.info(
        "Delivering export",
        extra={"export_filename": payload.filename, "mime_type": payload.mime_type, "size": len(payload.data)},
    )
    sink.deliver(payload.data, payload.mime_type, payload.filename)


def export_image(state: AppState, request: ExportRequest, sink: DeliverySink) -> bool:
    payload = export_image_payload(state)
    if payload is None:
        return False
    _deliver(sink, payload)
    return True


def export_json(state: AppState, request: ExportRequest, sink: DeliverySink) -> bool:
    _deliver(sink, export_config_payload(state, request.has_data))
    return True


def export_html(
    state: AppState,
    request: ExportRequest,
    sink: DeliverySink,
    *,
    fallback_token: Optional[str] = None,
    include_plotlyjs="cdn",
) -> bool:
    payload = export_standalone_document_payload(
        state,
        user_token=request.user_mapbox_token,
        fallback_token=fallback_token,
        mode=request.mode,
        include_plotlyjs=include_plotlyjs,
    )
    _deliver(sink, payload)
    return True


def export_data(state: AppState, request: ExportRequest, sink: DeliverySink) -> bool:
    """Deliver each dataset independently; False when nothing was exported."""
    payloads = export_data_payloads(
        state,
        selected_dataset=request.selected_dataset,
        data_type=request.data_type,
        filtered=request.filtered,
    )
    for payload in payloads:
        _deliver(sink, payload)
    return bool(payloads)


EXPORTERS: Dict[str, Callable[..., bool]] = {
    "image": export_image,
    "json": export_json,
    "html": export_html,
    "data": export_data,
}
