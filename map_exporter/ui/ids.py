from __future__ import annotations

__all__ = ["IDs", "data_download_id"]


class IDs:
    class Control:
        MAP_GRAPH = "map-graph"

        # Image export
        RATIO_SELECT = "ratio-select"
        RESOLUTION_SELECT = "resolution-select"
        IMAGE_SIZE_TEXT = "image-size-text"
        EXPORT_IMAGE_BTN = "export-image-btn"
        DOWNLOAD_IMAGE = "download-image"

        # Config export
        INCLUDE_DATA_SWITCH = "include-data-switch"
        EXPORT_JSON_BTN = "export-json-btn"
        DOWNLOAD_JSON = "download-json"

        # HTML export
        HTML_MODE_SELECT = "html-mode-select"
        MAPBOX_TOKEN_INPUT = "mapbox-token-input"
        EXPORT_HTML_BTN = "export-html-btn"
        DOWNLOAD_HTML = "download-html"

        # Data export
        DATASET_SELECT = "export-dataset-select"
        DATA_TYPE_SELECT = "data-type-select"
        FILTERED_SWITCH = "filtered-switch"
        EXPORT_DATA_BTN = "export-data-btn"

        # Status bar
        EXPORT_STATUS = "export-status"

    class Pattern:
        DATA_DOWNLOAD = "download-data"


ALL_DATASETS = "__all__"


def data_download_id(dataset_id: str) -> dict:
    return {"type": IDs.Pattern.DATA_DOWNLOAD, "index": dataset_id}
