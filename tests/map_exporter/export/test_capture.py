from __future__ import annotations

import plotly.graph_objs as go

from map_exporter.core.data_uri import data_uri_to_binary
from map_exporter.core.geometry import ExportGeometry
from map_exporter.export.capture import (
    CaptureOptions,
    build_map_figure,
    build_map_figure_from_document,
    capture_options_from_geometry,
    capture_to_data_uri,
)


def test_options_divide_out_scale():
    opts = capture_options_from_geometry(ExportGeometry(scale=2, image_width=1600, image_height=1200))
    assert opts == CaptureOptions(width=800, height=600, scale=2)


def test_options_for_custom_ratio_use_final_size():
    opts = capture_options_from_geometry(ExportGeometry(scale=None, image_width=1000, image_height=700))
    assert opts == CaptureOptions(width=1000, height=700, scale=1)


def test_figure_has_trace_per_coordinate_dataset(state):
    fig = build_map_figure(state)

    assert [t.name for t in fig.data] == ["Points", "Other"]
    assert all(t.type == "scattermap" for t in fig.data)
    assert fig.layout.map.center.lat == state.map_state.latitude
    assert fig.layout.map.style == "carto-positron"


def test_datasets_without_coordinates_are_skipped():
    doc = {
        "datasets": [{"data": {"id": "t", "label": "table", "fields": [{"name": "a"}], "allData": [[1]]}}],
        "config": {},
    }
    assert len(build_map_figure_from_document(doc).data) == 0


def test_capture_encodes_image_bytes(monkeypatch):
    seen = {}

    def fake_to_image(self, **kwargs):
        seen.update(kwargs)
        return b"\x89PNGdata"

    monkeypatch.setattr(go.Figure, "to_image", fake_to_image)

    uri = capture_to_data_uri(go.Figure(), CaptureOptions(width=400, height=300, scale=2))

    assert seen == {"format": "png", "width": 400, "height": 300, "scale": 2}
    decoded = data_uri_to_binary(uri)
    assert decoded.mime_type == "image/png"
    assert decoded.data == b"\x89PNGdata"
