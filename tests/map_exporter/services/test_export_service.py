from __future__ import annotations

import json
from dataclasses import replace

import pytest

from map_exporter.config.model import ExportConfig
from map_exporter.core.data_uri import binary_to_data_uri
from map_exporter.core.presets import Ratio, Resolution
from map_exporter.core.state import MapState
from map_exporter.export import capture
from map_exporter.export.model import ExportRequest, HtmlMapMode
from map_exporter.services import export_service as export_service_module
from map_exporter.services.export_service import ExportService


@pytest.fixture()
def config() -> ExportConfig:
    return ExportConfig(mapbox_export_token="pk.config", html_mode=HtmlMapMode.EDIT)


@pytest.fixture()
def fake_capture(monkeypatch):
    calls = []

    def _capture(figure, options):
        calls.append(options)
        return binary_to_data_uri(b"png-bytes", "image/png")

    monkeypatch.setattr(export_service_module, "capture_to_data_uri", _capture)
    return calls


def test_capture_preview_uses_export_settings(state, sink, config, fake_capture):
    svc = ExportService(config=config, sink=sink)
    state = state.with_export_image_settings(ratio=Ratio.SCREEN, resolution=Resolution.TWO_X)

    captured = svc.capture_preview(state)

    assert fake_capture == [capture.CaptureOptions(width=800, height=600, scale=2)]
    assert captured.ui_state.export_image.image_data_uri.startswith("data:image/png;base64,")
    assert state.ui_state.export_image.image_data_uri is None


def test_capture_preview_skips_zero_area_map(state, sink, config, fake_capture):
    flat = replace(state, map_state=MapState(width=0, height=600))
    assert ExportService(config=config, sink=sink).capture_preview(flat) is flat
    assert fake_capture == []


def test_export_image_after_capture(state, sink, config, fake_capture):
    svc = ExportService(config=config, sink=sink)
    assert svc.export_image(svc.capture_preview(state)) is True
    assert sink.calls == [(b"png-bytes", "image/png", "kepler-gl.png")]


def test_export_html_uses_config_token_and_mode(state, sink, config):
    ExportService(config=config, sink=sink).export_html(state)

    data, mime, filename = sink.calls[0]
    html = data.decode("utf-8")
    assert (mime, filename) == ("text/html", "kepler.gl.html")
    assert '"mapboxApiAccessToken": "pk.config"' in html
    assert '"mode": "EDIT"' in html


def test_export_json_config_only(state, sink, config):
    ExportService(config=config, sink=sink).export_json(state, ExportRequest(has_data=False))
    doc = json.loads(sink.calls[0][0])
    assert "datasets" not in doc


def test_export_data_selected(state, sink, config):
    svc = ExportService(config=config, sink=sink)
    assert svc.export_data(state, ExportRequest(selected_dataset="pts", filtered=True)) is True
    assert [c[2] for c in sink.calls] == ["kepler-gl_Points.csv"]


def test_export_map_returns_bundle_without_delivery(state, sink, config):
    bundle = ExportService(config=config, sink=sink).export_map(state)
    assert bundle.thumbnail is None
    assert sink.calls == []
