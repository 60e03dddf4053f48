from __future__ import annotations

from typing import List, Tuple

import pytest

from map_exporter.core.data_uri import binary_to_data_uri
from map_exporter.core.dataset import Dataset, Field, FieldType
from map_exporter.core.state import AppState, MapInfo, VisState
from map_exporter.services.delivery import DeliverySink

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class RecordingSink(DeliverySink):
    def __init__(self) -> None:
        self.calls: List[Tuple[bytes, str, str]] = []

    def deliver(self, data: bytes, mime_type: str, filename: str) -> None:
        self.calls.append((data, mime_type, filename))


def make_points(ds_id: str = "pts", label: str = "Points") -> Dataset:
    return Dataset(
        id=ds_id,
        label=label,
        all_rows=[[37.77, -122.41, 3], [37.80, -122.27, 8], [37.33, -121.89, 5]],
        fields=[Field("lat", FieldType.REAL), Field("lng", FieldType.REAL), Field("magnitude", FieldType.INTEGER)],
        filtered_idx=[1],
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def state() -> AppState:
    return AppState(
        vis_state=VisState(
            datasets={"pts": make_points(), "other": make_points("other", "Other")},
            layers=[{"id": "layer-1", "type": "point", "config": {"dataId": "pts"}}],
            filters=[{"dataId": "pts", "name": "magnitude", "type": "range", "value": [6, 10]}],
            map_info=MapInfo(title="Bay", description="points"),
        )
    )


@pytest.fixture()
def captured_state(state: AppState) -> AppState:
    return state.with_image_data_uri(binary_to_data_uri(PNG_BYTES, "image/png"))


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES
