from __future__ import annotations

import pytest

from map_exporter.core.dataset import Dataset, Field, FieldType
from map_exporter.core.filtering import apply_filters


@pytest.fixture()
def dataset() -> Dataset:
    return Dataset(
        id="pts",
        label="Points",
        all_rows=[[1, "park"], [5, "cafe"], [9, "park"], [None, "museum"]],
        fields=[Field("magnitude", FieldType.REAL), Field("category")],
        filtered_idx=[],
    )


def test_no_filters_keeps_every_row(dataset):
    assert apply_filters(dataset, []).filtered_idx == [0, 1, 2, 3]


def test_range_filter_is_inclusive_and_drops_missing(dataset):
    flt = {"dataId": "pts", "name": "magnitude", "type": "range", "value": [1, 5]}
    assert apply_filters(dataset, [flt]).filtered_idx == [0, 1]


def test_multi_select_and_range_are_combined(dataset):
    filters = [
        {"dataId": "pts", "name": "magnitude", "type": "range", "value": [0, 10]},
        {"dataId": ["pts"], "name": "category", "type": "multiSelect", "value": ["park"]},
    ]
    assert apply_filters(dataset, filters).filtered_idx == [0, 2]


def test_filters_for_other_datasets_are_ignored(dataset):
    flt = {"dataId": "other", "name": "magnitude", "type": "range", "value": [100, 200]}
    assert apply_filters(dataset, [flt]).filtered_idx == [0, 1, 2, 3]


def test_unknown_field_is_ignored(dataset):
    flt = {"dataId": "pts", "name": "missing", "type": "range", "value": [0, 1]}
    assert apply_filters(dataset, [flt]).filtered_idx == [0, 1, 2, 3]


def test_original_dataset_is_untouched(dataset):
    apply_filters(dataset, [{"dataId": "pts", "name": "category", "type": "select", "value": "cafe"}])
    assert dataset.filtered_idx == []
