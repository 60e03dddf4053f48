from __future__ import annotations

from map_exporter.core.dataset import Field, FieldType
from map_exporter.export.serializers import format_csv


def test_header_and_rows():
    fields = [Field("id", FieldType.INTEGER), Field("name"), Field("score", FieldType.REAL)]
    rows = [[1, "a", 1.5], [2, "b", None]]

    assert format_csv(rows, fields) == "id,name,score\n1,a,1.5\n2,b,\n"


def test_booleans_and_geojson_are_formatted():
    fields = [Field("ok", FieldType.BOOLEAN), Field("geom", FieldType.GEOJSON)]
    rows = [[True, {"type": "Point", "coordinates": [1, 2]}], [False, None]]

    text = format_csv(rows, fields)
    lines = text.splitlines()
    assert lines[0] == "ok,geom"
    assert lines[1] == 'true,"{""type"":""Point"",""coordinates"":[1,2]}"'
    assert lines[2] == "false,"


def test_values_with_commas_are_quoted():
    text = format_csv([["a, b"]], [Field("label")])
    assert text == 'label\n"a, b"\n'


def test_empty_rows_give_header_only():
    assert format_csv([], [Field("a"), Field("b")]) == "a,b\n"
