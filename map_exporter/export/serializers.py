from __future__ import annotations

import json
from typing import Any, List, Sequence

import pandas as pd

from ..core.dataset import Field, FieldType


def _format_value(value: Any, field_type: FieldType) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)) or field_type is FieldType.GEOJSON:
        return json.dumps(value, separators=(",", ":"))
    return value


def format_csv(rows: Sequence[Sequence[Any]], fields: Sequence[Field]) -> str:
    """
    Serialize rows to CSV text: a header of field names, then one line per row.

    Empty values become empty cells, booleans are written as true/false and
    geojson or other nested values are JSON-encoded.

    :param rows: rows aligned with fields
    :param fields: column descriptors
    :return: CSV text with '\\n' line endings
    """
    columns: List[str] = [f.name for f in fields]
    formatted = [
        [_format_value(v, f.type) for v, f in zip(row, fields)]
        for row in rows
    ]
    # object dtype keeps ints as ints and strings untouched
    frame = pd.DataFrame(formatted, columns=columns, dtype=object)
    return frame.to_csv(index=False, lineterminator="\n")
