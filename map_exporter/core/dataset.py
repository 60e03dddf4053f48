from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd


class FieldType(str, Enum):
    REAL = "real"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    GEOJSON = "geojson"


@dataclass(frozen=True)
class Field:
    """
    Column descriptor.

    - name: column name, also the CSV header
    - type: FieldType used when formatting cell values
    - format: optional display/parse format (e.g. a timestamp pattern)
    """
    name: str
    type: FieldType = FieldType.STRING
    format: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type.value, "format": self.format}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Field:
        return cls(
            name=data["name"],
            type=FieldType(data.get("type", FieldType.STRING.value)),
            format=data.get("format", ""),
        )


def infer_field_type(series: pd.Series) -> FieldType:
    """Map a pandas dtype onto the closest FieldType."""
    dtype = series.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return FieldType.BOOLEAN
    if pd.api.types.is_integer_dtype(dtype):
        return FieldType.INTEGER
    if pd.api.types.is_float_dtype(dtype):
        return FieldType.REAL
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return FieldType.TIMESTAMP

    sample = series.dropna()
    if not sample.empty and isinstance(sample.iloc[0], dict):
        return FieldType.GEOJSON
    return FieldType.STRING


def _to_python(value: Any) -> Any:
    # numpy scalars -> builtins, NaN/NaT -> None
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        return value
    if pd.isna(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class Dataset:
    """
    One dataset held by the vis state.

    - id: key in the dataset collection
    - label: human-readable name, used in exported filenames
    - all_rows: every row, each aligned with `fields`
    - fields: ordered column descriptors
    - filtered_idx: indices into all_rows visible under the active filters
    """
    id: str
    label: str
    all_rows: List[List[Any]] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    filtered_idx: List[int] = field(default_factory=list)

    @classmethod
    def from_dataframe(
        cls,
        dataset_id: str,
        df: pd.DataFrame,
        label: Optional[str] = None,
    ) -> Dataset:
        """
        Build a Dataset from a frame; field types are inferred from dtypes and
        every row starts out visible.
        """
        fields = [Field(name=str(col), type=infer_field_type(df[col])) for col in df.columns]
        rows = [[_to_python(v) for v in row] for row in df.itertuples(index=False, name=None)]
        return cls(
            id=dataset_id,
            label=label or dataset_id,
            all_rows=rows,
            fields=fields,
            filtered_idx=list(range(len(rows))),
        )

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def __len__(self) -> int:
        return len(self.all_rows)

    def field_index(self, name: str) -> int:
        try:
            return self.field_names.index(name)
        except ValueError:
            raise KeyError(f"Field '{name}' not found in dataset '{self.id}'")

    def to_dataframe(self, rows: Optional[Sequence[Sequence[Any]]] = None) -> pd.DataFrame:
        return pd.DataFrame(list(self.all_rows if rows is None else rows), columns=self.field_names)

    def filtered_rows(self) -> List[List[Any]]:
        """
        Rows referenced by filtered_idx, in filter order (not row order).

        Raises ValueError for an index outside 0..len(all_rows)-1; negative
        indices are never wrapped around.
        """
        n_rows = len(self.all_rows)
        bad = [i for i in self.filtered_idx if not 0 <= i < n_rows]
        if bad:
            raise ValueError(
                f"Dataset '{self.id}' has filtered indices outside 0..{n_rows - 1}: {bad[:5]}"
            )
        return [self.all_rows[i] for i in self.filtered_idx]

    def with_filtered_idx(self, filtered_idx: Sequence[int]) -> Dataset:
        return replace(self, filtered_idx=[int(i) for i in filtered_idx])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "fields": [f.to_dict() for f in self.fields],
            "allData": [list(r) for r in self.all_rows],
        }
