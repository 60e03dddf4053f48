from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

import numpy as np
import pandas as pd

from .dataset import Dataset

logger = logging.getLogger(__name__)

RANGE = "range"
SELECT = "select"
MULTI_SELECT = "multiSelect"


def _mask_for(df: pd.DataFrame, flt: Dict[str, Any]) -> pd.Series:
    name = flt.get("name")
    if name not in df.columns:
        logger.warning(
            "Filter references unknown field, ignoring",
            extra={"field": name, "dataset": flt.get("dataId")},
        )
        return pd.Series(True, index=df.index)

    column = df[name]
    value = flt.get("value")
    ftype = flt.get("type", RANGE)

    if ftype == RANGE:
        lo, hi = value
        numeric = pd.to_numeric(column, errors="coerce")
        return numeric.between(lo, hi).fillna(False)

    if ftype in (SELECT, MULTI_SELECT):
        allowed = value if isinstance(value, (list, tuple, set)) else [value]
        return column.isin(list(allowed))

    logger.warning("Unsupported filter type, ignoring", extra={"filter_type": ftype})
    return pd.Series(True, index=df.index)


def apply_filters(dataset: Dataset, filters: Iterable[Dict[str, Any]]) -> Dataset:
    """
    Recompute filtered_idx for a dataset.

    Filters are dicts like {"dataId": ..., "name": ..., "type": "range",
    "value": [lo, hi]}; those aimed at other datasets are skipped. All
    applicable filters are AND-ed.

    :param dataset: dataset to filter
    :param filters: filter dicts from the vis state
    :return: a copy of the dataset with filtered_idx set
    """
    df = dataset.to_dataframe()
    mask = pd.Series(True, index=df.index)

    for flt in filters:
        data_id = flt.get("dataId")
        if isinstance(data_id, (list, tuple)):
            applies = dataset.id in data_id
        else:
            applies = data_id == dataset.id
        if not applies:
            continue
        mask &= _mask_for(df, flt)

    idx = np.flatnonzero(mask.to_numpy(dtype=bool))
    return dataset.with_filtered_idx(idx.tolist())
