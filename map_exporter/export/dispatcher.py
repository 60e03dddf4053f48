from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.dataset import Dataset, Field
from .model import DEFAULT_DATA_NAME, MIME_CSV, ExportDataType, NamedPayload
from .serializers import format_csv

logger = logging.getLogger(__name__)

RowSerializer = Callable[[Sequence[Sequence], Sequence[Field]], str]

# data type -> (serializer, mime type, file extension)
SERIALIZERS: Dict[str, Tuple[RowSerializer, str, str]] = {
    ExportDataType.CSV.value: (format_csv, MIME_CSV, "csv"),
}


def select_datasets(datasets: Mapping[str, Dataset], selected_id: Optional[str]) -> List[Dataset]:
    """
    Pick the datasets to export.

    :param datasets: id -> Dataset collection
    :param selected_id: id of a single dataset, or None/unknown for all
    :return: [datasets[selected_id]] if it exists, otherwise every dataset in
        the collection's order. Empty means there is nothing to export.
    """
    if selected_id is not None and selected_id in datasets:
        return [datasets[selected_id]]
    return list(datasets.values())


def _data_type_key(data_type) -> str:
    if isinstance(data_type, ExportDataType):
        return data_type.value
    return str(data_type).lower()


def export_dataset(dataset: Dataset, data_type, filtered: bool) -> Optional[NamedPayload]:
    """
    Serialize one dataset in the requested format.

    Filtered exports use filtered_idx order. Data types without a wired
    serializer return None; that is an extension point, not an error.
    Filenames are built from the dataset label only, so datasets sharing a
    label produce the same filename.
    """
    entry = SERIALIZERS.get(_data_type_key(data_type))
    if entry is None:
        logger.warning(
            "No serializer for export data type, skipping dataset",
            extra={"data_type": str(data_type), "dataset": dataset.id},
        )
        return None

    serializer, mime_type, extension = entry
    rows = dataset.filtered_rows() if filtered else dataset.all_rows

    text = serializer(rows, dataset.fields)
    return NamedPayload(
        filename=f"{DEFAULT_DATA_NAME}_{dataset.label}.{extension}",
        mime_type=mime_type,
        data=text.encode("utf-8"),
        dataset_id=dataset.id,
    )
