from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, List

import pandas as pd

from map_exporter.config.model import DatasetConfig, ExportConfig
from map_exporter.core.dataset import Dataset
from map_exporter.core.exceptions import ConfigError
from map_exporter.core.filtering import apply_filters
from map_exporter.core.presets import Ratio, Resolution
from map_exporter.core.state import AppState, MapInfo, MapState, MapStyle, VisState
from map_exporter.export.model import HtmlMapMode

logger = logging.getLogger(__name__)

ENV_MAPBOX_TOKEN = "MAP_EXPORTER_MAPBOX_TOKEN"
ENV_EXPORT_DIR = "MAP_EXPORTER_EXPORT_DIR"


def _resolve_path(root: Path, raw: str) -> Path:
    # Absolute paths are used as-is, relative ones hang off the config root
    path = Path(raw)
    return path if path.is_absolute() else (root / path).resolve()


def _enum_value(enum_cls, raw, key: str):
    try:
        return enum_cls(raw)
    except ValueError:
        raise ConfigError(f"Invalid value for '{key}': {raw!r}")


def load_export_config(root: Path) -> ExportConfig:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            datasets/
                points.json
                ...

    Each file in 'datasets/' is parsed into a DatasetConfig
    ({"id", "label", "file"}, file relative to root).

    Environment overrides:
    - MAP_EXPORTER_MAPBOX_TOKEN: fallback token for HTML exports
    - MAP_EXPORTER_EXPORT_DIR: output folder for file exports

    :param root: Directory containing 'global.json' and optionally 'datasets/'.
    :return: An ExportConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if a preset or mode value is not recognised.
    """
    root = Path(root)
    logger.info("Loading export config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    with global_path.open() as f:
        raw_global = json.load(f)

    datasets: List[DatasetConfig] = []
    datasets_dir = root / "datasets"
    if datasets_dir.is_dir():
        for idx, config_file in enumerate(sorted(datasets_dir.glob("*.json"))):
            try:
                with config_file.open() as f:
                    raw = json.load(f)
            except json.JSONDecodeError as e:
                logger.error(
                    "Skipping unreadable dataset config",
                    extra={"config_file": config_file.name, "error": str(e)},
                )
                continue
            datasets.append(DatasetConfig.from_raw(raw, source_path=config_file, index=idx))
    else:
        logger.warning("Datasets directory not found", extra={"path": str(datasets_dir)})

    export_dir_raw = os.getenv(ENV_EXPORT_DIR) or raw_global.get("export_dir")
    export_dir = _resolve_path(root, export_dir_raw) if export_dir_raw else None

    preview = raw_global.get("preview", {})

    return ExportConfig(
        ui_title=raw_global.get("ui_title", "Map Exporter"),
        default_ratio=_enum_value(Ratio, raw_global.get("default_ratio", Ratio.FOUR_BY_THREE.value), "default_ratio"),
        default_resolution=_enum_value(
            Resolution, raw_global.get("default_resolution", Resolution.ONE_X.value), "default_resolution"
        ),
        mapbox_export_token=os.getenv(ENV_MAPBOX_TOKEN) or raw_global.get("mapbox_export_token"),
        html_mode=_enum_value(HtmlMapMode, raw_global.get("html_mode", HtmlMapMode.READ.value), "html_mode"),
        html_include_plotlyjs=raw_global.get("html_include_plotlyjs", "cdn"),
        export_dir=export_dir,
        preview_width=int(preview.get("width", 800)),
        preview_height=int(preview.get("height", 600)),
        datasets=datasets,
        filters=list(raw_global.get("filters", [])),
        map_state=dict(raw_global.get("map_state", {})),
        map_style=raw_global.get("map_style"),
        title=raw_global.get("title", ""),
        description=raw_global.get("description", ""),
    )


def load_dataset(ds_cfg: DatasetConfig, root: Path) -> Dataset:
    if "file" not in ds_cfg.raw:
        raise ConfigError(f"Dataset config '{ds_cfg.source_path.name}' has no 'file'")

    path = _resolve_path(Path(root), str(ds_cfg.file))
    if not path.is_file():
        raise ConfigError(f"Dataset file not found: {path}")

    df = pd.read_csv(path)
    return Dataset.from_dataframe(ds_cfg.id, df, label=ds_cfg.label)


def load_app_state(config: ExportConfig, root: Path) -> AppState:
    """
    Materialise every configured dataset and build the initial AppState.

    Datasets whose config or file is invalid are skipped and logged.
    Configured filters are applied so filtered exports have indices to use.
    """
    datasets: Dict[str, Dataset] = {}

    for ds_cfg in config.datasets:
        try:
            ds = load_dataset(ds_cfg, root)
        except (ConfigError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(
                "Skipping dataset due to config error",
                extra={"dataset": ds_cfg.id, "error": str(e)},
            )
            continue

        if ds.id in datasets:
            logger.warning("Duplicate dataset id, later entry wins", extra={"dataset": ds.id})
        datasets[ds.id] = apply_filters(ds, config.filters)

    logger.info("Loaded datasets", extra={"n_datasets": len(datasets)})

    map_state = MapState(
        width=config.preview_width,
        height=config.preview_height,
        **{k: v for k, v in config.map_state.items() if k in ("latitude", "longitude", "zoom", "bearing", "pitch")},
    )

    return AppState(
        vis_state=VisState(
            datasets=datasets,
            filters=list(config.filters),
            map_info=MapInfo(title=config.title, description=config.description),
        ),
        map_state=map_state,
        map_style=MapStyle(style_type=config.map_style) if config.map_style else MapStyle(),
    )
