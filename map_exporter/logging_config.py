from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

PACKAGE_LOGGER = "map_exporter"

ENV_LOG_FORMAT = "MAP_EXPORTER_LOG_FORMAT"
ENV_LOG_LEVEL = "MAP_EXPORTER_LOG_LEVEL"

# Loggers that are chatty at INFO during image rendering and Dash requests
NOISY_LOGGERS = ("werkzeug", "kaleido", "choreographer")

LOG_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Union[int, str, None] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Send map_exporter logs to stderr, as JSON lines or plain text.

    Format: force_format ("json" / "plain"), else MAP_EXPORTER_LOG_FORMAT,
    else json. Level: the level argument, else MAP_EXPORTER_LOG_LEVEL, else
    INFO. The level applies to the root and the map_exporter loggers;
    rendering and HTTP-server loggers are held at WARNING.
    """
    format_mode = (force_format or os.getenv(ENV_LOG_FORMAT, "json")).lower()
    resolved = _resolve_level(level)

    if format_mode == "plain":
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    else:
        formatter = jsonlogger.JsonFormatter(LOG_FIELDS)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(resolved)
    # one handler only, so repeated calls do not duplicate lines
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
