from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, IO, Iterator, List, Optional

from dash import dcc

from map_exporter.core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class DeliverySink(ABC):
    """
    Abstract 'deliver bytes as a named download' capability (browser download,
    local folder, etc.).
    """

    @abstractmethod
    def deliver(self, data: bytes, mime_type: str, filename: str) -> None:
        pass


@contextmanager
def scoped_handle(directory: Path, suffix: str = "") -> Iterator[tuple[IO[bytes], Path]]:
    """
    Temporary file handle inside `directory`.

    The handle is closed and the temporary path removed on every exit path
    unless the caller has already moved it away.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=".export-", suffix=suffix, dir=directory)
    tmp_path = Path(tmp_name)
    fh = os.fdopen(fd, "wb")
    try:
        yield fh, tmp_path
    finally:
        if not fh.closed:
            fh.close()
        if tmp_path.exists():
            tmp_path.unlink()


class LocalFileSink(DeliverySink):
    """
    Writes payloads into a local folder.

    Each payload goes to a temporary file first and is moved into place once
    fully written, so readers never see partial files.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.delivered: List[Path] = []

    def _resolve(self, filename: str) -> Path:
        # Prevent path traversal attacks
        full_path = (self.root / filename).resolve()
        if full_path.parent != self.root:
            raise DeliveryError(f"Access denied: {filename}")
        return full_path

    def deliver(self, data: bytes, mime_type: str, filename: str) -> None:
        target = self._resolve(filename)

        try:
            with scoped_handle(self.root, suffix=target.suffix) as (fh, tmp_path):
                fh.write(data)
                fh.close()
                os.replace(tmp_path, target)
        except OSError as e:
            raise DeliveryError(f"Could not deliver {filename}: {e}") from e

        logger.info(
            "Wrote export",
            extra={"path": str(target), "mime_type": mime_type, "size": len(data)},
        )
        self.delivered.append(target)


class DashDownloadSink(DeliverySink):
    """
    Collects payloads as dcc.Download data dicts for Dash callbacks.
    """

    def __init__(self) -> None:
        self.downloads: List[Dict[str, Any]] = []

    def deliver(self, data: bytes, mime_type: str, filename: str) -> None:
        self.downloads.append(dcc.send_bytes(data, filename, type=mime_type))

    @property
    def last(self) -> Optional[Dict[str, Any]]:
        return self.downloads[-1] if self.downloads else None
