"""File delivery collaborators.

The orchestrator hands over opaque bytes and a filename; a deliverer turns
them into a file the user can open.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pyorders.exceptions import OrdersDeliveryError

_logger = logging.getLogger(__name__)


class FileDeliverer(Protocol):
    def deliver(self, content: bytes, filename: str) -> str:
        """Materialize *content* as *filename*; return where it ended up."""
        ...


class DirectoryDeliverer:
    """Write deliveries into a directory.

    The bytes go to a hidden temp file that is renamed into place, so a
    failed write never leaves a partial report behind.
    """

    def __init__(self, directory: str | os.PathLike[str], *, create: bool = True) -> None:
        self._directory = Path(directory)
        self._create = create

    @property
    def directory(self) -> Path:
        return self._directory

    def deliver(self, content: bytes, filename: str) -> str:
        name = Path(filename).name
        if not name or name in {".", ".."}:
            raise OrdersDeliveryError(f"Invalid export filename: {filename!r}")
        target = self._directory / name

        tmp_path: Path | None = None
        try:
            if self._create:
                self._directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self._directory,
                prefix=f".{name}.",
                suffix=".part",
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, target)
        except OSError as exc:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink()
            raise OrdersDeliveryError(f"Could not write {target}: {exc}") from exc

        _logger.debug("Wrote %d bytes to %s", len(content), target)
        return str(target)


class MemoryDeliverer:
    """Keep deliveries in memory, keyed by filename."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    def deliver(self, content: bytes, filename: str) -> str:
        self.files[filename] = content
        return filename
