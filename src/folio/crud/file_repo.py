"""Filesystem blob store: one JSON file per key under <root>/<namespace>/"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path, PurePosixPath

from folio.crud.repo import BlobStore
from folio.errors import StorageFailure

logger = logging.getLogger(__name__)

SUFFIX = ".json"


class FileBlobStore(BlobStore):
    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, namespace: str, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or any(p in ("..", ".") for p in parts) or PurePosixPath(key).is_absolute():
            raise StorageFailure(f"Invalid storage key: {key!r}")
        path = self.root / namespace / Path(*parts)
        return path.with_name(path.name + SUFFIX)

    def read(self, namespace: str, key: str) -> bytes | None:
        path = self._path(namespace, key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageFailure(f"Failed to read {path}: {e}") from e

    def write(self, namespace: str, key: str, data: bytes) -> None:
        """Write to a temp file in the target directory, then os.replace it into place."""
        path = self._path(namespace, key)
        tmp = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            if tmp and os.path.exists(tmp):
                os.unlink(tmp)
            raise StorageFailure(f"Failed to write {path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def keys(self, namespace: str, prefix: str = "") -> list[str]:
        base = self.root / namespace
        if not base.exists():
            return []
        try:
            found = [
                p.relative_to(base).as_posix()[: -len(SUFFIX)]
                for p in base.rglob(f"*{SUFFIX}")
                if p.is_file() and not p.name.startswith(".")
            ]
        except OSError as e:
            raise StorageFailure(f"Failed to list {base}: {e}") from e
        return sorted(k for k in found if k.startswith(prefix))
