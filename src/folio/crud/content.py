"""Canonical content persistence: validated writes, restores, reads, and exports"""

from __future__ import annotations

import json
import logging
import threading
from datetime import date
from typing import Any, Iterable

from folio.core.registry import ContentType
from folio.core.utils.diff import unified_diff
from folio.core.validation import Validator
from folio.crud.backups import BackupStore
from folio.crud.models import BackupRecord, ExportedFile
from folio.crud.repo import BlobStore
from folio.errors import ContentNotFound, ContentValidationError, StorageFailure

logger = logging.getLogger(__name__)

CONTENT_NAMESPACE = "content"
AUTO_BACKUP_DESCRIPTION = "Auto-backup before content update"


def _unwrap(content_type: ContentType, data: Any) -> Any:
    """Stored files wrap the document as {"<type>": document}."""
    if isinstance(data, dict) and content_type.value in data:
        return data[content_type.value]
    raise ValueError(f"Unexpected layout in stored {content_type.value} content")


class ContentRepository:
    """One canonical document per content type.

    Every write is gated by the validator and preceded by a best-effort backup
    of the current document. Writers to the same content type are serialized
    by a per-type lock; different types proceed independently.
    """

    def __init__(self, store: BlobStore, validator: Validator, backups: BackupStore, author: str = "system"):
        self.store = store
        self.validator = validator
        self.backups = backups
        self.author = author
        self._locks = {ct: threading.Lock() for ct in ContentType}

    def _load(self, ct: ContentType) -> Any:
        raw = self.store.read(CONTENT_NAMESPACE, ct.value)
        if raw is None:
            return None
        return _unwrap(ct, json.loads(raw))

    def _persist(self, ct: ContentType, document: Any) -> None:
        data = json.dumps({ct.value: document}, indent=2, ensure_ascii=False).encode("utf-8")
        self.store.write(CONTENT_NAMESPACE, ct.value, data)

    def _safe_backup(self, ct: ContentType, description: str, changes: Iterable[str]) -> BackupRecord | None:
        """Snapshot the current document. Failures are logged, never raised."""
        try:
            current = self._load(ct)
            if current is None:
                return None
            return self.backups.create(ct, current, description, self.author, changes)
        except Exception:
            logger.exception("Backup of %s content failed; continuing without it", ct.value)
            return None

    def _require_valid(self, ct: ContentType, document: Any, message: str) -> None:
        result = self.validator.validate(ct, document)
        if not result.is_valid:
            raise ContentValidationError(ct.value, result.errors, message)

    def read(self, content_type: ContentType | str) -> Any:
        """Return the canonical document, or None if absent or unreadable (logged)."""
        ct = ContentType.parse(content_type)
        try:
            return self._load(ct)
        except (StorageFailure, ValueError) as e:
            logger.error("Error reading %s content: %s", ct.value, e)
            return None

    def read_all(self) -> dict[str, Any]:
        """Map every content type to its document; unreadable or absent types map to None."""
        return {ct.value: self.read(ct) for ct in self.validator.registry}

    def write(self, content_type: ContentType | str, document: Any) -> BackupRecord | None:
        """Validate, back up the current document, then replace it.

        Returns the backup taken of the previous document, or None when there was
        none or the backup failed. Raises ContentValidationError without touching
        storage if the document is invalid.
        """
        ct = ContentType.parse(content_type)
        self._require_valid(ct, document, "Validation failed")
        with self._locks[ct]:
            backup = self._safe_backup(ct, AUTO_BACKUP_DESCRIPTION, ["Content updated via content management interface"])
            self._persist(ct, document)
        logger.info("Updated %s content", ct.value)
        return backup

    def restore(self, content_type: ContentType | str, identifier: str) -> Any:
        """Replace the canonical document with a backup's content and return it.

        The backup must satisfy the current schema. The current document is
        backed up first (best-effort).
        Raises BackupNotFound or ContentValidationError; storage is unchanged on either.
        """
        ct = ContentType.parse(content_type)
        with self._locks[ct]:
            record = self.backups.get(ct, identifier)
            self._require_valid(ct, record.content, "Restored content validation failed")
            self._safe_backup(
                ct, f"Backup before restoring to version {identifier}", [f"Restored from version {identifier}"],
            )
            self._persist(ct, record.content)
        logger.info("Restored %s content from version %s", ct.value, identifier)
        return record.content

    def export(self, content_type: ContentType | str) -> ExportedFile:
        """Stored document as a download named <type>-<YYYY-MM-DD>.json. Raises ContentNotFound."""
        ct = ContentType.parse(content_type)
        raw = self.store.read(CONTENT_NAMESPACE, ct.value)
        if raw is None:
            raise ContentNotFound(ct.value)
        return ExportedFile(filename=f"{ct.value}-{date.today().isoformat()}.json", data=raw)

    def diff_against_current(self, content_type: ContentType | str, identifier: str, context: int = 3) -> list[str]:
        """Unified diff from a backup's document to the current canonical document."""
        ct = ContentType.parse(content_type)
        record = self.backups.get(ct, identifier)
        return unified_diff(record.content, self._load(ct), identifier, "current", context)
