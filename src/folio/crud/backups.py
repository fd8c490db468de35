"""Backup persistence: create, list, get, export, and diff immutable content snapshots"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from folio.core.registry import ContentType
from folio.core.utils.diff import unified_diff
from folio.crud.models import BackupRecord, BackupSummary, ExportedFile
from folio.crud.repo import BlobStore
from folio.errors import BackupNotFound, MalformedBackupRecord, StorageFailure

logger = logging.getLogger(__name__)

BACKUP_NAMESPACE = "backups"
ID_FORMAT = "%Y-%m-%dT%H-%M-%S-%fZ"
_ID_CHARS = re.compile(r"[0-9A-Za-z-]+")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def backup_key(content_type: ContentType, identifier: str) -> str:
    return f"{content_type.value}/{identifier}"


def compact_size(document: Any) -> int:
    """UTF-8 byte length of the compact JSON serialization."""
    return len(json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


class BackupStore:
    """Timestamped snapshots keyed by (content type, identifier).

    Identifiers are the UTC creation time at microsecond precision
    (e.g. 2024-05-01T10-20-30-123456Z), so lexical order is chronological.
    """

    def __init__(self, store: BlobStore, clock: Callable[[], datetime] = _utcnow):
        self.store = store
        self.clock = clock

    def _load(self, key: str) -> BackupRecord | None:
        raw = self.store.read(BACKUP_NAMESPACE, key)
        if raw is None:
            return None
        try:
            record = BackupRecord.model_validate_json(raw)
        except ValidationError as e:
            raise MalformedBackupRecord(key, e) from e
        if backup_key(record.content_type, record.id) != key:
            raise MalformedBackupRecord(key, ValueError(f"record declares {record.content_type.value}/{record.id}"))
        return record

    def create(
        self,
        content_type: ContentType | str,
        document: Any,
        description: str,
        author: str = "system",
        changes: Iterable[str] = (),
        ) -> BackupRecord:
        """Snapshot document as a new immutable record.

        If the clock yields an identifier already used for this content type,
        it is advanced one microsecond at a time until unused.
        Callers treat failures as best-effort; nothing here is retried.
        """
        ct = ContentType.parse(content_type)
        size = compact_size(document)

        created = self.clock()
        while self.store.exists(BACKUP_NAMESPACE, backup_key(ct, created.strftime(ID_FORMAT))):
            created += timedelta(microseconds=1)
        identifier = created.strftime(ID_FORMAT)

        record = BackupRecord(
            id=identifier,
            content_type=ct,
            timestamp=created,
            description=description,
            author=author,
            content=document,
            size=size,
            changes=list(changes),
        )
        self.store.write(
            BACKUP_NAMESPACE,
            backup_key(ct, identifier),
            record.model_dump_json(by_alias=True, indent=2).encode("utf-8"),
        )
        logger.info("Created backup %s for %s (%d bytes)", identifier, ct.value, size)
        return record

    def list(self, content_type: ContentType | str | None = None) -> list[BackupSummary]:
        """Summaries of stored backups, newest first. Unreadable records are logged and skipped."""
        prefix = f"{ContentType.parse(content_type).value}/" if content_type is not None else ""
        summaries = []
        for key in self.store.keys(BACKUP_NAMESPACE, prefix):
            try:
                record = self._load(key)
            except (MalformedBackupRecord, StorageFailure) as e:
                logger.warning("Skipping backup %s: %s", key, e)
                continue
            if record is not None:
                summaries.append(record.summary())
        summaries.sort(key=lambda s: s.timestamp, reverse=True)
        return summaries

    def get(self, content_type: ContentType | str, identifier: str) -> BackupRecord:
        """Return the record with exactly this identifier. Raises BackupNotFound if absent."""
        ct = ContentType.parse(content_type)
        if not _ID_CHARS.fullmatch(identifier):
            raise BackupNotFound(ct.value, identifier)
        record = self._load(backup_key(ct, identifier))
        if record is None:
            raise BackupNotFound(ct.value, identifier)
        return record

    def export(self, content_type: ContentType | str, identifier: str) -> ExportedFile:
        """Raw stored record bytes as a download named <type>-backup-<identifier>.json."""
        ct = ContentType.parse(content_type)
        if not _ID_CHARS.fullmatch(identifier):
            raise BackupNotFound(ct.value, identifier)
        raw = self.store.read(BACKUP_NAMESPACE, backup_key(ct, identifier))
        if raw is None:
            raise BackupNotFound(ct.value, identifier)
        return ExportedFile(filename=f"{ct.value}-backup-{identifier}.json", data=raw)

    def diff(
        self,
        content_type: ContentType | str,
        from_id: str,
        to_id: str,
        context: int = 3,
        ) -> list[str]:
        """Unified diff lines between the documents of two backups. Raises BackupNotFound if either is missing."""
        ct = ContentType.parse(content_type)
        old, new = self.get(ct, from_id), self.get(ct, to_id)
        return unified_diff(old.content, new.content, from_id, to_id, context)
