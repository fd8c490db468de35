"""Exception taxonomy for content validation, storage and backups"""

from __future__ import annotations


class FolioError(Exception):
    """Base class for all folio errors."""


class UnknownContentType(FolioError, ValueError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unknown content type: {value!r}")


class UnknownField(FolioError, LookupError):
    def __init__(self, content_type: str, path: str):
        self.content_type = content_type
        self.path = path
        super().__init__(f"Field '{path}' is not declared in the {content_type} schema")


class ContentValidationError(FolioError, ValueError):
    """A document failed its schema. `issues` holds the field-level detail."""

    def __init__(self, content_type: str, issues: list, message: str = "Validation failed"):
        self.content_type = content_type
        self.issues = list(issues)
        super().__init__(f"{message} for {content_type}: {len(self.issues)} error(s)")


class BackupNotFound(FolioError, LookupError):
    def __init__(self, content_type: str, identifier: str):
        self.content_type = content_type
        self.identifier = identifier
        super().__init__(f"Backup version {identifier!r} not found for {content_type}")


class ContentNotFound(FolioError, LookupError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"No {content_type} content has been stored")


class StorageFailure(FolioError):
    """Read/write/list fault in the underlying blob store."""


class MalformedBackupRecord(FolioError, ValueError):
    def __init__(self, key: str, cause: Exception | None = None):
        self.key = key
        detail = f": {cause}" if cause else ""
        super().__init__(f"Backup record {key!r} is unreadable{detail}")
