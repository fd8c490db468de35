"""Backup record and export payload models"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from folio.core.registry import ContentType


class BackupSummary(BaseModel):
    """Backup metadata without the embedded document, as returned by listings."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
    id: str = Field(..., description="Sortable identifier derived from the creation time")
    content_type: ContentType
    timestamp: datetime
    description: str
    author: str
    size: int = Field(..., ge=0, description="UTF-8 byte length of the compact JSON content")
    changes: list[str] = Field(default_factory=list)


class BackupRecord(BackupSummary):
    """Immutable snapshot of a content document."""
    content: Any = None

    def summary(self) -> BackupSummary:
        return BackupSummary.model_validate(self.model_dump(exclude={"content"}))


class ExportedFile(BaseModel):
    """A download: raw bytes plus attachment metadata."""
    filename: str
    media_type: str = "application/json"
    data: bytes

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'
