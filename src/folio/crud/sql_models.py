from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, LargeBinary, UniqueConstraint
from sqlalchemy.types import DateTime, Text
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlobRow(SQLModel, table=True):
    __tablename__ = "blobs"
    __table_args__ = (UniqueConstraint("namespace", "key", name="uq_blob_ns_key"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    namespace: str = Field(sa_column=Column(Text, nullable=False, index=True))
    key: str = Field(sa_column=Column(Text, nullable=False, index=True))
    data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))

    updated_at: datetime = Field(default_factory=_utcnow, sa_column=Column(DateTime, nullable=False))
