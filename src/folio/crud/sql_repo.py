from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from folio.crud.repo import BlobStore
from folio.crud.sql_models import BlobRow, _utcnow
from folio.errors import StorageFailure


class SQLBlobStore(BlobStore):
    """Blob store over a SQLModel engine. Each call runs in its own session and transaction."""

    def __init__(self, engine):
        self.engine = engine

    def _row(self, session: Session, namespace: str, key: str) -> BlobRow | None:
        return session.exec(
            select(BlobRow).where(BlobRow.namespace == namespace).where(BlobRow.key == key)
        ).first()

    def read(self, namespace: str, key: str) -> bytes | None:
        try:
            with Session(self.engine) as session:
                row = self._row(session, namespace, key)
                return bytes(row.data) if row else None
        except SQLAlchemyError as e:
            raise StorageFailure(f"Failed to read {namespace}/{key}: {e}") from e

    def write(self, namespace: str, key: str, data: bytes) -> None:
        try:
            with Session(self.engine) as session:
                row = self._row(session, namespace, key) or BlobRow(namespace=namespace, key=key, data=data)
                row.data = data
                row.updated_at = _utcnow()
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageFailure(f"Failed to write {namespace}/{key}: {e}") from e

    def keys(self, namespace: str, prefix: str = "") -> list[str]:
        try:
            with Session(self.engine) as session:
                keys = session.exec(select(BlobRow.key).where(BlobRow.namespace == namespace)).all()
        except SQLAlchemyError as e:
            raise StorageFailure(f"Failed to list {namespace}: {e}") from e
        return sorted(k for k in keys if k.startswith(prefix))
