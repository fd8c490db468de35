from __future__ import annotations
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from folio.crud import sql_models  # noqa: F401  registers BlobRow on SQLModel.metadata


def make_engine(db_url: str):
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool  # in-memory databases live on a single connection
    return create_engine(db_url, echo=False, **kwargs)


def create_tables(engine) -> None:
    SQLModel.metadata.create_all(engine)
