"""Shared fixtures for crud unit tests"""

import pytest
from sqlmodel import SQLModel

from folio.crud.db import create_tables, make_engine
from folio.crud.file_repo import FileBlobStore
from folio.crud.memory_repo import MemoryBlobStore
from folio.crud.sql_repo import SQLBlobStore


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    create_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="blob_store", params=["memory", "file", "sql"])
def blob_store_fixture(request, tmp_path):
    """Each BlobStore implementation in turn."""
    if request.param == "memory":
        return MemoryBlobStore()
    if request.param == "file":
        return FileBlobStore(tmp_path / "data")
    return SQLBlobStore(request.getfixturevalue("engine"))
