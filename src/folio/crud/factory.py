"""Wire settings to a blob store and a ready-to-use ContentRepository"""

from pathlib import Path

from folio.config import Settings
from folio.core.registry import SchemaRegistry, build_registry
from folio.core.validation import Validator
from folio.crud.backups import BackupStore
from folio.crud.content import ContentRepository
from folio.crud.db import create_tables, make_engine
from folio.crud.file_repo import FileBlobStore
from folio.crud.memory_repo import MemoryBlobStore
from folio.crud.repo import BlobStore
from folio.crud.sql_repo import SQLBlobStore


def open_store(settings: Settings) -> BlobStore:
    if settings.storage == "file":
        return FileBlobStore(Path(settings.data_dir))
    if settings.storage == "sql":
        engine = make_engine(settings.db_url)
        create_tables(engine)
        return SQLBlobStore(engine)
    return MemoryBlobStore()


def open_repository(settings: Settings, registry: SchemaRegistry | None = None) -> ContentRepository:
    store = open_store(settings)
    return ContentRepository(
        store,
        Validator(registry or build_registry()),
        BackupStore(store),
        author=settings.backup_author,
    )
