"""HTTP API: content read/update, backup listing/export, restore, and validation routes"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from folio.config import Settings, load_config
from folio.core.validation import FieldIssue
from folio.crud.content import ContentRepository
from folio.crud.factory import open_repository
from folio.crud.models import ExportedFile
from folio.errors import (
    BackupNotFound, ContentNotFound, ContentValidationError, MalformedBackupRecord,
    StorageFailure, UnknownContentType,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


class BackupRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    content_type: Optional[str] = Field(default=None, alias="contentType")
    version_id: Optional[str] = Field(default=None, alias="versionId")


class ExportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    content_type: Optional[str] = Field(default=None, alias="contentType")


def get_repository(request: Request) -> ContentRepository:
    return request.app.state.repository


def _error(status_code: int, error: str, details: list[FieldIssue] | None = None) -> JSONResponse:
    body: dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = [d.model_dump() for d in details]
    return JSONResponse(body, status_code=status_code)


def _download(exported: ExportedFile) -> Response:
    return Response(
        content=exported.data,
        media_type=exported.media_type,
        headers={"Content-Disposition": exported.content_disposition},
    )


@router.get("")
def get_all_content(repo: ContentRepository = Depends(get_repository)):
    return repo.read_all()


@router.get("/backup")
def list_backups(
    content_type: Optional[str] = Query(None, alias="type"),
    repo: ContentRepository = Depends(get_repository),
):
    try:
        versions = repo.backups.list(content_type)
    except UnknownContentType as e:
        return _error(400, str(e))
    except StorageFailure:
        logger.exception("Error loading backups")
        return _error(500, "Failed to load backups")
    return {"versions": [v.model_dump(mode="json", by_alias=True) for v in versions]}


@router.post("/backup/export")
def export_backup(ref: BackupRef = Body(...), repo: ContentRepository = Depends(get_repository)):
    if not ref.content_type or not ref.version_id:
        return _error(400, "Content type and version ID are required")
    try:
        return _download(repo.backups.export(ref.content_type, ref.version_id))
    except UnknownContentType as e:
        return _error(400, str(e))
    except BackupNotFound:
        return _error(404, "Backup version not found")
    except StorageFailure:
        logger.exception("Error exporting backup %s/%s", ref.content_type, ref.version_id)
        return _error(500, "Failed to export backup")


@router.post("/export")
def export_content(req: ExportRequest = Body(...), repo: ContentRepository = Depends(get_repository)):
    if not req.content_type:
        return _error(400, "Content type is required")
    try:
        return _download(repo.export(req.content_type))
    except UnknownContentType as e:
        return _error(400, str(e))
    except ContentNotFound as e:
        return _error(404, str(e))
    except StorageFailure:
        logger.exception("Error exporting %s content", req.content_type)
        return _error(500, "Failed to export content")


@router.post("/restore")
def restore_content(ref: BackupRef = Body(...), repo: ContentRepository = Depends(get_repository)):
    if not ref.content_type or not ref.version_id:
        return _error(400, "Content type and version ID are required")
    try:
        content = repo.restore(ref.content_type, ref.version_id)
    except UnknownContentType as e:
        return _error(400, str(e))
    except BackupNotFound:
        return _error(404, "Backup version not found")
    except ContentValidationError as e:
        return _error(400, "Restored content validation failed", e.issues)
    except (StorageFailure, MalformedBackupRecord):
        logger.exception("Error restoring %s content from %s", ref.content_type, ref.version_id)
        return _error(500, "Failed to restore content")
    return {
        "success": True,
        "message": f"Content restored from version {ref.version_id}",
        "content": content,
    }


@router.put("/{content_type}")
def update_content(content_type: str, document: Any = Body(...), repo: ContentRepository = Depends(get_repository)):
    try:
        repo.write(content_type, document)
    except UnknownContentType as e:
        return _error(400, str(e))
    except ContentValidationError as e:
        return _error(400, "Validation failed", e.issues)
    except StorageFailure:
        logger.exception("Error updating %s content", content_type)
        return _error(500, "Failed to update content")
    return {"success": True, "message": f"{content_type} content updated successfully"}


@router.post("/{content_type}/validate")
def validate_content(content_type: str, document: Any = Body(...), repo: ContentRepository = Depends(get_repository)):
    """Dry-run validation with advisory warnings; nothing is stored."""
    try:
        result = repo.validator.validate(content_type, document)
        warnings = repo.validator.check_warnings(content_type, document)
    except UnknownContentType as e:
        return _error(400, str(e))
    return result.model_copy(update={"warnings": warnings}).model_dump(by_alias=True)


async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        FieldIssue(path=".".join(str(p) for p in err["loc"]), message=err["msg"])
        for err in exc.errors()
    ]
    return _error(400, "Invalid request body", details)


def create_app(settings: Settings | None = None, repository: ContentRepository | None = None) -> FastAPI:
    """Build the FastAPI app. Pass a repository to share one (e.g. in tests)."""
    settings = settings or load_config()
    app = FastAPI(title=settings.app_name, description="Portfolio content management API")
    app.state.repository = repository or open_repository(settings)
    app.add_exception_handler(RequestValidationError, _bad_request)
    app.include_router(router)
    return app
