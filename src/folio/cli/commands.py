"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from folio.config import Settings, load_config
from folio.core.validation import format_errors, parse_document
from folio.crud.content import ContentRepository
from folio.crud.factory import open_repository
from folio.crud.models import ExportedFile
from folio.errors import ContentValidationError, FolioError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _repo(ctx: typer.Context) -> ContentRepository:
    if "repository" not in ctx.obj:
        ctx.obj["repository"] = open_repository(_settings(ctx))
    return ctx.obj["repository"]


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _read_document(path: Path):
    """Load a JSON document from a file, exiting with the format errors if it is not an object."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        _fail(f"Cannot read {path}", e)
    document, result = parse_document(raw)
    if not result.is_valid:
        _fail(format_errors(result.errors))
    return document


def _save(exported: ExportedFile, out: Path) -> Path:
    out.mkdir(parents=True, exist_ok=True)
    dest = out / exported.filename
    dest.write_bytes(exported.data)
    return dest


def main_callback(
    ctx: typer.Context,
    data_dir: Annotated[Optional[str], typer.Option("--data-dir", help="Content and backup directory")] = None,
    storage: Annotated[Optional[str], typer.Option("--storage", help="file, sql or memory")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL for sql storage")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Load settings once per invocation and configure logging."""
    try:
        settings = load_config(overrides={
            "data_dir": data_dir, "storage": storage, "db_url": db_url,
            "log_level": log_level.upper() if log_level else None,
        })
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    ctx.obj = {"settings": settings}


def show_cmd(
    ctx: typer.Context,
    content_type: Annotated[Optional[str], typer.Argument(help="Content type; omit for all")] = None,
    ):
    """Print the current document for one content type, or all of them."""
    repo = _repo(ctx)
    try:
        data = repo.read(content_type) if content_type else repo.read_all()
    except FolioError as e:
        _fail(str(e))
    if content_type and data is None:
        _fail(f"No {content_type} content found.")
    _echo_json(data)


def put_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type to replace")],
    path: Annotated[Path, typer.Argument(help="JSON file holding the new document")],
    ):
    """Validate a document, back up the current one, and replace it."""
    repo = _repo(ctx)
    document = _read_document(path)
    try:
        backup = repo.write(content_type, document)
    except ContentValidationError as e:
        _fail(format_errors(e.issues))
    except FolioError as e:
        _fail("Update failed", e)
    if backup:
        typer.echo(f"  backup: {backup.id}")
    typer.echo(f"{content_type} content updated successfully")


def validate_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type whose schema to apply")],
    path: Annotated[Path, typer.Argument(help="JSON file to check")],
    ):
    """Check a document against its schema without storing it."""
    repo = _repo(ctx)
    document = _read_document(path)
    try:
        result = repo.validator.validate(content_type, document)
        warnings = repo.validator.check_warnings(content_type, document)
    except FolioError as e:
        _fail(str(e))
    for w in warnings:
        typer.echo(f"  warning: {w}")
    if not result.is_valid:
        _fail(format_errors(result.errors))
    typer.echo("Valid.")


def validate_field_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type whose schema to apply")],
    field: Annotated[str, typer.Argument(help="Dotted field path, e.g. location.city or skills.0.name")],
    value: Annotated[str, typer.Argument(help="JSON value; bare text is treated as a string")],
    ):
    """Check a single field value against its rule."""
    repo = _repo(ctx)
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    try:
        result = repo.validator.validate_field(content_type, field, parsed)
    except FolioError as e:
        _fail(str(e))
    if not result.is_valid:
        _fail(format_errors(result.errors))
    typer.echo("Valid.")


def backups_cmd(
    ctx: typer.Context,
    content_type: Annotated[Optional[str], typer.Option("--type", help="Only backups of this content type")] = None,
    ):
    """List backups, newest first."""
    repo = _repo(ctx)
    try:
        versions = repo.backups.list(content_type)
    except FolioError as e:
        _fail(str(e))
    if not versions:
        typer.echo("No backups found.")
        return
    for v in versions:
        typer.echo(f"{v.id}  {v.content_type.value:<10}  {v.size:>8}  {v.author}  {v.description}")


def export_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type to export")],
    out: Annotated[Path, typer.Option("--out-dir", help="Directory to write the file to")] = Path("."),
    ):
    """Write the current stored document to a dated JSON file."""
    repo = _repo(ctx)
    try:
        dest = _save(repo.export(content_type), out)
    except FolioError as e:
        _fail("Export failed", e)
    typer.echo(f"Exported {content_type} -> {dest}")


def export_backup_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type of the backup")],
    version_id: Annotated[str, typer.Argument(help="Backup identifier")],
    out: Annotated[Path, typer.Option("--out-dir", help="Directory to write the file to")] = Path("."),
    ):
    """Write a raw backup record to a JSON file."""
    repo = _repo(ctx)
    try:
        dest = _save(repo.backups.export(content_type, version_id), out)
    except FolioError as e:
        _fail("Export failed", e)
    typer.echo(f"Exported backup {version_id} -> {dest}")


def restore_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type to restore")],
    version_id: Annotated[str, typer.Argument(help="Backup identifier to restore from")],
    ):
    """Replace the current document with a backup's content."""
    repo = _repo(ctx)
    try:
        repo.restore(content_type, version_id)
    except ContentValidationError as e:
        _fail("Restored content validation failed\n" + format_errors(e.issues))
    except FolioError as e:
        _fail("Restore failed", e)
    typer.echo(f"Content restored from version {version_id}")


def diff_cmd(
    ctx: typer.Context,
    content_type: Annotated[str, typer.Argument(help="Content type of the backups")],
    from_id: Annotated[str, typer.Argument(help="Older backup identifier")],
    to_id: Annotated[Optional[str], typer.Argument(help="Newer backup identifier; omit for current content")] = None,
    context: Annotated[int, typer.Option("--context", help="Lines of context")] = 3,
    ):
    """Show a unified diff between two backups, or a backup and the current content."""
    repo = _repo(ctx)
    try:
        if to_id:
            lines = repo.backups.diff(content_type, from_id, to_id, context)
        else:
            lines = repo.diff_against_current(content_type, from_id, context)
    except FolioError as e:
        _fail("Diff failed", e)
    if not lines:
        typer.echo("No differences.")
        return
    typer.echo("".join(lines), nl=False)
    added = sum(1 for ln in lines if ln.startswith("+") and not ln.startswith("+++"))
    deleted = sum(1 for ln in lines if ln.startswith("-") and not ln.startswith("---"))
    typer.echo(f"{added} line(s) added, {deleted} line(s) deleted")


def serve_cmd(
    ctx: typer.Context,
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
    ):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from folio.api import create_app

    settings = _settings(ctx)
    app = create_app(settings, repository=_repo(ctx))
    uvicorn.run(app, host=host or settings.host, port=port or settings.port, log_level=settings.log_level.lower())
