"""Integration tests for the CLI commands over file storage"""

import json

import pytest
from typer.testing import CliRunner

from folio.cli.cli import app


runner = CliRunner()


@pytest.fixture(name="folio")
def folio_fixture(tmp_path, monkeypatch):
    """Invoke the CLI against a fresh data directory; returns a callable taking the argument list."""
    monkeypatch.chdir(tmp_path)
    for name in ("DATA_DIR", "STORAGE", "DB_URL", "BACKUP_AUTHOR", "LOG_LEVEL"):
        monkeypatch.delenv(f"FOLIO_{name}", raising=False)
    data_dir = str(tmp_path / "data")
    return lambda *args: runner.invoke(app, ["--data-dir", data_dir, "--log-level", "warning", *args])


@pytest.fixture(name="write_json")
def write_json_fixture(tmp_path):
    def _write(name, document):
        path = tmp_path / name
        path.write_text(json.dumps(document))
        return str(path)
    return _write


def _backup_id(output: str) -> str:
    return next(line.split(":", 1)[1].strip() for line in output.splitlines() if line.startswith("  backup:"))


# --- put / show ---

def test_put_then_show(folio, write_json, documents):
    result = folio("put", "person", write_json("person.json", documents["person"]))
    assert result.exit_code == 0, result.output
    assert "person content updated successfully" in result.output

    shown = folio("show", "person")
    assert shown.exit_code == 0, shown.output
    assert json.loads(shown.output) == documents["person"]


def test_show_all(folio, write_json, documents):
    folio("put", "skills", write_json("skills.json", documents["skills"]))
    result = folio("show")
    assert result.exit_code == 0, result.output
    everything = json.loads(result.output)
    assert everything["skills"] == documents["skills"]
    assert everything["person"] is None


def test_show_absent(folio):
    result = folio("show", "person")
    assert result.exit_code == 1
    assert "No person content found." in result.output


def test_show_unknown_type(folio):
    result = folio("show", "blog")
    assert result.exit_code == 1
    assert "Unknown content type" in result.output


def test_put_invalid_document(folio, write_json):
    result = folio("put", "person", write_json("bad.json", {"name": "A"}))
    assert result.exit_code == 1
    assert "title: Field required" in result.output
    assert folio("show", "person").exit_code == 1


def test_put_not_json(folio, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    result = folio("put", "person", str(path))
    assert result.exit_code == 1
    assert "Invalid JSON format" in result.output


def test_put_missing_file(folio, tmp_path):
    result = folio("put", "person", str(tmp_path / "missing.json"))
    assert result.exit_code == 1
    assert "Cannot read" in result.output


# --- validate / validate-field ---

def test_validate_valid(folio, write_json, documents):
    result = folio("validate", "writing", write_json("writing.json", documents["writing"]))
    assert result.exit_code == 0, result.output
    assert "Valid." in result.output
    assert folio("show", "writing").exit_code == 1


def test_validate_invalid_prints_warnings_and_errors(folio, write_json, documents):
    documents["writing"]["totalCount"] = 3
    documents["writing"]["metaTitle"] = "t" * 61
    result = folio("validate", "writing", write_json("writing.json", documents["writing"]))
    assert result.exit_code == 1
    assert "warning: metaTitle" in result.output
    assert "totalCount" in result.output


def test_validate_field(folio):
    assert folio("validate-field", "person", "name", "Ada").exit_code == 0
    result = folio("validate-field", "person", "location.city", '""')
    assert result.exit_code == 1
    assert "location.city" in result.output


def test_validate_field_unknown(folio):
    result = folio("validate-field", "person", "nickname", "x")
    assert result.exit_code == 1
    assert "nickname" in result.output


# --- backups / restore / diff ---

def test_backups_empty(folio):
    result = folio("backups")
    assert result.exit_code == 0
    assert "No backups found." in result.output


def test_backup_restore_cycle(folio, write_json, documents):
    folio("put", "person", write_json("v1.json", documents["person"]))
    changed = dict(documents["person"], title="Principal Engineer")
    put = folio("put", "person", write_json("v2.json", changed))
    backup_id = _backup_id(put.output)

    listed = folio("backups", "--type", "person")
    assert listed.exit_code == 0, listed.output
    assert backup_id in listed.output

    restored = folio("restore", "person", backup_id)
    assert restored.exit_code == 0, restored.output
    assert f"Content restored from version {backup_id}" in restored.output
    assert json.loads(folio("show", "person").output) == documents["person"]


def test_restore_unknown_version(folio, write_json, documents):
    folio("put", "person", write_json("v1.json", documents["person"]))
    result = folio("restore", "person", "2020-01-01T00-00-00-000000Z")
    assert result.exit_code == 1
    assert "Restore failed" in result.output


def test_diff_against_current(folio, write_json, documents):
    folio("put", "person", write_json("v1.json", documents["person"]))
    changed = dict(documents["person"], title="Principal Engineer")
    backup_id = _backup_id(folio("put", "person", write_json("v2.json", changed)).output)

    result = folio("diff", "person", backup_id)
    assert result.exit_code == 0, result.output
    assert "+++ current" in result.output
    assert '+  "title": "Principal Engineer",' in result.output
    assert "1 line(s) added, 1 line(s) deleted" in result.output


def test_diff_between_backups_without_changes(folio, write_json, documents):
    path = write_json("v1.json", documents["person"])
    folio("put", "person", path)
    first = _backup_id(folio("put", "person", path).output)
    second = _backup_id(folio("put", "person", path).output)
    result = folio("diff", "person", first, second)
    assert result.exit_code == 0, result.output
    assert "No differences." in result.output


# --- export ---

def test_export(folio, write_json, documents, tmp_path):
    folio("put", "projects", write_json("projects.json", documents["projects"]))
    result = folio("export", "projects", "--out-dir", str(tmp_path / "out"))
    assert result.exit_code == 0, result.output
    [exported] = (tmp_path / "out").glob("projects-*.json")
    assert json.loads(exported.read_text()) == {"projects": documents["projects"]}


def test_export_absent(folio, tmp_path):
    result = folio("export", "projects", "--out-dir", str(tmp_path / "out"))
    assert result.exit_code == 1
    assert "Export failed" in result.output


def test_export_backup(folio, write_json, documents, tmp_path):
    path = write_json("v1.json", documents["person"])
    folio("put", "person", path)
    backup_id = _backup_id(folio("put", "person", path).output)
    result = folio("export-backup", "person", backup_id, "--out-dir", str(tmp_path / "out"))
    assert result.exit_code == 0, result.output
    record = json.loads((tmp_path / "out" / f"person-backup-{backup_id}.json").read_text())
    assert record["id"] == backup_id
    assert record["content"] == documents["person"]
