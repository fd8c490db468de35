"""Root test configuration: sample documents, repositories, and session-level cleanup"""

import copy
import itertools
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from folio.core.registry import build_registry
from folio.core.validation import Validator
from folio.crud.backups import BackupStore
from folio.crud.content import CONTENT_NAMESPACE, ContentRepository
from folio.crud.memory_repo import MemoryBlobStore
from folio.errors import StorageFailure


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["folio.db", "test.db"]
_CLEANUP_DIRS = ["data"]

_UPDATED = "2024-05-01T10:00:00Z"

_DOCUMENTS = {
    "person": {
        "name": "Ada Lovelace",
        "title": "Software Engineer",
        "email": "ada@lovelace.dev",
        "summary": "Engineer building reliable backend systems.",
        "location": {"city": "London", "country": "UK"},
        "social": [
            {"platform": "github", "url": "https://github.com/ada", "username": "ada", "displayName": "Ada"},
        ],
        "skills": [
            {"name": "Python", "category": "programming", "proficiency": "expert", "yearsOfExperience": 8},
        ],
        "experience": {"years": 8, "focus": ["backend"]},
        "metaTitle": "Ada Lovelace - Software Engineer",
        "metaDescription": "Portfolio of Ada Lovelace.",
        "trackingEnabled": True,
        "lastUpdated": _UPDATED,
    },
    "experience": {
        "workExperience": [{
            "id": "acme",
            "company": "Acme",
            "position": "Engineer",
            "location": "Remote",
            "startDate": "2020-01-01T00:00:00Z",
            "current": True,
            "description": "Built payment services.",
            "responsibilities": ["APIs"],
            "technologies": [{"name": "Python", "category": "backend"}],
            "industry": "Fintech",
            "projectType": "full-time",
        }],
        "education": [{
            "id": "ucl",
            "institution": "UCL",
            "degree": "BSc",
            "field": "Computer Science",
            "startDate": "2012-09-01T00:00:00Z",
            "endDate": "2015-06-30T00:00:00Z",
            "location": "London",
        }],
        "summary": "Eight years of backend work.",
        "totalExperience": {"years": 8, "months": 0},
        "skillsSummary": ["Python"],
        "metaTitle": "Experience",
        "metaDescription": "Work history",
        "lastUpdated": _UPDATED,
    },
    "projects": {
        "title": "Projects",
        "description": "Selected work and case studies.",
        "projects": [{
            "id": "ledger",
            "title": "Ledger",
            "description": "Double-entry ledger service.",
            "shortDescription": "Ledger API",
            "category": "fintech",
            "client": "Acme",
            "technologies": [{"name": "Python", "category": "backend"}],
            "startDate": "2023-01-01T00:00:00Z",
            "status": "completed",
            "role": "Lead engineer",
        }],
        "metaTitle": "Projects",
        "metaDescription": "Selected work",
        "lastUpdated": _UPDATED,
    },
    "skills": {
        "title": "Skills",
        "description": "Technologies I work with.",
        "categories": [
            {"id": "backend", "name": "Backend", "description": "Server-side development", "order": 1},
        ],
        "skills": [{
            "id": "python",
            "name": "Python",
            "category": "backend",
            "proficiency": "expert",
            "yearsOfExperience": 8,
            "order": 1,
        }],
        "levels": [{
            "level": "expert",
            "description": "Deep production experience",
            "yearsRange": {"min": 5, "max": 50},
            "color": "#10B981",
        }],
        "summary": {
            "totalSkills": 1,
            "categories": 1,
            "yearsOfExperience": 8,
            "expertSkills": 1,
            "advancedSkills": 0,
            "intermediateSkills": 0,
            "beginnerSkills": 0,
        },
        "metaTitle": "Skills",
        "metaDescription": "Skills overview",
        "lastUpdated": _UPDATED,
    },
    "writing": {
        "title": "Writing",
        "description": "Articles on backend engineering.",
        "writings": [{
            "id": "idempotency",
            "title": "Idempotent APIs",
            "description": "How to design idempotent endpoints.",
            "url": "https://medium.com/@ada/idempotent",
            "type": "external",
            "publishedDate": "2024-01-15T10:00:00Z",
            "tags": ["api"],
        }],
        "totalCount": 1,
    },
}


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and data directories created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="documents")
def documents_fixture():
    """A fresh copy of one valid document per content type; safe to mutate."""
    return copy.deepcopy(_DOCUMENTS)


@pytest.fixture(name="validator")
def validator_fixture():
    return Validator(build_registry())


@pytest.fixture(name="clock")
def clock_fixture():
    """Deterministic clock: each call is one second after the previous."""
    start = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture(name="store")
def store_fixture():
    return MemoryBlobStore()


@pytest.fixture(name="backups")
def backups_fixture(store, clock):
    return BackupStore(store, clock=clock)


@pytest.fixture(name="repo")
def repo_fixture(store, validator, backups):
    """ContentRepository over an in-memory store."""
    return ContentRepository(store, validator, backups)


class ContentDownStore(MemoryBlobStore):
    """Memory store whose content namespace rejects writes while `content_down` is set."""
    content_down = False

    def write(self, namespace: str, key: str, data: bytes) -> None:
        if self.content_down and namespace == CONTENT_NAMESPACE:
            raise StorageFailure(f"disk full writing {namespace}/{key}")
        super().write(namespace, key, data)


@pytest.fixture(name="content_down_store")
def content_down_store_fixture():
    return ContentDownStore()


@pytest.fixture(name="content_down_repo")
def content_down_repo_fixture(content_down_store, validator, clock):
    """ContentRepository whose canonical writes can be made to fail."""
    return ContentRepository(content_down_store, validator, BackupStore(content_down_store, clock=clock))
