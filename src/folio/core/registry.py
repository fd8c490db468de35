"""Content types and the immutable schema registry"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from pydantic import BaseModel

from folio.core.schemas.experience import ExperienceContent
from folio.core.schemas.person import PersonContent
from folio.core.schemas.projects import ProjectsContent
from folio.core.schemas.skills import SkillsContent
from folio.core.schemas.writing import WritingContent
from folio.errors import UnknownContentType


class ContentType(str, Enum):
    """The closed set of content categories; each owns one canonical document"""
    person = "person"
    experience = "experience"
    projects = "projects"
    skills = "skills"
    writing = "writing"

    @classmethod
    def parse(cls, value: object) -> "ContentType":
        """Coerce a tag to a ContentType. Raises UnknownContentType for anything outside the set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            raise UnknownContentType(value) from None


@dataclass(frozen=True)
class Schema:
    content_type: ContentType
    model: type[BaseModel]


class SchemaRegistry:
    """Read-only ContentType -> Schema map. Every ContentType must be covered."""

    def __init__(self, models: Mapping[ContentType, type[BaseModel]]):
        missing = [t.value for t in ContentType if t not in models]
        if missing:
            raise ValueError(f"No schema registered for: {', '.join(missing)}")
        self._schemas = MappingProxyType({t: Schema(t, models[t]) for t in ContentType})

    def schema_for(self, content_type: ContentType | str) -> Schema:
        return self._schemas[ContentType.parse(content_type)]

    def __iter__(self) -> Iterator[ContentType]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)


def build_registry() -> SchemaRegistry:
    """Registry of the built-in portfolio schemas. Build once at startup and pass it around."""
    return SchemaRegistry({
        ContentType.person: PersonContent,
        ContentType.experience: ExperienceContent,
        ContentType.projects: ProjectsContent,
        ContentType.skills: SkillsContent,
        ContentType.writing: WritingContent,
    })
