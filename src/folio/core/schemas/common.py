"""Shared field types and the base model for content schemas"""

import re
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, HttpUrl, Strict, StringConstraints
from pydantic.alias_generators import to_camel


_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?Z$")


class ContentModel(BaseModel):
    """Base for all schema models: camelCase keys, unknown keys ignored."""
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


def parse_iso_datetime(value: str) -> datetime:
    """Parse a UTC ISO 8601 datetime ending in 'Z'. Raises ValueError."""
    if not _ISO_DATETIME.match(value):
        raise ValueError("must be a valid ISO 8601 datetime string (e.g. 2024-12-15T10:00:00Z)")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _check_iso(value: str) -> str:
    parse_iso_datetime(value)
    return value


def _check_not_future(value: str) -> str:
    if parse_iso_datetime(value) > datetime.now(timezone.utc):
        raise ValueError("must be a date in the past or present")
    return value


def text(min_length: int | None = None, max_length: int | None = None, pattern: str | None = None):
    """Whitespace-trimmed string with optional length and pattern constraints."""
    return Annotated[str, StringConstraints(
        strip_whitespace=True, min_length=min_length, max_length=max_length, pattern=pattern,
    )]


def whole(ge: int | None = None, le: int | None = None):
    """Strict integer (no bools, no numeric strings) within bounds."""
    return Annotated[int, Strict(), Field(ge=ge, le=le)]


def items(item_type, min_length: int | None = None, max_length: int | None = None):
    return Annotated[list[item_type], Field(min_length=min_length, max_length=max_length)]


Slug = text(1, 100, r"^[a-z0-9-]+$")
IsoDatetime = Annotated[str, AfterValidator(_check_iso)]
PastDatetime = Annotated[str, AfterValidator(_check_not_future)]
WebUrl = HttpUrl
Url = AnyUrl
HexColor = text(pattern=r"^#[0-9A-Fa-f]{6}$")
Flag = Annotated[bool, Strict()]
MetaTitle = text(1, 60)
MetaDescription = text(1, 160)
