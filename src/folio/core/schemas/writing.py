"""Writing (articles and posts) page content schema

Cross-field rules are field validators on the later field of each pair, so
errors are reported at the field a reader has to fix.
"""

from typing import Literal, Optional

from pydantic import Field, ValidationInfo, field_validator

from folio.core.schemas.common import (
    ContentModel, Flag, IsoDatetime, PastDatetime, Url, WebUrl, items, text, whole,
)


Tag = text(1, 50, r"^[a-zA-Z0-9\s-]+$")


class Writing(ContentModel):
    id: text(1, 100, r"^[a-z0-9-]+$")
    title: text(1, 200)
    description: text(10, 500)
    url: WebUrl
    type: Literal["external", "iframe", "blog"]
    published_date: PastDatetime
    read_time: Optional[whole(1, 480)] = None
    featured: Optional[Flag] = None
    tags: Optional[items(Tag, max_length=10)] = Field(default=None, validate_default=True)
    thumbnail: Optional[WebUrl] = Field(default=None, validate_default=True)
    author: Optional[text(1, 100)] = None
    source: Optional[text(1, 100)] = None
    platform: Optional[Literal["Medium", "Dev.to", "GitHub", "Personal Blog", "Substack", "Hashnode", "Other"]] = None
    language: Literal["en", "es", "fr", "de", "pt", "other"] = "en"
    category: Optional[Literal[
        "fintech", "backend", "frontend", "devops", "architecture", "performance", "security", "other",
    ]] = None
    meta_title: Optional[text(max_length=60)] = None
    meta_description: Optional[text(max_length=160)] = None
    social_image: Optional[Url] = None
    tracking_id: Optional[text(pattern=r"^[a-zA-Z0-9_-]+$")] = None

    @field_validator("tags")
    @classmethod
    def _featured_needs_tags(cls, tags, info: ValidationInfo):
        if info.data.get("featured") and not tags:
            raise ValueError("Featured writings should include tags for better categorization")
        return tags

    @field_validator("thumbnail")
    @classmethod
    def _iframe_needs_thumbnail(cls, thumbnail, info: ValidationInfo):
        if info.data.get("type") == "iframe" and thumbnail is None:
            raise ValueError("Iframe type writings must include a thumbnail image")
        return thumbnail


class WritingContent(ContentModel):
    title: text(1, 100)
    description: text(10, 300)
    writings: items(Writing, 1, 100)
    total_count: whole(ge=0)
    last_updated: Optional[IsoDatetime] = None
    meta_title: Optional[text(max_length=60)] = None
    meta_description: Optional[text(max_length=160)] = None
    social_image: Optional[Url] = None
    tracking_enabled: Flag = True

    @field_validator("total_count")
    @classmethod
    def _count_matches_writings(cls, total_count: int, info: ValidationInfo):
        writings = info.data.get("writings")
        if writings is not None and total_count != len(writings):
            raise ValueError("Total count must match the actual number of writing items")
        return total_count
