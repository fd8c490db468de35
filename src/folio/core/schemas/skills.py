"""Skills page content schema"""

from typing import Literal, Optional

from folio.core.schemas.common import (
    ContentModel, Flag, HexColor, IsoDatetime, MetaDescription, MetaTitle, Url, WebUrl, items, text, whole,
)


Proficiency = Literal["beginner", "intermediate", "advanced", "expert"]
ShortSlug = text(1, 50, r"^[a-z0-9-]+$")


class SkillCategory(ContentModel):
    id: ShortSlug
    name: text(1, 100)
    description: text(10, 500)
    icon: Optional[Url] = None
    color: Optional[HexColor] = None
    order: whole(0, 100)


class Skill(ContentModel):
    id: ShortSlug
    name: text(1, 100)
    category: text(1, 50)
    proficiency: Proficiency
    years_of_experience: whole(0, 50)
    description: Optional[text(10, 500)] = None
    icon: Optional[Url] = None
    logo: Optional[Url] = None
    website: Optional[WebUrl] = None
    documentation: Optional[WebUrl] = None
    projects: Optional[items(str, max_length=10)] = None
    certifications: Optional[items(str, max_length=5)] = None
    featured: Flag = False
    order: whole(0, 100)
    tags: Optional[items(str, max_length=10)] = None
    last_used: Optional[IsoDatetime] = None


class YearsRange(ContentModel):
    min: whole(0, 50)
    max: whole(0, 50)


class SkillLevel(ContentModel):
    level: Proficiency
    description: text(10, 200)
    years_range: YearsRange
    color: HexColor


class SkillsSummary(ContentModel):
    total_skills: whole(ge=0)
    categories: whole(ge=0)
    years_of_experience: whole(0, 50)
    expert_skills: whole(ge=0)
    advanced_skills: whole(ge=0)
    intermediate_skills: whole(ge=0)
    beginner_skills: whole(ge=0)


class SkillsContent(ContentModel):
    title: text(1, 200)
    description: text(10, 500)
    categories: items(SkillCategory, 1, 20)
    skills: items(Skill, 1, 200)
    levels: items(SkillLevel, 1, 10)
    summary: SkillsSummary
    featured_skills: Optional[items(str, max_length=20)] = None
    skills_by_category: Optional[dict[str, list[str]]] = None
    meta_title: MetaTitle
    meta_description: MetaDescription
    social_image: Optional[Url] = None
    tracking_enabled: Flag = True
    last_updated: IsoDatetime
