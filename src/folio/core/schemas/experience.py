"""Experience (work history, education, certifications) content schema"""

from typing import Annotated, Literal, Optional

from pydantic import Field, Strict

from folio.core.schemas.common import (
    ContentModel, Flag, IsoDatetime, MetaDescription, MetaTitle, Slug, Url, WebUrl, items, text, whole,
)


class Technology(ContentModel):
    name: text(1, 100)
    category: Literal["frontend", "backend", "database", "devops", "mobile", "ai-ml", "other"]
    version: Optional[text(max_length=20)] = None


class Achievement(ContentModel):
    title: text(1, 200)
    description: text(10, 500)
    impact: Optional[text(max_length=200)] = None
    date: Optional[IsoDatetime] = None


class WorkExperience(ContentModel):
    id: Slug
    company: text(1, 200)
    position: text(1, 200)
    location: text(1, 200)
    start_date: IsoDatetime
    end_date: Optional[IsoDatetime] = None
    current: Flag = False
    description: text(10, 1000)
    responsibilities: items(str, 1, 20)
    technologies: items(Technology, 1, 30)
    achievements: Optional[items(Achievement, max_length=10)] = None
    company_url: Optional[WebUrl] = None
    company_logo: Optional[Url] = None
    industry: text(1, 100)
    team_size: Optional[whole(1, 1000)] = None
    project_type: Literal["full-time", "contract", "freelance", "part-time", "internship"]
    featured: Flag = False


class Education(ContentModel):
    id: Slug
    institution: text(1, 200)
    degree: text(1, 200)
    field: text(1, 200)
    start_date: IsoDatetime
    end_date: Optional[IsoDatetime] = None
    current: Flag = False
    description: Optional[text(10, 500)] = None
    gpa: Optional[Annotated[float, Strict(), Field(ge=0, le=4.0)]] = None
    achievements: Optional[items(str, max_length=10)] = None
    institution_url: Optional[WebUrl] = None
    location: text(1, 200)
    featured: Flag = False


class Certification(ContentModel):
    id: Slug
    name: text(1, 200)
    issuer: text(1, 200)
    issue_date: IsoDatetime
    expiry_date: Optional[IsoDatetime] = None
    credential_id: Optional[text(max_length=100)] = None
    credential_url: Optional[WebUrl] = None
    description: Optional[text(10, 500)] = None
    featured: Flag = False


class TotalExperience(ContentModel):
    years: whole(0, 50)
    months: whole(0, 11)


class ExperienceContent(ContentModel):
    work_experience: items(WorkExperience, 1, 50)
    education: items(Education, 1, 20)
    certifications: Optional[items(Certification, max_length=30)] = None
    summary: text(10, 1000)
    total_experience: TotalExperience
    skills_summary: items(str, 1, 20)
    meta_title: MetaTitle
    meta_description: MetaDescription
    social_image: Optional[Url] = None
    tracking_enabled: Flag = True
    last_updated: IsoDatetime
