"""Projects page content schema"""

from typing import Literal, Optional

from folio.core.schemas.common import (
    ContentModel, Flag, IsoDatetime, Slug, Url, WebUrl, items, text, whole,
)


class Technology(ContentModel):
    name: text(1, 50)
    category: Literal["frontend", "backend", "database", "devops", "mobile", "ai-ml", "other"]
    version: Optional[text(max_length=20)] = None
    icon: Optional[Url] = None


class ProjectMetrics(ContentModel):
    users: Optional[whole(ge=0)] = None
    transactions: Optional[whole(ge=0)] = None
    performance: Optional[text(max_length=100)] = None
    uptime: Optional[text(max_length=50)] = None
    cost: Optional[text(max_length=50)] = None


class ProjectLink(ContentModel):
    label: text(1, 50)
    url: WebUrl
    type: Literal["demo", "github", "documentation", "case-study", "other"]
    external: Flag = True


class CaseStudy(ContentModel):
    overview: text(20, 1000)
    challenge: text(20, 500)
    solution: text(20, 500)
    results: text(20, 500)
    lessons: Optional[items(text(10), max_length=5)] = None


class Project(ContentModel):
    id: Slug
    title: text(1, 200)
    description: text(10, 500)
    short_description: text(5, 150)
    category: Literal["web-app", "mobile-app", "api", "ecommerce", "fintech", "saas", "open-source", "other"]
    client: text(1, 100)
    technologies: items(Technology, 1, 20)
    start_date: IsoDatetime
    end_date: Optional[IsoDatetime] = None
    status: Literal["completed", "in-progress", "on-hold", "archived"]
    featured: Flag = False
    thumbnail: Optional[WebUrl] = None
    images: Optional[items(Url, max_length=10)] = None
    metrics: Optional[ProjectMetrics] = None
    case_study: Optional[CaseStudy] = None
    links: Optional[items(ProjectLink, max_length=10)] = None
    team_size: Optional[whole(1, 100)] = None
    role: text(1, 100)
    responsibilities: Optional[items(text(10), max_length=10)] = None
    meta_title: Optional[text(max_length=60)] = None
    meta_description: Optional[text(max_length=160)] = None
    social_image: Optional[Url] = None
    tracking_id: Optional[text(max_length=100)] = None


class ProjectsContent(ContentModel):
    title: text(1, 100)
    description: text(10, 500)
    meta_title: text(max_length=60)
    meta_description: text(max_length=160)
    social_image: Optional[Url] = None
    last_updated: IsoDatetime
    tracking_enabled: Flag = True
    projects: items(Project, 1)
