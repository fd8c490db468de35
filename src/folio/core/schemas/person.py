"""Person (profile) content schema"""

from typing import Literal, Optional

from pydantic import EmailStr

from folio.core.schemas.common import (
    ContentModel, Flag, IsoDatetime, MetaDescription, MetaTitle, Url, WebUrl, items, text, whole,
)


class SocialLink(ContentModel):
    platform: Literal["github", "linkedin", "twitter", "medium", "devto", "personal", "other"]
    url: WebUrl
    username: text(1, 100)
    display_name: text(1, 100)
    verified: Flag = False


class Skill(ContentModel):
    name: text(1, 100)
    category: Literal["programming", "framework", "database", "cloud", "devops", "tool", "language", "other"]
    proficiency: Literal["beginner", "intermediate", "advanced", "expert"]
    years_of_experience: Optional[whole(0, 50)] = None
    icon: Optional[Url] = None
    description: Optional[text(max_length=200)] = None


class Availability(ContentModel):
    status: Literal["available", "busy", "unavailable", "part-time"]
    message: Optional[text(max_length=200)] = None
    available_from: Optional[IsoDatetime] = None
    response_time: Optional[text(max_length=50)] = None


class Location(ContentModel):
    city: text(1, 100)
    country: text(1, 100)
    timezone: Optional[text(max_length=50)] = None


class ProfessionalExperience(ContentModel):
    years: whole(0, 50)
    focus: items(str, 1, 10)


class PersonContent(ContentModel):
    name: text(1, 100)
    title: text(1, 200)
    email: EmailStr
    phone: Optional[text(max_length=20)] = None
    summary: text(10, 1000)
    bio: Optional[text(50, 2000)] = None
    location: Location
    social: items(SocialLink, 1, 10)
    skills: items(Skill, 1, 50)
    availability: Optional[Availability] = None
    experience: ProfessionalExperience
    avatar: Optional[Url] = None
    banner: Optional[Url] = None
    meta_title: MetaTitle
    meta_description: MetaDescription
    social_image: Optional[Url] = None
    tracking_enabled: Flag = True
    last_updated: IsoDatetime
