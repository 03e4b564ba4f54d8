from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict

from .technologies import Technology


class Profile(BaseModel):
    id: str
    full_name: str
    headline: str | None = None
    bio: str | None = None
    email: str | None = None
    location: str | None = None
    avatar_url: str | None = None
    resume_url: str | None = None
    model_config = ConfigDict(from_attributes=True)


class Experience(BaseModel):
    id: str
    company: str
    role: str
    description: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    sort_order: int = 0
    technologies: List[Technology] = []
    model_config = ConfigDict(from_attributes=True)


class Education(BaseModel):
    id: str
    institution: str
    degree: str
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    sort_order: int = 0
    model_config = ConfigDict(from_attributes=True)


class Certification(BaseModel):
    id: str
    name: str
    issuer: str
    issued_date: str | None = None
    credential_url: str | None = None
    is_active: bool = True
    sort_order: int = 0
    model_config = ConfigDict(from_attributes=True)


class FunFact(BaseModel):
    id: str
    category: str
    category_icon_name: str | None = None
    title: str
    description: str | None = None
    sort_order: int = 0
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class FunFactCategory(BaseModel):
    category: str
    category_icon_name: str | None = None
    items: List[FunFact]
