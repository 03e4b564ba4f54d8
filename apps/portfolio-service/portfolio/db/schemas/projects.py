from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict

from .technologies import Technology


class ProjectBase(BaseModel):
    title: str
    description: str = ''
    image_url: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    live_url: str | None = None
    repo_url: str | None = None
    is_featured: bool = False
    sort_order: int = 0


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    live_url: str | None = None
    repo_url: str | None = None
    is_featured: bool | None = None
    sort_order: int | None = None


class Project(ProjectBase):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    technologies: List[Technology] = []
    model_config = ConfigDict(from_attributes=True)

    @property
    def technology_ids(self) -> List[str]:
        return [t.id for t in self.technologies]
