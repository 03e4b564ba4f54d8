from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict


class TechnologyBase(BaseModel):
    name: str
    icon_name: str | None = None
    category: str | None = None


class TechnologyCreate(TechnologyBase):
    pass


class TechnologyUpdate(BaseModel):
    name: str | None = None
    icon_name: str | None = None
    category: str | None = None


class Technology(TechnologyBase):
    id: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class TechnologyCategory(BaseModel):
    category: str
    technologies: List[Technology]
