from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from portfolio.utils.statuses import ReviewStatusEnum


class ReviewBase(BaseModel):
    name: str
    role: str
    company: str | None = None
    content: str
    rating: int | None = Field(default=None, ge=1, le=5)


class ReviewCreate(ReviewBase):
    pass


class Review(ReviewBase):
    id: str
    status: ReviewStatusEnum = ReviewStatusEnum.pending
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
