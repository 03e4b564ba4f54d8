from datetime import datetime
from pydantic import BaseModel, ConfigDict

from portfolio.utils.statuses import FeedbackPriorityEnum, FeedbackTypeEnum, InboxStatusEnum


class FeedbackBase(BaseModel):
    type: FeedbackTypeEnum = FeedbackTypeEnum.feedback
    content: str
    priority: FeedbackPriorityEnum | None = None
    connection_id: str | None = None


class FeedbackCreate(FeedbackBase):
    pass


class Feedback(FeedbackBase):
    id: str
    status: InboxStatusEnum = InboxStatusEnum.unread
    reply_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class FeedbackSender(BaseModel):
    name: str
    email: str
    subject: str
    status: InboxStatusEnum
    model_config = ConfigDict(from_attributes=True)


class FeedbackWithSender(Feedback):
    sender: FeedbackSender | None = None
