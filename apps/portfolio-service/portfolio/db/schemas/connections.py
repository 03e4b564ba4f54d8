from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from portfolio.utils.statuses import InboxStatusEnum


class ConnectionBase(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ConnectionCreate(ConnectionBase):
    pass


class Connection(ConnectionBase):
    id: str
    status: InboxStatusEnum = InboxStatusEnum.unread
    reply_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class InboxStatusUpdate(BaseModel):
    status: InboxStatusEnum


class ReplyCreate(BaseModel):
    message: str
