from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    project_id: UUID
    content: str = Field(min_length=1, max_length=4000)


class MessageRead(BaseModel):
    id: UUID
    chat_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
