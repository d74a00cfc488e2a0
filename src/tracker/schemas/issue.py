"""Issue and comment schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.tracker.models import IssuePriority, IssueStatus


class IssueCreate(BaseModel):
    project_id: UUID
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=4000)
    status: IssueStatus = IssueStatus.TODO
    priority: IssuePriority = IssuePriority.MEDIUM
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Issue title cannot be empty or whitespace only")
        return v


class IssueRead(BaseModel):
    id: UUID
    project_id: UUID
    title: str
    description: str | None
    status: IssueStatus
    priority: IssuePriority
    due_date: date | None
    assignee_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommentCreate(BaseModel):
    issue_id: UUID
    content: str = Field(min_length=1, max_length=4000)


class CommentRead(BaseModel):
    id: UUID
    issue_id: UUID
    user_id: UUID
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
