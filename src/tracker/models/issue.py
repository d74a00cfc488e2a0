"""Issue tracking models."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now
from src.tracker.models.enums import IssuePriority, IssueStatus


class Issue(SQLModel, table=True):
    __tablename__ = "issues"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=4000)
    status: str = Field(default=IssueStatus.TODO.value, max_length=20)
    priority: str = Field(default=IssuePriority.MEDIUM.value, max_length=20)
    due_date: date | None = Field(default=None)
    assignee_id: UUID | None = Field(
        default=None, foreign_key="users.id", index=True, ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Comment(SQLModel, table=True):
    __tablename__ = "comments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    issue_id: UUID = Field(foreign_key="issues.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    content: str = Field(max_length=4000)
    created_at: datetime = Field(default_factory=utc_now)
