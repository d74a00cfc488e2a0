"""Project, its team roster and its companion chat."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index
from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    category: str | None = Field(default=None, max_length=100, index=True)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    """Junction table for the project team."""

    __tablename__ = "project_members"
    __table_args__ = (Index("ix_project_members_user", "user_id"),)

    project_id: UUID = Field(foreign_key="projects.id", primary_key=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)


class Chat(SQLModel, table=True):
    """Group chat owned 1:1 by a project."""

    __tablename__ = "chats"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", unique=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)


class ChatMember(SQLModel, table=True):
    """Junction table for the chat roster."""

    __tablename__ = "chat_members"
    __table_args__ = (Index("ix_chat_members_user", "user_id"),)

    chat_id: UUID = Field(foreign_key="chats.id", primary_key=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)


class Message(SQLModel, table=True):
    """Append-only chat message."""

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_chat_created", "chat_id", "created_at"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    chat_id: UUID = Field(foreign_key="chats.id", ondelete="CASCADE")
    sender_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    content: str = Field(max_length=4000)
    created_at: datetime = Field(default_factory=utc_now)
