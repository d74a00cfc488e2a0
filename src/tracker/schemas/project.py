"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def _normalize_tags(tags: list[str]) -> list[str]:
    """Strip tags, drop blanks and duplicates, keep first-seen order."""
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _strip_optional(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description", "category")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return _strip_optional(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _normalize_tags(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = Field(default=None, max_length=50)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description", "category")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return _strip_optional(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return _normalize_tags(v)


class ProjectRead(BaseModel):
    """Project with its team roster."""

    id: UUID
    name: str
    description: str | None
    category: str | None
    tags: list[str]
    owner_id: UUID
    team: list[UUID] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ChatRead(BaseModel):
    id: UUID
    project_id: UUID
    users: list[UUID]
    created_at: datetime


class DeleteResponse(BaseModel):
    message: str
