"""Project invitation model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now


class Invitation(SQLModel, table=True):
    """Outstanding single-use invitation.

    The row is deleted when the token is redeemed or revoked, so existence
    of the row is the only validity check.
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, index=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    token: str = Field(max_length=64, unique=True, index=True)
    invited_by_user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)
