from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr


class InvitationRequest(BaseModel):
    email: EmailStr
    project_id: UUID


class ResendInvitationRequest(BaseModel):
    email: EmailStr


class InvitationRead(BaseModel):
    """Invitation as returned after acceptance. The token is never echoed."""

    id: UUID
    email: str
    project_id: UUID
    invited_by_user_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class InvitationSentResponse(BaseModel):
    message: str
