"""Subscription model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now
from src.tracker.models.enums import PlanType


class Subscription(SQLModel, table=True):
    """A user's plan and its entitlement window. One per user, never deleted."""

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, ondelete="CASCADE")
    plan_type: str = Field(default=PlanType.FREE.value, max_length=20)
    start_time: datetime = Field(default_factory=utc_now)
    end_time: datetime
    is_active: bool = Field(default=True)
