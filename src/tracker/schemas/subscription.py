from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.tracker.models import PlanType


class SubscriptionRead(BaseModel):
    id: UUID
    user_id: UUID
    plan_type: PlanType
    start_time: datetime
    end_time: datetime
    is_active: bool
    max_projects: int | None = None

    model_config = {"from_attributes": True}
