"""Repository for Subscription entity."""

from uuid import UUID

from sqlmodel import select

from src.tracker.models import Subscription
from src.tracker.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    model = Subscription

    async def get_by_user_id(self, user_id: UUID) -> Subscription | None:
        result = await self.session.execute(
            select(Subscription).where(Subscription.user_id == user_id)
        )
        return result.scalar_one_or_none()
