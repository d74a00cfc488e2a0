from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import NotFound
from src.tracker.core.logging import get_logger
from src.tracker.models import User
from src.tracker.models.base import touch
from src.tracker.repositories import UserRepository
from src.tracker.schemas.user import UserUpdate

logger = get_logger(__name__)


class UserService:
    """User profile service."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def get_profile(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    async def update_profile(self, user: User, data: UserUpdate) -> User:
        """Update user with provided data."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        try:
            for field, value in update_data.items():
                setattr(user, field, value.strip() if isinstance(value, str) else value)
            touch(user)
            self.user_repo.add(user)
            await self.session.commit()
            await self.session.refresh(user)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Profile updated", user_id=str(user.id), fields=sorted(update_data))
        return user
