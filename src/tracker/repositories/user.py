"""Repository for User entity."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.tracker.models import User
from src.tracker.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def adjust_project_size(self, user_ids: Iterable[UUID], delta: int) -> None:
        """Shift ``project_size`` for the given users by ``delta`` (floored at zero)."""
        ids = list(user_ids)
        if not ids:
            return
        await self.session.execute(
            update(User)
            .where(User.id.in_(ids))  # type: ignore[attr-defined]
            .values(project_size=User.project_size + delta)
        )
        if delta < 0:
            await self.session.execute(
                update(User)
                .where(User.id.in_(ids))  # type: ignore[attr-defined]
                .where(User.project_size < 0)  # type: ignore[arg-type]
                .values(project_size=0)
            )
