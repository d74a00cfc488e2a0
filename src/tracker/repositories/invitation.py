"""Repository for Invitation entity."""

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import Invitation
from src.tracker.repositories.base import BaseRepository


class InvitationRepository(BaseRepository[Invitation]):
    model = Invitation

    async def get_by_token(self, token: str) -> Invitation | None:
        result = await self.session.execute(select(Invitation).where(Invitation.token == token))
        return result.scalar_one_or_none()

    async def get_latest_by_email(self, email: str) -> Invitation | None:
        """Most recently issued outstanding invitation for an email."""
        result = await self.session.execute(
            select(Invitation)
            .where(Invitation.email == email.lower())
            .order_by(Invitation.created_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_by_token(self, token: str) -> int:
        """Delete the invitation carrying ``token``.

        Returns:
            Rows deleted. When two transactions race on the same token only
            one of them sees 1.
        """
        result = await self.session.execute(
            delete(Invitation).where(Invitation.token == token)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
