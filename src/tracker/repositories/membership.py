"""Repository for the project team and chat roster junction tables.

Only the membership service should call the mutating methods here.
"""

from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.tracker.models import ChatMember, ProjectMember


class MembershipRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_project_member(self, project_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def is_chat_member(self, chat_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            select(ChatMember).where(
                ChatMember.chat_id == chat_id,
                ChatMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def list_project_member_ids(self, project_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_chat_member_ids(self, chat_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(ChatMember.user_id)
            .where(ChatMember.chat_id == chat_id)
            .order_by(ChatMember.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    def add_project_member(self, project_id: UUID, user_id: UUID) -> None:
        """Stage a team row (no flush/commit)."""
        self.session.add(ProjectMember(project_id=project_id, user_id=user_id))

    def add_chat_member(self, chat_id: UUID, user_id: UUID) -> None:
        """Stage a chat roster row (no flush/commit)."""
        self.session.add(ChatMember(chat_id=chat_id, user_id=user_id))

    async def remove_project_member(self, project_id: UUID, user_id: UUID) -> int:
        """Delete a team row. Returns rows removed (0 or 1)."""
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.project_id == project_id,  # type: ignore[arg-type]
                ProjectMember.user_id == user_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def remove_chat_member(self, chat_id: UUID, user_id: UUID) -> int:
        """Delete a chat roster row. Returns rows removed (0 or 1)."""
        result = await self.session.execute(
            delete(ChatMember).where(
                ChatMember.chat_id == chat_id,  # type: ignore[arg-type]
                ChatMember.user_id == user_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
