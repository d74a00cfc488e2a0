"""Repositories for Project and its companion Chat."""

from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.tracker.models import Chat, Project, ProjectMember
from src.tracker.repositories.base import BaseRepository


def _visible_to(user_id: UUID):  # type: ignore[no-untyped-def]
    """Projects the user owns or belongs to."""
    member_of = select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
    return or_(
        Project.owner_id == user_id,  # type: ignore[arg-type]
        Project.id.in_(member_of),  # type: ignore[attr-defined]
    )


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def get_for_update(self, project_id: UUID) -> Project | None:
        """Get a project and lock its row until the transaction ends.

        Serializes roster changes on the same project. SQLite ignores the lock.
        """
        result = await self.session.execute(
            select(Project).where(Project.id == project_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UUID,
        category: str | None = None,
        tag: str | None = None,
    ) -> list[Project]:
        """List projects visible to a user, optionally filtered.

        Args:
            user_id: Owner or team member
            category: Exact category match
            tag: Project must carry this tag

        Both filters apply together when given.
        """
        query = select(Project).where(_visible_to(user_id))
        if category:
            query = query.where(Project.category == category)
        query = query.order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(query)
        projects = list(result.scalars().all())
        # JSON containment differs per dialect, so the tag filter runs here
        if tag:
            projects = [p for p in projects if tag in p.tags]
        return projects

    async def search_for_user(self, user_id: UUID, keyword: str | None) -> list[Project]:
        """Case-insensitive substring search on project name among visible projects."""
        query = select(Project).where(_visible_to(user_id))
        if keyword:
            query = query.where(
                func.lower(Project.name).contains(keyword.lower(), autoescape=True)
            )
        query = query.order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(query)
        return list(result.scalars().all())


class ChatRepository(BaseRepository[Chat]):
    model = Chat

    async def get_by_project_id(self, project_id: UUID) -> Chat | None:
        result = await self.session.execute(select(Chat).where(Chat.project_id == project_id))
        return result.scalar_one_or_none()
