"""Repositories for issues, their comments and chat messages."""

from uuid import UUID

from sqlmodel import select

from src.tracker.models import Comment, Issue, Message
from src.tracker.repositories.base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    model = Issue

    async def list_by_project(self, project_id: UUID) -> list[Issue]:
        result = await self.session.execute(
            select(Issue)
            .where(Issue.project_id == project_id)
            .order_by(Issue.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    async def list_by_issue(self, issue_id: UUID) -> list[Comment]:
        result = await self.session.execute(
            select(Comment)
            .where(Comment.issue_id == issue_id)
            .order_by(Comment.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())


class MessageRepository(BaseRepository[Message]):
    model = Message

    async def list_by_chat(self, chat_id: UUID) -> list[Message]:
        """Messages in the order they were sent."""
        result = await self.session.execute(
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())
