"""Issues and comments, scoped to project team members."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import NotFound, Unauthorized
from src.tracker.core.logging import get_logger
from src.tracker.models import Comment, Issue, IssueStatus
from src.tracker.models.base import touch
from src.tracker.repositories import (
    CommentRepository,
    IssueRepository,
    MembershipRepository,
    ProjectRepository,
)
from src.tracker.schemas.issue import IssueCreate

logger = get_logger(__name__)


class IssueService:
    def __init__(
        self,
        issue_repo: IssueRepository,
        project_repo: ProjectRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.issue_repo = issue_repo
        self.project_repo = project_repo
        self.membership_repo = membership_repo
        self.session = session

    async def _require_member(self, project_id: UUID, user_id: UUID) -> None:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFound(f"Project {project_id} not found")
        if not await self.membership_repo.is_project_member(project_id, user_id):
            raise Unauthorized("Only team members can work on this project's issues")

    async def get_issue(self, issue_id: UUID) -> Issue:
        issue = await self.issue_repo.get_by_id(issue_id)
        if issue is None:
            raise NotFound(f"Issue {issue_id} not found")
        return issue

    async def view_issue(self, issue_id: UUID, user_id: UUID) -> Issue:
        """Return the issue if ``user_id`` is on its project's team."""
        issue = await self.get_issue(issue_id)
        await self._require_member(issue.project_id, user_id)
        return issue

    async def list_for_project(self, project_id: UUID, user_id: UUID) -> list[Issue]:
        await self._require_member(project_id, user_id)
        return await self.issue_repo.list_by_project(project_id)

    async def create_issue(self, data: IssueCreate, user_id: UUID) -> Issue:
        try:
            await self._require_member(data.project_id, user_id)
            issue = Issue(
                project_id=data.project_id,
                title=data.title,
                description=data.description,
                status=data.status.value,
                priority=data.priority.value,
                due_date=data.due_date,
            )
            self.issue_repo.add(issue)
            await self.session.commit()
            await self.session.refresh(issue)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Issue created", issue_id=str(issue.id), project_id=str(issue.project_id))
        return issue

    async def delete_issue(self, issue_id: UUID, user_id: UUID) -> None:
        try:
            issue = await self.get_issue(issue_id)
            await self._require_member(issue.project_id, user_id)
            await self.issue_repo.delete_by_id(issue_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Issue deleted", issue_id=str(issue_id), deleted_by=str(user_id))

    async def assign(self, issue_id: UUID, assignee_id: UUID, user_id: UUID) -> Issue:
        """Assign the issue to a team member."""
        try:
            issue = await self.get_issue(issue_id)
            await self._require_member(issue.project_id, user_id)
            if not await self.membership_repo.is_project_member(issue.project_id, assignee_id):
                raise Unauthorized("Issues can only be assigned to team members")

            issue.assignee_id = assignee_id
            touch(issue)
            self.issue_repo.add(issue)
            await self.session.commit()
            await self.session.refresh(issue)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Issue assigned", issue_id=str(issue_id), assignee_id=str(assignee_id))
        return issue

    async def update_status(self, issue_id: UUID, status: IssueStatus, user_id: UUID) -> Issue:
        try:
            issue = await self.get_issue(issue_id)
            await self._require_member(issue.project_id, user_id)
            issue.status = status.value
            touch(issue)
            self.issue_repo.add(issue)
            await self.session.commit()
            await self.session.refresh(issue)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Issue status changed", issue_id=str(issue_id), status=status.value)
        return issue


class CommentService:
    def __init__(
        self,
        comment_repo: CommentRepository,
        issue_repo: IssueRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.comment_repo = comment_repo
        self.issue_repo = issue_repo
        self.membership_repo = membership_repo
        self.session = session

    async def _get_issue(self, issue_id: UUID) -> Issue:
        issue = await self.issue_repo.get_by_id(issue_id)
        if issue is None:
            raise NotFound(f"Issue {issue_id} not found")
        return issue

    async def create_comment(self, issue_id: UUID, content: str, user_id: UUID) -> Comment:
        try:
            issue = await self._get_issue(issue_id)
            if not await self.membership_repo.is_project_member(issue.project_id, user_id):
                raise Unauthorized("Only team members can comment on this issue")

            comment = Comment(issue_id=issue_id, user_id=user_id, content=content)
            self.comment_repo.add(comment)
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment created", comment_id=str(comment.id), issue_id=str(issue_id))
        return comment

    async def list_for_issue(self, issue_id: UUID, user_id: UUID) -> list[Comment]:
        issue = await self._get_issue(issue_id)
        if not await self.membership_repo.is_project_member(issue.project_id, user_id):
            raise Unauthorized("Only team members can read comments on this issue")
        return await self.comment_repo.list_by_issue(issue_id)

    async def delete_comment(self, comment_id: UUID, user_id: UUID) -> None:
        """Delete a comment. Only its author may do so."""
        try:
            comment = await self.comment_repo.get_by_id(comment_id)
            if comment is None:
                raise NotFound(f"Comment {comment_id} not found")
            if comment.user_id != user_id:
                raise Unauthorized("Only the author can delete a comment")
            await self.comment_repo.delete_by_id(comment_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment deleted", comment_id=str(comment_id))
