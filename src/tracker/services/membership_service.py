"""Membership synchronizer.

The only writer of the project team and chat roster tables. Every change
touches both rosters under a row lock on the project, so a project's chat
roster always equals its team.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import Conflict, NotFound
from src.tracker.core.logging import get_logger
from src.tracker.models import Chat, Project, User
from src.tracker.repositories import (
    ChatRepository,
    MembershipRepository,
    ProjectRepository,
    UserRepository,
)

logger = get_logger(__name__)


class MembershipService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        chat_repo: ChatRepository,
        user_repo: UserRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.chat_repo = chat_repo
        self.user_repo = user_repo
        self.membership_repo = membership_repo
        self.session = session

    async def _load(self, project_id: UUID, user_id: UUID) -> tuple[Project, Chat, User]:
        project = await self.project_repo.get_for_update(project_id)
        if project is None:
            raise NotFound(f"Project {project_id} not found")
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        chat = await self.chat_repo.get_by_project_id(project_id)
        if chat is None:
            raise NotFound(f"Chat for project {project_id} not found")
        return project, chat, user

    async def stage_add(self, project_id: UUID, user_id: UUID) -> bool:
        """Put the user on the team and the chat roster (flush, no commit).

        Callers composing a larger transaction use this and commit once.

        Returns:
            True if either roster changed.
        """
        _, chat, user = await self._load(project_id, user_id)

        in_team = await self.membership_repo.is_project_member(project_id, user_id)
        in_chat = await self.membership_repo.is_chat_member(chat.id, user_id)

        if not in_team:
            self.membership_repo.add_project_member(project_id, user_id)
            user.project_size += 1
            self.user_repo.add(user)
        if not in_chat:
            self.membership_repo.add_chat_member(chat.id, user_id)

        await self.session.flush()
        return not (in_team and in_chat)

    async def stage_remove(self, project_id: UUID, user_id: UUID) -> bool:
        """Take the user off the team and the chat roster (flush, no commit).

        Raises:
            Conflict: The user owns the project.
        """
        project, chat, user = await self._load(project_id, user_id)
        if project.owner_id == user_id:
            raise Conflict("The project owner cannot be removed from the team")

        removed_from_team = await self.membership_repo.remove_project_member(project_id, user_id)
        removed_from_chat = await self.membership_repo.remove_chat_member(chat.id, user_id)

        if removed_from_team:
            user.project_size = max(0, user.project_size - 1)
            self.user_repo.add(user)

        await self.session.flush()
        return bool(removed_from_team or removed_from_chat)

    async def stage_disband(self, project_id: UUID) -> list[UUID]:
        """Release every team member ahead of a project delete (flush, no commit).

        Decrements ``project_size`` for each member. The roster rows themselves
        go with the project through ON DELETE CASCADE.

        Returns:
            The ids of the released members.
        """
        member_ids = await self.membership_repo.list_project_member_ids(project_id)
        await self.user_repo.adjust_project_size(member_ids, -1)
        await self.session.flush()
        return member_ids

    async def add_member(self, project_id: UUID, user_id: UUID) -> bool:
        """Add a user to a project's team and chat. Idempotent.

        Returns:
            True if the user was added, False if already a member.

        Raises:
            NotFound: Project or user does not exist.
        """
        try:
            changed = await self.stage_add(project_id, user_id)
            await self.session.commit()
        except IntegrityError:
            # A concurrent add inserted the same row first
            await self.session.rollback()
            logger.info(
                "Member already added concurrently",
                project_id=str(project_id),
                user_id=str(user_id),
            )
            return False
        except Exception:
            await self.session.rollback()
            raise

        if changed:
            logger.info("Member added", project_id=str(project_id), user_id=str(user_id))
        return changed

    async def remove_member(self, project_id: UUID, user_id: UUID) -> bool:
        """Remove a user from a project's team and chat. Idempotent.

        Returns:
            True if the user was removed, False if not a member.

        Raises:
            NotFound: Project or user does not exist.
            Conflict: The user owns the project.
        """
        try:
            changed = await self.stage_remove(project_id, user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if changed:
            logger.info("Member removed", project_id=str(project_id), user_id=str(user_id))
        return changed
