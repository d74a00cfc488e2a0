"""Project orchestrator.

Composes the subscription, invitation and membership services into the
project lifecycle. Each public method is one transaction.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.config import get_settings
from src.tracker.core.exceptions import EntitlementExceeded, NotFound, Unauthorized
from src.tracker.core.logging import get_logger
from src.tracker.models import Chat, Invitation, Project, User
from src.tracker.models.base import touch
from src.tracker.repositories import (
    ChatRepository,
    MembershipRepository,
    ProjectRepository,
)
from src.tracker.schemas.project import ProjectCreate, ProjectUpdate
from src.tracker.services.invitation_service import InvitationService
from src.tracker.services.membership_service import MembershipService
from src.tracker.services.subscription_service import SubscriptionService

logger = get_logger(__name__)

NON_NULLABLE_FIELDS = frozenset({"name", "tags"})


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        chat_repo: ChatRepository,
        membership_repo: MembershipRepository,
        membership_service: MembershipService,
        invitation_service: InvitationService,
        subscription_service: SubscriptionService,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.chat_repo = chat_repo
        self.membership_repo = membership_repo
        self.membership_service = membership_service
        self.invitation_service = invitation_service
        self.subscription_service = subscription_service
        self.session = session

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound(f"Project {project_id} not found")
        return project

    async def team_of(self, project_id: UUID) -> list[UUID]:
        return await self.membership_repo.list_project_member_ids(project_id)

    async def assert_owner(self, project_id: UUID, user_id: UUID) -> Project:
        """Return the project if ``user_id`` owns it.

        Raises:
            NotFound: The project does not exist.
            Unauthorized: Someone else owns it.
        """
        project = await self.get_project(project_id)
        if project.owner_id != user_id:
            raise Unauthorized("Only the project owner can perform this action")
        return project

    async def assert_member(self, project_id: UUID, user_id: UUID) -> Project:
        """Return the project if ``user_id`` is on its team.

        Raises:
            NotFound: The project does not exist.
            Unauthorized: The user is not a team member.
        """
        project = await self.get_project(project_id)
        if not await self.membership_repo.is_project_member(project_id, user_id):
            raise Unauthorized("Only team members can view this project")
        return project

    async def create_project(self, draft: ProjectCreate, owner: User) -> Project:
        """Create a project with its chat and the owner as sole member.

        Raises:
            EntitlementExceeded: Project limits are enforced and the owner's
                plan has no room left.
        """
        try:
            if get_settings().enforce_project_limit:
                entitlement = await self.subscription_service.entitlement(owner.id)
                if not entitlement.allows_projects(owner.project_size):
                    raise EntitlementExceeded(
                        f"The {entitlement.plan_type.value} plan allows "
                        f"{entitlement.max_projects} projects"
                    )

            project = Project(
                name=draft.name,
                description=draft.description,
                category=draft.category,
                tags=list(draft.tags),
                owner_id=owner.id,
            )
            self.project_repo.add(project)
            await self.session.flush()

            self.chat_repo.add(Chat(project_id=project.id))
            await self.session.flush()

            await self.membership_service.stage_add(project.id, owner.id)
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=str(project.id), owner_id=str(owner.id))
        return project

    async def update_project(self, project_id: UUID, user_id: UUID, data: ProjectUpdate) -> Project:
        try:
            project = await self.assert_owner(project_id, user_id)
            for field, value in data.model_dump(exclude_unset=True).items():
                # name and tags are never null; description and category may be cleared
                if value is None and field in NON_NULLABLE_FIELDS:
                    continue
                setattr(project, field, value)
            touch(project)
            self.project_repo.add(project)
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project updated", project_id=str(project_id))
        return project

    async def accept_invitation(self, token: str, joining_user_id: UUID) -> Invitation:
        """Redeem a token, join the project, and consume the token atomically.

        Raises:
            NotFound: Unknown or already consumed token.
            Conflict: A concurrent request consumed the token first.
        """
        try:
            invitation = await self.invitation_service.redeem(token, joining_user_id)
            await self.membership_service.stage_add(invitation.project_id, joining_user_id)
            await self.invitation_service.consume(invitation)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Invitation accepted",
            invitation_id=str(invitation.id),
            project_id=str(invitation.project_id),
            user_id=str(joining_user_id),
        )
        return invitation

    async def add_member(self, project_id: UUID, user_id: UUID, requested_by: UUID) -> bool:
        await self.assert_owner(project_id, requested_by)
        return await self.membership_service.add_member(project_id, user_id)

    async def remove_member(self, project_id: UUID, user_id: UUID, requested_by: UUID) -> bool:
        await self.assert_owner(project_id, requested_by)
        return await self.membership_service.remove_member(project_id, user_id)

    async def search_projects(self, keyword: str | None, user: User) -> list[Project]:
        return await self.project_repo.search_for_user(user.id, keyword)

    async def list_projects(
        self, user: User, category: str | None = None, tag: str | None = None
    ) -> list[Project]:
        return await self.project_repo.list_for_user(user.id, category=category, tag=tag)

    async def get_chat(
        self, project_id: UUID, user_id: UUID | None = None
    ) -> tuple[Chat, list[UUID]]:
        """Return the project's chat and its roster.

        When ``user_id`` is given it must be on the chat roster.
        """
        chat = await self.chat_repo.get_by_project_id(project_id)
        if chat is None:
            raise NotFound(f"Chat for project {project_id} not found")
        if user_id is not None and not await self.membership_repo.is_chat_member(
            chat.id, user_id
        ):
            raise Unauthorized("You are not a member of this chat")
        return chat, await self.membership_repo.list_chat_member_ids(chat.id)

    async def delete_project(self, project_id: UUID, requesting_user_id: UUID) -> None:
        """Delete a project and everything hanging off it.

        Chat, messages, rosters, issues, comments and invitations go through
        ON DELETE CASCADE. Each former team member's ``project_size`` drops by one.
        """
        try:
            await self.assert_owner(project_id, requesting_user_id)
            member_ids = await self.membership_service.stage_disband(project_id)
            await self.project_repo.delete_by_id(project_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Project deleted",
            project_id=str(project_id),
            deleted_by=str(requesting_user_id),
            members=len(member_ids),
        )
