"""Invitation issuer and redeemer."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import Conflict, DeliveryError, NotFound, Unauthorized
from src.tracker.core.logging import get_logger
from src.tracker.core.notifications import send_invitation_email
from src.tracker.core.security import generate_invitation_token
from src.tracker.models import Invitation, Project
from src.tracker.repositories import InvitationRepository, ProjectRepository, UserRepository

logger = get_logger(__name__)


class InvitationService:
    """Mint, deliver, look up and revoke single-use project invitations."""

    def __init__(
        self,
        invitation_repo: InvitationRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.invitation_repo = invitation_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.session = session

    async def _owned_project(self, project_id: UUID, user_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound(f"Project {project_id} not found")
        if project.owner_id != user_id:
            raise Unauthorized("Only the project owner can manage invitations")
        return project

    async def _deliver(self, invitation: Invitation, project: Project) -> None:
        inviter = await self.user_repo.get_by_id(invitation.invited_by_user_id)
        try:
            send_invitation_email(
                to=invitation.email,
                token=invitation.token,
                project_name=project.name,
                inviter_name=inviter.full_name if inviter else "A teammate",
            )
        except DeliveryError as e:
            logger.error(
                "Invitation email failed",
                invitation_id=str(invitation.id),
                project_id=str(project.id),
                error=e.message,
            )
            raise DeliveryError(
                f"Invitation for {invitation.email} was saved but the email could not be "
                "delivered. Resend it to try again."
            ) from e

    async def send_invitation(self, email: str, project_id: UUID, invited_by: UUID) -> Invitation:
        """Create an invitation and email its token to the invitee.

        The row is committed before delivery. A failed delivery leaves the
        invitation in place so it can be resent.

        Raises:
            NotFound: The project does not exist.
            Unauthorized: ``invited_by`` does not own the project.
            DeliveryError: The email transport failed.
        """
        email = email.lower().strip()
        try:
            project = await self._owned_project(project_id, invited_by)
            invitation = Invitation(
                email=email,
                project_id=project_id,
                token=generate_invitation_token(),
                invited_by_user_id=invited_by,
            )
            self.invitation_repo.add(invitation)
            await self.session.commit()
            await self.session.refresh(invitation)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Invitation created",
            invitation_id=str(invitation.id),
            project_id=str(project_id),
            invited_by=str(invited_by),
        )
        await self._deliver(invitation, project)
        return invitation

    async def resend_invitation(self, email: str, requested_by: UUID) -> Invitation:
        """Re-deliver the newest outstanding invitation for ``email``."""
        invitation = await self.invitation_repo.get_latest_by_email(email)
        if invitation is None:
            raise NotFound(f"No outstanding invitation for {email}")
        project = await self._owned_project(invitation.project_id, requested_by)

        await self._deliver(invitation, project)
        logger.info("Invitation resent", invitation_id=str(invitation.id))
        return invitation

    async def redeem(self, token: str, acting_user_id: UUID) -> Invitation:
        """Resolve a presented token to its invitation. Read only.

        Raises:
            NotFound: No outstanding invitation carries this token.
        """
        invitation = await self.invitation_repo.get_by_token(token)
        if invitation is None:
            raise NotFound("Invitation not found or already used")
        logger.debug(
            "Invitation redeemed",
            invitation_id=str(invitation.id),
            acting_user_id=str(acting_user_id),
        )
        return invitation

    async def token_for_email(self, email: str) -> str:
        invitation = await self.invitation_repo.get_latest_by_email(email)
        if invitation is None:
            raise NotFound(f"No outstanding invitation for {email}")
        return invitation.token

    async def consume(self, invitation: Invitation) -> None:
        """Delete the invitation within the caller's transaction (no commit).

        Raises:
            Conflict: Another request consumed the token first.
        """
        deleted = await self.invitation_repo.delete_by_token(invitation.token)
        if deleted == 0:
            raise Conflict("Invitation was already used")

    async def revoke(self, token: str, requested_by: UUID | None = None) -> None:
        """Delete the invitation for ``token``. Idempotent.

        When ``requested_by`` is given, only the owner of the invited-to
        project may revoke.
        """
        try:
            if requested_by is not None:
                invitation = await self.invitation_repo.get_by_token(token)
                if invitation is None:
                    return
                await self._owned_project(invitation.project_id, requested_by)

            deleted = await self.invitation_repo.delete_by_token(token)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if deleted:
            logger.info("Invitation revoked", requested_by=str(requested_by))
