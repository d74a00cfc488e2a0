"""Unit tests for InvitationService with mocked repositories."""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from src.tracker.core.exceptions import Conflict, DeliveryError, NotFound, Unauthorized
from src.tracker.models import Invitation
from src.tracker.services.invitation_service import InvitationService
from tests.factories import InvitationFactory, ProjectFactory, UserFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def owner():
    return UserFactory.build(full_name="Olivia Owner")


@pytest.fixture
def project(owner):
    return ProjectFactory.build(name="Apollo", owner_id=owner.id)


@pytest.fixture
def mock_invitation_repo() -> MagicMock:
    """Create mock invitation repository."""
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_token = AsyncMock(return_value=None)
    repo.get_latest_by_email = AsyncMock(return_value=None)
    repo.delete_by_token = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def mock_project_repo(project) -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=project)
    return repo


@pytest.fixture
def mock_user_repo(owner) -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=owner)
    return repo


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def service(mock_invitation_repo, mock_project_repo, mock_user_repo, mock_session):
    return InvitationService(mock_invitation_repo, mock_project_repo, mock_user_repo, mock_session)


class TestSendInvitation:
    """Tests for the invitation issuer."""

    async def test_persists_before_delivery(
        self,
        service,
        mock_invitation_repo,
        mock_session,
        mock_send_invitation_email,
        project,
        owner,
    ):
        """The row is committed before the email goes out."""
        order: list[str] = []
        mock_session.commit.side_effect = lambda: order.append("commit")
        mock_send_invitation_email.side_effect = lambda **_: order.append("send")

        invitation = await service.send_invitation("Bob@X.com ", project.id, owner.id)

        assert order == ["commit", "send"]
        mock_invitation_repo.add.assert_called_once_with(invitation)
        assert invitation.email == "bob@x.com"
        assert invitation.project_id == project.id
        assert invitation.invited_by_user_id == owner.id

    async def test_token_is_uuid_string(
        self, service, mock_send_invitation_email, project, owner
    ):
        """Tokens are random UUID strings."""
        invitation = await service.send_invitation("bob@x.com", project.id, owner.id)

        assert str(UUID(invitation.token)) == invitation.token

    async def test_email_carries_token_and_project(
        self, service, mock_send_invitation_email, project, owner
    ):
        invitation = await service.send_invitation("bob@x.com", project.id, owner.id)

        mock_send_invitation_email.assert_called_once_with(
            to="bob@x.com",
            token=invitation.token,
            project_name="Apollo",
            inviter_name="Olivia Owner",
        )

    async def test_delivery_failure_keeps_invitation(
        self, service, mock_session, mock_send_invitation_email, project, owner
    ):
        """A transport error surfaces as DeliveryError; the committed row is not rolled back."""
        mock_send_invitation_email.side_effect = DeliveryError("smtp down")

        with pytest.raises(DeliveryError, match="was saved"):
            await service.send_invitation("bob@x.com", project.id, owner.id)

        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_called()

    async def test_missing_project(
        self, service, mock_project_repo, mock_invitation_repo, mock_session, owner
    ):
        mock_project_repo.get_by_id.return_value = None

        with pytest.raises(NotFound):
            await service.send_invitation("bob@x.com", uuid4(), owner.id)

        mock_invitation_repo.add.assert_not_called()
        mock_session.rollback.assert_awaited_once()

    async def test_non_owner_cannot_invite(
        self, service, mock_invitation_repo, mock_send_invitation_email, project
    ):
        """Only the project owner may invite."""
        with pytest.raises(Unauthorized):
            await service.send_invitation("bob@x.com", project.id, uuid4())

        mock_invitation_repo.add.assert_not_called()
        mock_send_invitation_email.assert_not_called()


class TestResendInvitation:
    async def test_resends_latest_token(
        self, service, mock_invitation_repo, mock_send_invitation_email, project, owner
    ):
        invitation = InvitationFactory.build(
            email="bob@x.com", project_id=project.id, invited_by_user_id=owner.id
        )
        mock_invitation_repo.get_latest_by_email.return_value = invitation

        result = await service.resend_invitation("bob@x.com", owner.id)

        assert result is invitation
        assert mock_send_invitation_email.call_args.kwargs["token"] == invitation.token

    async def test_nothing_to_resend(self, service, owner):
        with pytest.raises(NotFound):
            await service.resend_invitation("nobody@x.com", owner.id)


class TestRedeemer:
    """Tests for redeem, token_for_email, consume and revoke."""

    async def test_redeem_unknown_token(self, service):
        with pytest.raises(NotFound):
            await service.redeem("does-not-exist", uuid4())

    async def test_redeem_does_not_delete(self, service, mock_invitation_repo):
        """redeem() is a pure lookup."""
        invitation = InvitationFactory.build(project_id=uuid4(), invited_by_user_id=uuid4())
        mock_invitation_repo.get_by_token.return_value = invitation

        assert await service.redeem(invitation.token, uuid4()) is invitation
        mock_invitation_repo.delete_by_token.assert_not_called()

    async def test_redeem_ignores_invitee_email(self, service, mock_invitation_repo):
        """Any authenticated user holding the token may redeem it."""
        invitation = InvitationFactory.build(
            email="someone-else@x.com", project_id=uuid4(), invited_by_user_id=uuid4()
        )
        mock_invitation_repo.get_by_token.return_value = invitation

        assert await service.redeem(invitation.token, uuid4()) is invitation

    async def test_token_for_email(self, service, mock_invitation_repo):
        invitation = Invitation(
            email="bob@x.com", project_id=uuid4(), token="tok-1", invited_by_user_id=uuid4()
        )
        mock_invitation_repo.get_latest_by_email.return_value = invitation

        assert await service.token_for_email("bob@x.com") == "tok-1"

    async def test_token_for_email_missing(self, service):
        with pytest.raises(NotFound):
            await service.token_for_email("bob@x.com")

    async def test_consume_conflict_when_already_deleted(self, service, mock_invitation_repo):
        """Losing the delete race raises Conflict."""
        mock_invitation_repo.delete_by_token.return_value = 0
        invitation = InvitationFactory.build(project_id=uuid4(), invited_by_user_id=uuid4())

        with pytest.raises(Conflict):
            await service.consume(invitation)

    async def test_consume_does_not_commit(self, service, mock_session):
        invitation = InvitationFactory.build(project_id=uuid4(), invited_by_user_id=uuid4())

        await service.consume(invitation)

        mock_session.commit.assert_not_called()

    async def test_revoke_is_idempotent(self, service, mock_invitation_repo, mock_session):
        """Revoking an unknown token succeeds silently."""
        mock_invitation_repo.delete_by_token.return_value = 0

        await service.revoke("gone")
        await service.revoke("gone")

        assert mock_session.commit.await_count == 2

    async def test_revoke_by_non_owner(self, service, mock_invitation_repo, project):
        invitation = InvitationFactory.build(project_id=project.id, invited_by_user_id=uuid4())
        mock_invitation_repo.get_by_token.return_value = invitation

        with pytest.raises(Unauthorized):
            await service.revoke(invitation.token, requested_by=uuid4())

        mock_invitation_repo.delete_by_token.assert_not_called()
