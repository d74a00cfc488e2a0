"""Test helper functions for common data creation patterns."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.models import Project, User
from src.tracker.repositories import (
    ChatRepository,
    CommentRepository,
    InvitationRepository,
    IssueRepository,
    MembershipRepository,
    MessageRepository,
    ProjectRepository,
    SubscriptionRepository,
    UserRepository,
)
from src.tracker.schemas.project import ProjectCreate
from src.tracker.services import (
    AuthService,
    CommentService,
    InvitationService,
    IssueService,
    MembershipService,
    MessageService,
    ProjectService,
    SubscriptionService,
)
from tests.factories import DEFAULT_TEST_PASSWORD, SubscriptionFactory, UserFactory


def build_project_service(session: AsyncSession) -> ProjectService:
    """Wire the project orchestrator and its collaborators on one session.

    The collaborating services are reachable as attributes:
    ``membership_service``, ``invitation_service`` and ``subscription_service``.
    """
    project_repo = ProjectRepository(session)
    chat_repo = ChatRepository(session)
    user_repo = UserRepository(session)
    membership_repo = MembershipRepository(session)
    return ProjectService(
        project_repo,
        chat_repo,
        membership_repo,
        MembershipService(project_repo, chat_repo, user_repo, membership_repo, session),
        InvitationService(InvitationRepository(session), project_repo, user_repo, session),
        SubscriptionService(SubscriptionRepository(session), session),
        session,
    )


def build_auth_service(session: AsyncSession) -> AuthService:
    return AuthService(
        UserRepository(session),
        SubscriptionService(SubscriptionRepository(session), session),
        session,
    )


def build_issue_service(session: AsyncSession) -> IssueService:
    return IssueService(
        IssueRepository(session), ProjectRepository(session), MembershipRepository(session), session
    )


def build_comment_service(session: AsyncSession) -> CommentService:
    return CommentService(
        CommentRepository(session), IssueRepository(session), MembershipRepository(session), session
    )


def build_message_service(session: AsyncSession) -> MessageService:
    return MessageService(
        MessageRepository(session), ChatRepository(session), MembershipRepository(session), session
    )


async def create_user(session: AsyncSession, with_subscription: bool = True, **user_kwargs) -> User:
    """Create a user, by default with a FREE subscription as signup would.

    Args:
        session: Database session
        with_subscription: Also create the user's subscription row
        **user_kwargs: Additional args passed to UserFactory
    """
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.flush()

    if with_subscription:
        session.add(SubscriptionFactory.build(user_id=user.id))
    await session.commit()
    return user


async def create_project(
    session: AsyncSession,
    owner: User,
    name: str = "Apollo",
    category: str | None = None,
    tags: list[str] | None = None,
) -> Project:
    """Create a fully wired project (chat + owner membership) through the service."""
    service = build_project_service(session)
    draft = ProjectCreate(name=name, category=category, tags=tags or [])
    return await service.create_project(draft, owner)


async def team_and_chat(session: AsyncSession, project_id) -> tuple[set, set]:
    """Return (team user ids, chat roster user ids) for a project."""
    membership_repo = MembershipRepository(session)
    chat = await ChatRepository(session).get_by_project_id(project_id)
    assert chat is not None
    team = set(await membership_repo.list_project_member_ids(project_id))
    chat_users = set(await membership_repo.list_chat_member_ids(chat.id))
    return team, chat_users


async def signup(client: AsyncClient, email: str, full_name: str = "Test User") -> dict[str, str]:
    """Sign a user up over HTTP and return auth headers."""
    response = await client.post(
        "/api/auth/signup",
        json={"email": email, "password": DEFAULT_TEST_PASSWORD, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['jwt']}"}
