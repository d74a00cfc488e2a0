"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
from src.tracker.api.dependencies.repositories import (
    ChatRepo,
    CommentRepo,
    InvitationRepo,
    IssueRepo,
    MembershipRepo,
    MessageRepo,
    ProjectRepo,
    SubscriptionRepo,
    UserRepo,
)
from src.tracker.services import (
    AuthService,
    CommentService,
    InvitationService,
    IssueService,
    MembershipService,
    MessageService,
    ProjectService,
    SubscriptionService,
    UserService,
)


def get_subscription_service(
    subscription_repo: SubscriptionRepo, session: DBSession
) -> SubscriptionService:
    return SubscriptionService(subscription_repo, session)


SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    return UserService(user_repo, session)


def get_auth_service(
    user_repo: UserRepo,
    subscription_service: SubscriptionServiceDep,
    session: DBSession,
) -> AuthService:
    return AuthService(user_repo, subscription_service, session)


def get_membership_service(
    project_repo: ProjectRepo,
    chat_repo: ChatRepo,
    user_repo: UserRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
) -> MembershipService:
    return MembershipService(project_repo, chat_repo, user_repo, membership_repo, session)


def get_invitation_service(
    invitation_repo: InvitationRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> InvitationService:
    return InvitationService(invitation_repo, project_repo, user_repo, session)


MembershipServiceDep = Annotated[MembershipService, Depends(get_membership_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]


def get_project_service(
    project_repo: ProjectRepo,
    chat_repo: ChatRepo,
    membership_repo: MembershipRepo,
    membership_service: MembershipServiceDep,
    invitation_service: InvitationServiceDep,
    subscription_service: SubscriptionServiceDep,
    session: DBSession,
) -> ProjectService:
    """Get the project orchestrator wired to its collaborating services."""
    return ProjectService(
        project_repo,
        chat_repo,
        membership_repo,
        membership_service,
        invitation_service,
        subscription_service,
        session,
    )


def get_issue_service(
    issue_repo: IssueRepo,
    project_repo: ProjectRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
) -> IssueService:
    return IssueService(issue_repo, project_repo, membership_repo, session)


def get_comment_service(
    comment_repo: CommentRepo,
    issue_repo: IssueRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
) -> CommentService:
    return CommentService(comment_repo, issue_repo, membership_repo, session)


def get_message_service(
    message_repo: MessageRepo,
    chat_repo: ChatRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
) -> MessageService:
    return MessageService(message_repo, chat_repo, membership_repo, session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
IssueServiceDep = Annotated[IssueService, Depends(get_issue_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
