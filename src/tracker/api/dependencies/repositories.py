"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
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


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_chat_repository(session: DBSession) -> ChatRepository:
    return ChatRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_invitation_repository(session: DBSession) -> InvitationRepository:
    return InvitationRepository(session)


def get_subscription_repository(session: DBSession) -> SubscriptionRepository:
    return SubscriptionRepository(session)


def get_issue_repository(session: DBSession) -> IssueRepository:
    return IssueRepository(session)


def get_comment_repository(session: DBSession) -> CommentRepository:
    return CommentRepository(session)


def get_message_repository(session: DBSession) -> MessageRepository:
    return MessageRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ChatRepo = Annotated[ChatRepository, Depends(get_chat_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
InvitationRepo = Annotated[InvitationRepository, Depends(get_invitation_repository)]
SubscriptionRepo = Annotated[SubscriptionRepository, Depends(get_subscription_repository)]
IssueRepo = Annotated[IssueRepository, Depends(get_issue_repository)]
CommentRepo = Annotated[CommentRepository, Depends(get_comment_repository)]
MessageRepo = Annotated[MessageRepository, Depends(get_message_repository)]
