"""FastAPI dependency injection definitions."""

from src.tracker.api.dependencies.auth import CurrentUser, get_current_user
from src.tracker.api.dependencies.db import DBSession, get_db_session
from src.tracker.api.dependencies.services import (
    AuthServiceDep,
    CommentServiceDep,
    InvitationServiceDep,
    IssueServiceDep,
    MembershipServiceDep,
    MessageServiceDep,
    ProjectServiceDep,
    SubscriptionServiceDep,
    UserServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentUser",
    "get_current_user",
    # Services
    "AuthServiceDep",
    "CommentServiceDep",
    "InvitationServiceDep",
    "IssueServiceDep",
    "MembershipServiceDep",
    "MessageServiceDep",
    "ProjectServiceDep",
    "SubscriptionServiceDep",
    "UserServiceDep",
]
