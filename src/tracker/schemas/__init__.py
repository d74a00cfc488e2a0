from src.tracker.schemas.auth import AuthResponse, SigninRequest, SignupRequest
from src.tracker.schemas.invitation import (
    InvitationRead,
    InvitationRequest,
    InvitationSentResponse,
    ResendInvitationRequest,
)
from src.tracker.schemas.issue import CommentCreate, CommentRead, IssueCreate, IssueRead
from src.tracker.schemas.message import MessageCreate, MessageRead
from src.tracker.schemas.project import (
    ChatRead,
    DeleteResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.tracker.schemas.subscription import SubscriptionRead
from src.tracker.schemas.user import UserRead, UserUpdate

__all__ = [
    # Auth
    "AuthResponse",
    "SigninRequest",
    "SignupRequest",
    # Invitations
    "InvitationRead",
    "InvitationRequest",
    "InvitationSentResponse",
    "ResendInvitationRequest",
    # Issues
    "CommentCreate",
    "CommentRead",
    "IssueCreate",
    "IssueRead",
    # Messages
    "MessageCreate",
    "MessageRead",
    # Projects
    "ChatRead",
    "DeleteResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # Subscriptions
    "SubscriptionRead",
    # Users
    "UserRead",
    "UserUpdate",
]
