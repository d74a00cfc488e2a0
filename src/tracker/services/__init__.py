from src.tracker.services.auth_service import AuthService
from src.tracker.services.invitation_service import InvitationService
from src.tracker.services.issue_service import CommentService, IssueService
from src.tracker.services.membership_service import MembershipService
from src.tracker.services.message_service import MessageService
from src.tracker.services.project_service import ProjectService
from src.tracker.services.subscription_service import SubscriptionService
from src.tracker.services.user_service import UserService

__all__ = [
    "AuthService",
    "CommentService",
    "InvitationService",
    "IssueService",
    "MembershipService",
    "MessageService",
    "ProjectService",
    "SubscriptionService",
    "UserService",
]
