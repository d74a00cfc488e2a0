"""Repository layer - data access abstraction."""

from src.tracker.repositories.base import BaseRepository
from src.tracker.repositories.invitation import InvitationRepository
from src.tracker.repositories.issue import CommentRepository, IssueRepository, MessageRepository
from src.tracker.repositories.membership import MembershipRepository
from src.tracker.repositories.project import ChatRepository, ProjectRepository
from src.tracker.repositories.subscription import SubscriptionRepository
from src.tracker.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ChatRepository",
    "CommentRepository",
    "InvitationRepository",
    "IssueRepository",
    "MembershipRepository",
    "MessageRepository",
    "ProjectRepository",
    "SubscriptionRepository",
    "UserRepository",
]
