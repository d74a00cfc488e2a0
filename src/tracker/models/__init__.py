"""SQLModel table models.

Importing this package registers every table on ``SQLModel.metadata``.
"""

from src.tracker.models.enums import IssuePriority, IssueStatus, PlanType
from src.tracker.models.invitation import Invitation
from src.tracker.models.issue import Comment, Issue
from src.tracker.models.project import Chat, ChatMember, Message, Project, ProjectMember
from src.tracker.models.subscription import Subscription
from src.tracker.models.user import User

__all__ = [
    # Enums
    "IssuePriority",
    "IssueStatus",
    "PlanType",
    # Models
    "Chat",
    "ChatMember",
    "Comment",
    "Invitation",
    "Issue",
    "Message",
    "Project",
    "ProjectMember",
    "Subscription",
    "User",
]
