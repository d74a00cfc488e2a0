"""Shared enums for models."""

from enum import Enum


class PlanType(str, Enum):
    """Subscription plan tier."""

    FREE = "FREE"
    MONTHLY = "MONTHLY"
    ANNUALLY = "ANNUALLY"


class IssueStatus(str, Enum):
    """Issue workflow state."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class IssuePriority(str, Enum):
    """Issue priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
