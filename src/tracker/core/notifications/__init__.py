"""Notification services."""

from src.tracker.core.notifications.email import invitation_url, send, send_invitation_email

__all__ = [
    "invitation_url",
    "send",
    "send_invitation_email",
]
