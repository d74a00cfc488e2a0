"""Email transport using the Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.tracker.core.config import get_settings
from src.tracker.core.exceptions import DeliveryError
from src.tracker.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #0f766e; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_LINK_STYLE = "color: #0f766e; word-break: break-all;"
_MUTED_STYLE = "color: #666; font-size: 14px;"


def send(to: str, subject: str, body: str) -> None:
    """Deliver one HTML email.

    Without ``RESEND_API_KEY`` the message is logged and dropped, which keeps
    local development and tests free of network calls.

    Raises:
        DeliveryError: The provider rejected the message or did not answer in time.
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - email not sent", to=to, subject=subject)
        return

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": body,
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
    except FuturesTimeoutError as e:
        logger.error("Email send timed out", to=to, timeout=settings.email_send_timeout_seconds)
        raise DeliveryError(f"Timed out sending email to {to}") from e
    except Exception as e:
        logger.error("Failed to send email", to=to, error=str(e))
        raise DeliveryError(f"Failed to send email to {to}: {e}") from e

    logger.info("Email sent", to=to, subject=subject)


def invitation_url(token: str) -> str:
    """Link the invitee follows to join a project."""
    return f"{get_settings().app_url}/accept-invitation?token={token}"


def send_invitation_email(to: str, token: str, project_name: str, inviter_name: str) -> None:
    """Send a project invitation containing the single-use accept link.

    Args:
        to: Invitee email address
        token: Invitation token, embedded in the accept URL
        project_name: Name of the project the invitee will join
        inviter_name: Full name of the project owner sending the invite
    """
    send(
        to=to,
        subject=f"You've been invited to join {project_name}",
        body=_get_invitation_email_html(project_name, inviter_name, invitation_url(token)),
    )


def _get_invitation_email_html(project_name: str, inviter_name: str, accept_url: str) -> str:
    safe_project_name = html.escape(project_name)
    safe_inviter_name = html.escape(inviter_name)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #0f766e; margin-bottom: 24px;">Join {safe_project_name}</h1>
    <p>{safe_inviter_name} has added you to the team of
    <strong>{safe_project_name}</strong>.</p>
    <p style="margin: 32px 0;">
        <a href="{accept_url}" style="{_BUTTON_STYLE}">Accept Invitation</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or paste this link into your browser:<br>
        <a href="{accept_url}" style="{_LINK_STYLE}">{accept_url}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        The link works once. Ask the project owner to resend it if it has already been used.
    </p>
</body>
</html>"""
