"""Authentication dependencies."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header

from src.tracker.api.dependencies.repositories import UserRepo
from src.tracker.core.exceptions import AuthenticationError
from src.tracker.core.logging import bind_user_context
from src.tracker.core.security import ACCESS_TOKEN_TYPE, decode_token
from src.tracker.models import User


def _decode_bearer(authorization: str | None) -> dict[str, Any]:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise AuthenticationError("Invalid token type")
    return payload


async def get_current_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the bearer token and return the active user it names."""
    payload = _decode_bearer(authorization)

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        user_uuid = UUID(user_id)
    except ValueError as e:
        raise AuthenticationError("Invalid user_id in token") from e

    user = await user_repo.get_by_id(user_uuid)
    if user is None or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    bind_user_context(user.id, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
