"""Authentication service - signup and signin."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import AuthenticationError, Conflict
from src.tracker.core.logging import get_logger
from src.tracker.core.security import (
    create_access_token,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from src.tracker.models import User
from src.tracker.repositories import UserRepository
from src.tracker.services.subscription_service import SubscriptionService

logger = get_logger(__name__)


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        subscription_service: SubscriptionService,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.subscription_service = subscription_service
        self.session = session

    async def signup(self, email: str, password: str, full_name: str) -> tuple[User, str]:
        """Register a user with a FREE subscription.

        Returns (user, access_token).
        Raises Conflict if the email is already registered.
        """
        email = email.lower().strip()
        try:
            if await self.user_repo.exists_by_email(email):
                raise Conflict("Email already registered")

            user = User(
                email=email,
                hashed_password=hash_password(password),
                full_name=full_name,
            )
            self.user_repo.add(user)
            await self.session.flush()

            self.subscription_service.create_for_user(user)
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same email
            await self.session.rollback()
            raise Conflict("Email already registered") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User signed up", user_id=str(user.id))
        return user, create_access_token(user.id)

    async def signin(self, email: str, password: str) -> str:
        """Return an access token for valid credentials.

        Raises:
            AuthenticationError: Unknown email, wrong password or inactive account.
        """
        user = await self.user_repo.get_by_email(email.strip())

        # Always verify so response time does not reveal whether the email exists
        password_hash = user.hashed_password if user else dummy_password_hash()
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        logger.info("User signed in", user_id=str(user.id))
        return create_access_token(user.id)
