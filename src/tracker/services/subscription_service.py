"""Subscription plans and the entitlement window.

``evaluate`` is a pure predicate over a subscription record. ``reconcile``
applies the lazy downgrade in place. The service wires both to the
database and owns the transaction.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.config import get_settings
from src.tracker.core.exceptions import NotFound
from src.tracker.core.logging import get_logger
from src.tracker.models import PlanType, Subscription, User
from src.tracker.models.base import utc_now
from src.tracker.repositories import SubscriptionRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class Entitlement:
    """What a plan permits. ``max_projects=None`` means unlimited."""

    plan_type: PlanType
    max_projects: int | None

    def allows_projects(self, current: int) -> bool:
        """Whether a user already holding ``current`` projects may take on another."""
        return self.max_projects is None or current < self.max_projects


PLAN_CATALOGUE: dict[PlanType, Entitlement] = {
    PlanType.FREE: Entitlement(PlanType.FREE, max_projects=3),
    PlanType.MONTHLY: Entitlement(PlanType.MONTHLY, max_projects=10),
    PlanType.ANNUALLY: Entitlement(PlanType.ANNUALLY, max_projects=None),
}

# Months added to both ends of the window on upgrade
_PLAN_PERIOD_MONTHS: dict[PlanType, int] = {
    PlanType.ANNUALLY: 12,
}
_DEFAULT_PERIOD_MONTHS = 1


def add_months(value: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def evaluate(subscription: Subscription, now: datetime) -> bool:
    """Decide whether the subscription's plan is currently in force.

    FREE is always valid. A paid plan is valid while its window is well
    formed (end not before start) and ``now`` has not passed the end. A
    window that has not started yet still counts as valid.
    """
    if subscription.plan_type == PlanType.FREE.value:
        return True
    if subscription.end_time < subscription.start_time:
        return False
    return now <= subscription.end_time


def reconcile(subscription: Subscription, now: datetime, free_months: int | None = None) -> bool:
    """Reset an invalid subscription to FREE in place (no flush/commit).

    Returns:
        True if the record was changed.
    """
    if evaluate(subscription, now):
        return False
    if free_months is None:
        free_months = get_settings().free_plan_months
    subscription.plan_type = PlanType.FREE.value
    subscription.start_time = now
    subscription.end_time = add_months(now, free_months)
    subscription.is_active = True
    return True


def entitlement_for(subscription: Subscription) -> Entitlement:
    return PLAN_CATALOGUE[PlanType(subscription.plan_type)]


class SubscriptionService:
    """Subscription lookups, upgrades and the lazy downgrade."""

    def __init__(self, subscription_repo: SubscriptionRepository, session: AsyncSession):
        self.subscription_repo = subscription_repo
        self.session = session

    def create_for_user(self, user: User, now: datetime | None = None) -> Subscription:
        """Stage the initial FREE subscription for a new user (no commit).

        Only signup calls this; a missing subscription is never created later.
        """
        now = now or utc_now()
        subscription = Subscription(
            user_id=user.id,
            plan_type=PlanType.FREE.value,
            start_time=now,
            end_time=add_months(now, get_settings().free_plan_months),
            is_active=True,
        )
        self.subscription_repo.add(subscription)
        return subscription

    async def get_current(self, user_id: UUID, now: datetime | None = None) -> Subscription:
        """Load and reconcile without committing. Used inside larger transactions."""
        subscription = await self.subscription_repo.get_by_user_id(user_id)
        if subscription is None:
            raise NotFound(f"No subscription for user {user_id}")
        if reconcile(subscription, now or utc_now()):
            logger.info(
                "Subscription downgraded to FREE",
                user_id=str(user_id),
                subscription_id=str(subscription.id),
            )
        return subscription

    async def get_user_subscription(
        self, user_id: UUID, now: datetime | None = None
    ) -> Subscription:
        """Return the user's subscription, downgrading an expired paid plan first.

        Raises:
            NotFound: The user has no subscription.
        """
        now = now or utc_now()
        try:
            subscription = await self.subscription_repo.get_by_user_id(user_id)
            if subscription is None:
                raise NotFound(f"No subscription for user {user_id}")

            if reconcile(subscription, now):
                await self.session.commit()
                await self.session.refresh(subscription)
                logger.info(
                    "Subscription downgraded to FREE",
                    user_id=str(user_id),
                    subscription_id=str(subscription.id),
                    end_time=subscription.end_time.isoformat(),
                )
            return subscription
        except Exception:
            await self.session.rollback()
            raise

    async def update_subscription(
        self, user_id: UUID, plan_type: PlanType, now: datetime | None = None
    ) -> Subscription:
        """Switch the user to ``plan_type``.

        The window opens one period from now (a year for ANNUALLY, a month
        otherwise) and closes one period after that.
        """
        now = now or utc_now()
        try:
            subscription = await self.subscription_repo.get_by_user_id(user_id)
            if subscription is None:
                raise NotFound(f"No subscription for user {user_id}")

            months = _PLAN_PERIOD_MONTHS.get(plan_type, _DEFAULT_PERIOD_MONTHS)
            subscription.plan_type = plan_type.value
            subscription.start_time = add_months(now, months)
            subscription.end_time = add_months(subscription.start_time, months)
            subscription.is_active = True
            self.subscription_repo.add(subscription)
            await self.session.commit()
            await self.session.refresh(subscription)

            logger.info(
                "Subscription updated",
                user_id=str(user_id),
                plan_type=plan_type.value,
                start_time=subscription.start_time.isoformat(),
                end_time=subscription.end_time.isoformat(),
            )
            return subscription
        except Exception:
            await self.session.rollback()
            raise

    async def entitlement(self, user_id: UUID, now: datetime | None = None) -> Entitlement:
        """Entitlement of the user's reconciled plan (no commit)."""
        return entitlement_for(await self.get_current(user_id, now))
