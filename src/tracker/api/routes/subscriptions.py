"""Subscription endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from src.tracker.api.dependencies import CurrentUser, SubscriptionServiceDep
from src.tracker.models import PlanType, Subscription
from src.tracker.schemas.subscription import SubscriptionRead
from src.tracker.services.subscription_service import entitlement_for

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def _to_read(subscription: Subscription) -> SubscriptionRead:
    read = SubscriptionRead.model_validate(subscription)
    read.max_projects = entitlement_for(subscription).max_projects
    return read


@router.get(
    "/user",
    response_model=SubscriptionRead,
    summary="Get current subscription",
    description="Returns the caller's plan. An expired paid plan is downgraded to FREE first.",
    responses={404: {"description": "User has no subscription"}},
)
async def get_user_subscription(
    user: CurrentUser, service: SubscriptionServiceDep
) -> SubscriptionRead:
    return _to_read(await service.get_user_subscription(user.id))


@router.patch(
    "/update",
    response_model=SubscriptionRead,
    summary="Change plan",
    responses={404: {"description": "User has no subscription"}},
)
async def update_subscription(
    user: CurrentUser,
    service: SubscriptionServiceDep,
    plan_type: Annotated[PlanType, Query(alias="planType")],
) -> SubscriptionRead:
    return _to_read(await service.update_subscription(user.id, plan_type))
