from fastapi import APIRouter

from src.tracker.api.dependencies import CurrentUser, UserServiceDep
from src.tracker.schemas.user import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserRead, summary="Get current user profile")
async def get_profile(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)


@router.put("/profile", response_model=UserRead, summary="Update current user profile")
async def update_profile(
    request: UserUpdate,
    user: CurrentUser,
    service: UserServiceDep,
) -> UserRead:
    updated = await service.update_profile(user, request)
    return UserRead.model_validate(updated)
