"""Authentication endpoints."""

from fastapi import APIRouter, status

from src.tracker.api.dependencies import AuthServiceDep
from src.tracker.schemas.auth import AuthResponse, SigninRequest, SignupRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create an account on the FREE plan and return an access token.",
    responses={
        201: {"description": "Account created"},
        409: {"description": "Email already registered"},
        422: {"description": "Validation error (weak password, bad email)"},
    },
)
async def signup(request: SignupRequest, service: AuthServiceDep) -> AuthResponse:
    _, token = await service.signup(request.email, request.password, request.full_name)
    return AuthResponse(jwt=token, message="Signup success")


@router.post(
    "/signin",
    response_model=AuthResponse,
    summary="Sign in",
    responses={401: {"description": "Invalid credentials"}},
)
async def signin(request: SigninRequest, service: AuthServiceDep) -> AuthResponse:
    token = await service.signin(request.email, request.password)
    return AuthResponse(jwt=token, message="Signin success")
