from fastapi import APIRouter

from src.tracker.api.routes import auth, issues, messages, projects, subscriptions, users

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(subscriptions.router)
api_router.include_router(issues.router)
api_router.include_router(issues.comments_router)
api_router.include_router(messages.router)
