"""Project endpoints: lifecycle, team management and invitations."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.tracker.api.dependencies import CurrentUser, InvitationServiceDep, ProjectServiceDep
from src.tracker.models import Project
from src.tracker.schemas.invitation import (
    InvitationRead,
    InvitationRequest,
    InvitationSentResponse,
    ResendInvitationRequest,
)
from src.tracker.schemas.project import (
    ChatRead,
    DeleteResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.tracker.services import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


async def _to_read(project: Project, service: ProjectService) -> ProjectRead:
    read = ProjectRead.model_validate(project)
    read.team = await service.team_of(project.id)
    return read


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project with its chat. The caller becomes owner and first member.",
    responses={
        201: {"description": "Project created"},
        403: {"description": "Plan does not allow another project"},
    },
)
async def create_project(
    request: ProjectCreate,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> ProjectRead:
    project = await service.create_project(request, user)
    return await _to_read(project, service)


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="Projects the caller owns or belongs to, filtered by category and/or tag.",
)
async def list_projects(
    service: ProjectServiceDep,
    user: CurrentUser,
    category: Annotated[str | None, Query(description="Exact category")] = None,
    tag: Annotated[str | None, Query(description="Tag the project must carry")] = None,
) -> list[ProjectRead]:
    projects = await service.list_projects(user, category=category, tag=tag)
    return [await _to_read(p, service) for p in projects]


@router.get(
    "/search",
    response_model=list[ProjectRead],
    summary="Search projects",
    description="Case-insensitive substring match on project name among the caller's projects.",
)
async def search_projects(
    service: ProjectServiceDep,
    user: CurrentUser,
    keyword: Annotated[str | None, Query(max_length=200)] = None,
) -> list[ProjectRead]:
    projects = await service.search_projects(keyword, user)
    return [await _to_read(p, service) for p in projects]


@router.post(
    "/invite",
    response_model=InvitationSentResponse,
    summary="Invite user",
    description="Email a single-use invitation token for the project. Owner only.",
    responses={
        200: {"description": "Invitation sent"},
        403: {"description": "Caller does not own the project"},
        404: {"description": "Project not found"},
        502: {"description": "Invitation saved but email delivery failed"},
    },
)
async def invite(
    request: InvitationRequest,
    service: InvitationServiceDep,
    user: CurrentUser,
) -> InvitationSentResponse:
    await service.send_invitation(request.email, request.project_id, user.id)
    return InvitationSentResponse(message="User invitation sent")


@router.post(
    "/invite/resend",
    response_model=InvitationSentResponse,
    summary="Resend invitation",
    responses={
        404: {"description": "No outstanding invitation for this email"},
        502: {"description": "Email delivery failed"},
    },
)
async def resend_invite(
    request: ResendInvitationRequest,
    service: InvitationServiceDep,
    user: CurrentUser,
) -> InvitationSentResponse:
    await service.resend_invitation(request.email, user.id)
    return InvitationSentResponse(message="User invitation resent")


@router.get(
    "/accept_invitation",
    response_model=InvitationRead,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Accept invitation",
    description="Join the invited project and its chat. The token works once.",
    responses={
        202: {"description": "Joined the project"},
        404: {"description": "Unknown or already used token"},
        409: {"description": "Token consumed by a concurrent request"},
    },
)
async def accept_invitation(
    service: ProjectServiceDep,
    user: CurrentUser,
    token: Annotated[str, Query(min_length=1, max_length=64)],
) -> InvitationRead:
    invitation = await service.accept_invitation(token, user.id)
    return InvitationRead.model_validate(invitation)


@router.delete(
    "/invitations/{token}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke invitation",
    responses={403: {"description": "Caller does not own the project"}},
)
async def revoke_invitation(
    token: str,
    service: InvitationServiceDep,
    user: CurrentUser,
) -> None:
    await service.revoke(token, requested_by=user.id)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        403: {"description": "Caller is not on the project team"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> ProjectRead:
    project = await service.assert_member(project_id, user.id)
    return await _to_read(project, service)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    responses={
        403: {"description": "Caller does not own the project"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> ProjectRead:
    project = await service.update_project(project_id, user.id, request)
    return await _to_read(project, service)


@router.delete(
    "/{project_id}",
    response_model=DeleteResponse,
    summary="Delete project",
    description="Delete the project with its chat, issues and invitations. Owner only.",
    responses={
        403: {"description": "Caller does not own the project"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> DeleteResponse:
    await service.delete_project(project_id, user.id)
    return DeleteResponse(message="Project deleted successfully")


@router.get(
    "/{project_id}/chat",
    response_model=ChatRead,
    summary="Get project chat",
    responses={
        403: {"description": "Caller is not in the chat"},
        404: {"description": "Project not found"},
    },
)
async def get_chat(
    project_id: UUID,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> ChatRead:
    chat, users = await service.get_chat(project_id, user.id)
    return ChatRead(id=chat.id, project_id=chat.project_id, users=users, created_at=chat.created_at)


@router.post(
    "/{project_id}/members/{user_id}",
    response_model=ProjectRead,
    summary="Add team member",
    description="Add a user to the team and chat. Owner only; repeating is a no-op.",
)
async def add_member(
    project_id: UUID,
    user_id: UUID,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> ProjectRead:
    await service.add_member(project_id, user_id, requested_by=user.id)
    return await _to_read(await service.get_project(project_id), service)


@router.delete(
    "/{project_id}/members/{user_id}",
    response_model=ProjectRead,
    summary="Remove team member",
    description="Remove a user from the team and chat. Owner only; the owner cannot be removed.",
    responses={409: {"description": "Attempted to remove the owner"}},
)
async def remove_member(
    project_id: UUID,
    user_id: UUID,
    service: ProjectServiceDep,
    user: CurrentUser,
) -> ProjectRead:
    await service.remove_member(project_id, user_id, requested_by=user.id)
    return await _to_read(await service.get_project(project_id), service)
