"""Issue and comment endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.tracker.api.dependencies import CommentServiceDep, CurrentUser, IssueServiceDep
from src.tracker.models import IssueStatus
from src.tracker.schemas.issue import CommentCreate, CommentRead, IssueCreate, IssueRead
from src.tracker.schemas.project import DeleteResponse

router = APIRouter(prefix="/issues", tags=["issues"])
comments_router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    response_model=IssueRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create issue",
    responses={403: {"description": "Caller is not on the project team"}},
)
async def create_issue(
    request: IssueCreate, service: IssueServiceDep, user: CurrentUser
) -> IssueRead:
    return IssueRead.model_validate(await service.create_issue(request, user.id))


@router.get("/projects/{project_id}", response_model=list[IssueRead], summary="List issues")
async def list_issues(
    project_id: UUID, service: IssueServiceDep, user: CurrentUser
) -> list[IssueRead]:
    issues = await service.list_for_project(project_id, user.id)
    return [IssueRead.model_validate(i) for i in issues]


@router.get("/{issue_id}", response_model=IssueRead, summary="Get issue")
async def get_issue(issue_id: UUID, service: IssueServiceDep, user: CurrentUser) -> IssueRead:
    return IssueRead.model_validate(await service.view_issue(issue_id, user.id))


@router.delete("/{issue_id}", response_model=DeleteResponse, summary="Delete issue")
async def delete_issue(
    issue_id: UUID, service: IssueServiceDep, user: CurrentUser
) -> DeleteResponse:
    await service.delete_issue(issue_id, user.id)
    return DeleteResponse(message="Issue deleted successfully")


@router.put(
    "/{issue_id}/assignee/{user_id}",
    response_model=IssueRead,
    summary="Assign issue",
    responses={403: {"description": "Assignee is not on the project team"}},
)
async def assign_issue(
    issue_id: UUID, user_id: UUID, service: IssueServiceDep, user: CurrentUser
) -> IssueRead:
    return IssueRead.model_validate(await service.assign(issue_id, user_id, user.id))


@router.put("/{issue_id}/status/{issue_status}", response_model=IssueRead, summary="Set status")
async def update_issue_status(
    issue_id: UUID, issue_status: IssueStatus, service: IssueServiceDep, user: CurrentUser
) -> IssueRead:
    return IssueRead.model_validate(await service.update_status(issue_id, issue_status, user.id))


@comments_router.post(
    "",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on issue",
)
async def create_comment(
    request: CommentCreate, service: CommentServiceDep, user: CurrentUser
) -> CommentRead:
    comment = await service.create_comment(request.issue_id, request.content, user.id)
    return CommentRead.model_validate(comment)


@comments_router.get("/{issue_id}", response_model=list[CommentRead], summary="List comments")
async def list_comments(
    issue_id: UUID, service: CommentServiceDep, user: CurrentUser
) -> list[CommentRead]:
    comments = await service.list_for_issue(issue_id, user.id)
    return [CommentRead.model_validate(c) for c in comments]


@comments_router.delete(
    "/{comment_id}",
    response_model=DeleteResponse,
    summary="Delete comment",
    responses={403: {"description": "Only the author can delete"}},
)
async def delete_comment(
    comment_id: UUID, service: CommentServiceDep, user: CurrentUser
) -> DeleteResponse:
    await service.delete_comment(comment_id, user.id)
    return DeleteResponse(message="Comment deleted successfully")
