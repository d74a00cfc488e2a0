from uuid import UUID

from fastapi import APIRouter, status

from src.tracker.api.dependencies import CurrentUser, MessageServiceDep
from src.tracker.schemas.message import MessageCreate, MessageRead

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "/send",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send chat message",
    responses={403: {"description": "Sender is not in the chat"}},
)
async def send_message(
    request: MessageCreate, service: MessageServiceDep, user: CurrentUser
) -> MessageRead:
    message = await service.send_message(request.project_id, request.content, user.id)
    return MessageRead.model_validate(message)


@router.get(
    "/chat/{project_id}",
    response_model=list[MessageRead],
    summary="List chat messages",
    description="Messages of the project's chat, oldest first.",
)
async def list_messages(
    project_id: UUID, service: MessageServiceDep, user: CurrentUser
) -> list[MessageRead]:
    messages = await service.list_for_project(project_id, user.id)
    return [MessageRead.model_validate(m) for m in messages]
