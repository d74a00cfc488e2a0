"""Project chat messages."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import NotFound, Unauthorized
from src.tracker.core.logging import get_logger
from src.tracker.models import Chat, Message
from src.tracker.repositories import ChatRepository, MembershipRepository, MessageRepository

logger = get_logger(__name__)


class MessageService:
    def __init__(
        self,
        message_repo: MessageRepository,
        chat_repo: ChatRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.message_repo = message_repo
        self.chat_repo = chat_repo
        self.membership_repo = membership_repo
        self.session = session

    async def _chat_for_member(self, project_id: UUID, user_id: UUID) -> Chat:
        chat = await self.chat_repo.get_by_project_id(project_id)
        if chat is None:
            raise NotFound(f"Chat for project {project_id} not found")
        if not await self.membership_repo.is_chat_member(chat.id, user_id):
            raise Unauthorized("You are not a member of this chat")
        return chat

    async def send_message(self, project_id: UUID, content: str, sender_id: UUID) -> Message:
        try:
            chat = await self._chat_for_member(project_id, sender_id)
            message = Message(chat_id=chat.id, sender_id=sender_id, content=content)
            self.message_repo.add(message)
            await self.session.commit()
            await self.session.refresh(message)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Message sent", message_id=str(message.id), chat_id=str(chat.id))
        return message

    async def list_for_project(self, project_id: UUID, user_id: UUID) -> list[Message]:
        """Messages of the project's chat, oldest first. Roster members only."""
        chat = await self._chat_for_member(project_id, user_id)
        return await self.message_repo.list_by_chat(chat.id)
