# 📄 File: plant_health_api/modules/ai_assistant/infrastructure/database/chat_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves chat exchanges in the database and reads a user's past ones back, newest first.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async implementation of ChatRepository.
# 🔗 Dependencies:
# SQLAlchemy async session, ChatMessageModel, chat domain models, shared exceptions
# 🔄 Connected Modules / Calls From:
# ai_assistant handlers

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plant_health_api.modules.ai_assistant.domain.models.chat import ChatMessage, NewChatMessage
from plant_health_api.modules.ai_assistant.domain.repositories.chat_repository import ChatRepository
from plant_health_api.modules.ai_assistant.infrastructure.database.models import ChatMessageModel
from plant_health_api.shared.core.exceptions import RepositoryError
from plant_health_api.shared.utils.helpers import ensure_utc, generate_id, utc_now

logger = logging.getLogger(__name__)


class ChatRepositoryImpl(ChatRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, message: NewChatMessage) -> ChatMessage:
        model = ChatMessageModel(
            id=generate_id(),
            user_id=message.user_id,
            user_message=message.user_message,
            ai_response=message.ai_response,
            context=dict(message.context),
            created_at=utc_now(),
        )
        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Database error storing chat message for user {message.user_id}: {e}")
            raise RepositoryError("Failed to store chat message", operation="add", entity="chat_message") from e
        return self._model_to_domain(model)

    async def list_for_user(self, user_id: str, offset: int, limit: int) -> List[ChatMessage]:
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.user_id == user_id)
            .order_by(ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database error listing chat messages for user {user_id}: {e}")
            raise RepositoryError("Failed to list chat messages", operation="list", entity="chat_message") from e
        return [self._model_to_domain(model) for model in result.scalars().all()]

    async def count_for_user(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(ChatMessageModel).where(ChatMessageModel.user_id == user_id)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database error counting chat messages for user {user_id}: {e}")
            raise RepositoryError("Failed to count chat messages", operation="count", entity="chat_message") from e
        return int(result.scalar_one())

    @staticmethod
    def _model_to_domain(model: ChatMessageModel) -> ChatMessage:
        return ChatMessage(
            id=model.id,
            user_id=model.user_id,
            user_message=model.user_message,
            ai_response=model.ai_response,
            context=model.context or {},
            created_at=ensure_utc(model.created_at),
        )
