# 📄 File: plant_health_api/modules/ai_assistant/domain/repositories/chat_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what the chat needs from storage: save an exchange and read past ones back.
# 🧪 Purpose (Technical Summary):
# Repository interface for chat message persistence.
# 🔗 Dependencies:
# chat domain models, abc
# 🔄 Connected Modules / Calls From:
# chat handlers, infrastructure implementation

from abc import ABC, abstractmethod
from typing import List

from ..models.chat import ChatMessage, NewChatMessage


class ChatRepository(ABC):
    """Repository interface for ChatMessage storage, listed newest first."""

    @abstractmethod
    async def add(self, message: NewChatMessage) -> ChatMessage:
        """
        Persist an exchange, assigning id and created_at.

        Raises:
            RepositoryError: If database operation fails
        """

    @abstractmethod
    async def list_for_user(self, user_id: str, offset: int, limit: int) -> List[ChatMessage]:
        pass

    @abstractmethod
    async def count_for_user(self, user_id: str) -> int:
        pass
