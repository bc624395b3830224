# 📄 File: plant_health_api/modules/ai_assistant/application/handlers/chat_handlers.py
# 🧭 Purpose (Layman Explanation):
# Runs the plant doctor chat: sends the question with the user's recent scans to the AI,
# saves the exchange, pages through old exchanges and offers suggested questions.
# 🧪 Purpose (Technical Summary):
# Command and query handlers for sendChatMessage, chatHistory and chatSuggestions. The
# exchange is stored only after the text service answered; upstream errors propagate.
# 🔗 Dependencies:
# FastAPI Depends, session manager, chat and detection repositories, GeminiClient
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.chat

import logging
from typing import Any, Dict, List

from fastapi import Depends

from plant_health_api.modules.ai_assistant.application.commands.chat_commands import SendChatMessageCommand
from plant_health_api.modules.ai_assistant.application.queries.chat_queries import (
    ChatHistoryQuery,
    ChatSuggestionsQuery,
)
from plant_health_api.modules.ai_assistant.domain.models.chat import (
    ChatMessage,
    ChatPage,
    ChatSuggestion,
    NewChatMessage,
)
from plant_health_api.modules.ai_assistant.domain.services.chat_service import (
    MAX_CONTEXT_DETECTIONS,
    build_chat_prompt,
    build_suggestions,
    validate_chat_message,
)
from plant_health_api.modules.ai_assistant.infrastructure.database.chat_repository_impl import ChatRepositoryImpl
from plant_health_api.modules.plant_detection.domain.services.history_service import build_filters, normalize_page
from plant_health_api.modules.plant_detection.infrastructure.database.detection_repository_impl import (
    DetectionRepositoryImpl,
)
from plant_health_api.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    get_session_manager,
)
from plant_health_api.shared.infrastructure.external_apis import get_gemini_client
from plant_health_api.shared.infrastructure.external_apis.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

CHAT_TEMPERATURE = 0.7


async def _latest_detections(session, user_id: str, limit: int) -> List[Dict[str, Any]]:
    events = await DetectionRepositoryImpl(session).query(build_filters(user_id), offset=0, limit=limit)
    return [{"plant_name": e.plant_name, "disease_name": e.disease_name} for e in events]


class SendChatMessageCommandHandler:
    def __init__(
        self,
        session_manager: DatabaseSessionManager = Depends(get_session_manager),
        gemini_client: GeminiClient = Depends(get_gemini_client),
    ):
        self._sessions = session_manager
        self._gemini = gemini_client

    async def handle(self, command: SendChatMessageCommand) -> ChatMessage:
        message = validate_chat_message(command.message)

        recent = command.recent_detections
        if recent is None:
            async with self._sessions.get_session() as session:
                recent = await _latest_detections(session, command.user_id, MAX_CONTEXT_DETECTIONS)

        prompt = build_chat_prompt(message, recent)
        answer = await self._gemini.generate_text(prompt, temperature=CHAT_TEMPERATURE)

        context = dict(command.context)
        if recent:
            context["recent_detections"] = recent[:MAX_CONTEXT_DETECTIONS]

        async with self._sessions.get_session() as session:
            stored = await ChatRepositoryImpl(session).add(NewChatMessage(
                user_id=command.user_id,
                user_message=message,
                ai_response=answer.strip(),
                context=context,
            ))

        logger.info(f"Stored chat message {stored.id} for user {command.user_id}")
        return stored


class ChatHistoryQueryHandler:
    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: ChatHistoryQuery) -> ChatPage:
        page = normalize_page(query.page, query.limit)
        async with self._sessions.get_session() as session:
            repository = ChatRepositoryImpl(session)
            messages = await repository.list_for_user(query.user_id, offset=page.offset, limit=page.limit)
            total = await repository.count_for_user(query.user_id)

        return ChatPage(
            messages=messages,
            total=total,
            page=page.page,
            limit=page.limit,
            pages=page.pages_for(total),
        )


class ChatSuggestionsQueryHandler:
    def __init__(self, session_manager: DatabaseSessionManager = Depends(get_session_manager)):
        self._sessions = session_manager

    async def handle(self, query: ChatSuggestionsQuery) -> List[ChatSuggestion]:
        async with self._sessions.get_session() as session:
            latest = await _latest_detections(session, query.user_id, 1)
        return build_suggestions(latest[0] if latest else None)
