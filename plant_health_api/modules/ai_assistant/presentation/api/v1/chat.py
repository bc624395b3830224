# 📄 File: plant_health_api/modules/ai_assistant/presentation/api/v1/chat.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints behind the chat screen: ask a question, scroll back through old answers,
# and get suggested questions.
# 🧪 Purpose (Technical Summary):
# FastAPI routes for sendChatMessage (rate limited), chatHistory and chatSuggestions.
# 🔗 Dependencies:
# FastAPI router, slowapi limiter, chat handlers and schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# api.v1.router

import logging

from fastapi import APIRouter, Depends, Request

from plant_health_api.api.middleware.rate_limiting import chat_limit, limiter
from plant_health_api.modules.ai_assistant.application.commands.chat_commands import SendChatMessageCommand
from plant_health_api.modules.ai_assistant.application.handlers.chat_handlers import (
    ChatHistoryQueryHandler,
    ChatSuggestionsQueryHandler,
    SendChatMessageCommandHandler,
)
from plant_health_api.modules.ai_assistant.application.queries.chat_queries import (
    ChatHistoryQuery,
    ChatSuggestionsQuery,
)
from plant_health_api.modules.ai_assistant.presentation.api.schemas.chat_schemas import (
    ChatHistoryResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    ChatSuggestionsResponse,
)
from plant_health_api.modules.user_management.presentation.dependencies import get_registered_user
from plant_health_api.shared.core.dependencies import (
    CurrentUser,
    PaginationParams,
    get_current_user,
    get_pagination_params,
)

logger = logging.getLogger(__name__)

chat_router = APIRouter()


@chat_router.post(
    "/messages",
    response_model=ChatMessageResponse,
    summary="Ask the plant assistant",
    responses={
        429: {"description": "Too many messages"},
        502: {"description": "Text service error"},
        504: {"description": "Text service timed out, retry later"},
    },
)
@limiter.limit(chat_limit)
async def send_message(
    request: Request,
    body: ChatMessageRequest,
    current_user: CurrentUser = Depends(get_registered_user),
    handler: SendChatMessageCommandHandler = Depends(SendChatMessageCommandHandler),
) -> ChatMessageResponse:
    recent = None
    if body.recent_detections is not None:
        recent = [d.model_dump() for d in body.recent_detections]

    command = SendChatMessageCommand(
        user_id=current_user.user_id,
        message=body.message,
        recent_detections=recent,
        context=body.context,
    )
    message = await handler.handle(command)
    return ChatMessageResponse.from_domain(message)


@chat_router.get("/history", response_model=ChatHistoryResponse, summary="Get chat history")
async def get_chat_history(
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: CurrentUser = Depends(get_current_user),
    handler: ChatHistoryQueryHandler = Depends(ChatHistoryQueryHandler),
) -> ChatHistoryResponse:
    query = ChatHistoryQuery(user_id=current_user.user_id, page=pagination.page, limit=pagination.limit)
    return ChatHistoryResponse.from_page(await handler.handle(query))


@chat_router.get("/suggestions", response_model=ChatSuggestionsResponse, summary="Get suggested questions")
async def get_suggestions(
    current_user: CurrentUser = Depends(get_current_user),
    handler: ChatSuggestionsQueryHandler = Depends(ChatSuggestionsQueryHandler),
) -> ChatSuggestionsResponse:
    suggestions = await handler.handle(ChatSuggestionsQuery(user_id=current_user.user_id))
    return ChatSuggestionsResponse.from_domain(suggestions)
