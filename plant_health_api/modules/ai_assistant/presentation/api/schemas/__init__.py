from .chat_schemas import (
    ChatHistoryResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    ChatSuggestionResponse,
    ChatSuggestionsResponse,
)

__all__ = [
    "ChatHistoryResponse",
    "ChatMessageRequest",
    "ChatMessageResponse",
    "ChatSuggestionResponse",
    "ChatSuggestionsResponse",
]
