from .chat_handlers import (
    ChatHistoryQueryHandler,
    ChatSuggestionsQueryHandler,
    SendChatMessageCommandHandler,
)

__all__ = [
    "ChatHistoryQueryHandler",
    "ChatSuggestionsQueryHandler",
    "SendChatMessageCommandHandler",
]
