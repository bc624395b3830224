from .chat_queries import ChatHistoryQuery, ChatSuggestionsQuery

__all__ = ["ChatHistoryQuery", "ChatSuggestionsQuery"]
