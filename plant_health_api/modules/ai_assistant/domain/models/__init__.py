from .chat import ChatMessage, ChatPage, ChatSuggestion, NewChatMessage

__all__ = ["ChatMessage", "ChatPage", "ChatSuggestion", "NewChatMessage"]
