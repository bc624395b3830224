from .chat_commands import SendChatMessageCommand

__all__ = ["SendChatMessageCommand"]
