from .chat import chat_router

__all__ = ["chat_router"]
