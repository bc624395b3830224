from .chat_repository_impl import ChatRepositoryImpl
from .models import ChatMessageModel

__all__ = ["ChatMessageModel", "ChatRepositoryImpl"]
