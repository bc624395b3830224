from .chat_service import build_chat_prompt, build_suggestions, validate_chat_message

__all__ = ["build_chat_prompt", "build_suggestions", "validate_chat_message"]
