# 📄 File: plant_health_api/modules/ai_assistant/domain/models/chat.py
# 🧭 Purpose (Layman Explanation):
# Describes one question-and-answer exchange with the plant doctor, a page of past
# exchanges, and a suggested question shown in the app.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for chat messages, chat history pages and suggestions.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# chat repository, chat service, chat handlers, chat schemas

from datetime import datetime
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class NewChatMessage(BaseModel):
    user_id: str
    user_message: str
    ai_response: str
    context: Dict[str, Any] = Field(default_factory=dict)


class ChatMessage(BaseModel):
    """One stored exchange. `context` holds whatever the app sent alongside the question."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    user_message: str
    ai_response: str
    context: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class ChatPage(BaseModel):
    messages: List[ChatMessage]
    total: int
    page: int
    limit: int
    pages: int


class ChatSuggestion(BaseModel):
    type: Literal["general", "disease_followup"]
    title: str
    message: str
