# 📄 File: plant_health_api/modules/ai_assistant/presentation/api/schemas/chat_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of chat questions and answers sent between the app and the server.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the /chat endpoints.
# 🔗 Dependencies:
# pydantic, chat domain models, detection PaginationResponse
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.chat

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plant_health_api.modules.ai_assistant.domain.models.chat import ChatMessage, ChatPage, ChatSuggestion
from plant_health_api.modules.plant_detection.presentation.api.schemas.detection_schemas import PaginationResponse


class RecentDetectionContext(BaseModel):
    plant_name: str
    disease_name: str


class ChatMessageRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "How do I treat early blight on my tomatoes?",
                "recent_detections": [{"plant_name": "Tomato", "disease_name": "Early Blight"}],
            }
        }
    )

    message: str = Field(..., min_length=1, max_length=1000)
    recent_detections: Optional[List[RecentDetectionContext]] = Field(
        None, description="Detections to mention in the prompt; defaults to the latest stored ones"
    )
    context: Dict[str, Any] = Field(default_factory=dict)


class ChatMessageResponse(BaseModel):
    id: str
    user_message: str
    ai_response: str
    context: Dict[str, Any]
    created_at: datetime

    @classmethod
    def from_domain(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(
            id=message.id,
            user_message=message.user_message,
            ai_response=message.ai_response,
            context=message.context,
            created_at=message.created_at,
        )


class ChatHistoryResponse(BaseModel):
    messages: List[ChatMessageResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: ChatPage) -> "ChatHistoryResponse":
        return cls(
            messages=[ChatMessageResponse.from_domain(m) for m in page.messages],
            pagination=PaginationResponse(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
        )


class ChatSuggestionResponse(BaseModel):
    type: str
    title: str
    message: str


class ChatSuggestionsResponse(BaseModel):
    suggestions: List[ChatSuggestionResponse]

    @classmethod
    def from_domain(cls, suggestions: List[ChatSuggestion]) -> "ChatSuggestionsResponse":
        return cls(suggestions=[ChatSuggestionResponse(**s.model_dump()) for s in suggestions])
