# 📄 File: plant_health_api/modules/ai_assistant/application/commands/chat_commands.py
# 🧭 Purpose (Layman Explanation):
# The "ask the plant doctor" request.
# 🧪 Purpose (Technical Summary):
# CQRS command definition for sendChatMessage.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.handlers.chat_handlers, presentation.api.v1.chat

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SendChatMessageCommand(BaseModel):
    """
    `recent_detections` given by the app take precedence; when it is None the
    user's latest stored detections are used as context instead.
    """

    user_id: str
    message: str
    recent_detections: Optional[List[Dict[str, Any]]] = None
    context: Dict[str, Any] = Field(default_factory=dict)
