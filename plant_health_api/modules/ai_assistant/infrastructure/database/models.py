# 📄 File: plant_health_api/modules/ai_assistant/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Describes how each chat exchange is laid out in the database table.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the chat_messages table.
# 🔗 Dependencies:
# SQLAlchemy ORM, plant_health_api.shared.config.database (DatabaseBase)
# 🔄 Connected Modules / Calls From:
# chat_repository_impl.py, migrations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from plant_health_api.shared.config.database import DatabaseBase


class ChatMessageModel(DatabaseBase):
    __tablename__ = "chat_messages"
    __table_args__ = (
        Index("ix_chat_messages_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    user_message: Mapped[str] = mapped_column(Text, nullable=False)
    ai_response: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<ChatMessageModel(id={self.id}, user_id={self.user_id})>"
