# 📄 File: plant_health_api/modules/ai_assistant/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the plant doctor chat: asking questions, keeping the conversation history,
# and suggesting questions based on the user's latest scan.
# 🧪 Purpose (Technical Summary):
# Package initialization for the AI assistant module (chat messages, history, suggestions).
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, Gemini client, plant_detection (recent detections)
# 🔄 Connected Modules / Calls From:
# api.v1.router

"""
AI Assistant Module

- Domain: ChatMessage, prompt building and suggestion rules
- Application: send message command, history and suggestions queries
- Infrastructure: chat_messages table
- Presentation: /chat endpoints
"""

__version__ = "1.0.0"
__module_name__ = "ai_assistant"

__all__ = ["__version__", "__module_name__"]
