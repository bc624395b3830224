# 📄 File: plant_health_api/modules/ai_assistant/domain/services/chat_service.py
# 🧭 Purpose (Layman Explanation):
# The plant doctor's manners: checks the question is not empty or huge, tells the AI to answer
# as a plant expert who knows the user's recent scans, and picks suggested questions.
# 🧪 Purpose (Technical Summary):
# Pure chat rules: message validation, prompt construction with optional recent detection
# context, and suggestion generation from the latest detection.
# 🔗 Dependencies:
# chat domain models, shared validators
# 🔄 Connected Modules / Calls From:
# ai_assistant command and query handlers

from typing import Any, Dict, Iterable, List, Mapping, Optional

from plant_health_api.modules.ai_assistant.domain.models.chat import ChatSuggestion
from plant_health_api.shared.utils.validators import validate_required_text

MAX_MESSAGE_LENGTH = 1000
MAX_CONTEXT_DETECTIONS = 5

GENERAL_SUGGESTIONS = (
    ChatSuggestion(
        type="general",
        title="How to prevent plant diseases?",
        message="What are the best practices for preventing plant diseases in my garden?",
    ),
    ChatSuggestion(
        type="general",
        title="When to water plants?",
        message="What is the best time of day to water my plants and how often?",
    ),
    ChatSuggestion(
        type="general",
        title="Natural pest control",
        message="What are some natural ways to control pests in my garden?",
    ),
)


def validate_chat_message(message: Optional[str]) -> str:
    """Strip the question; it must hold 1 to 1000 characters."""
    return validate_required_text(message, field="message", max_length=MAX_MESSAGE_LENGTH)


def _detection_label(detection: Mapping[str, Any]) -> Optional[str]:
    plant = detection.get("plant_name") or detection.get("plantName")
    disease = detection.get("disease_name") or detection.get("diseaseName")
    if not plant or not disease:
        return None
    return f"{plant} - {disease}"


def build_chat_prompt(message: str, recent_detections: Optional[Iterable[Mapping[str, Any]]] = None) -> str:
    """
    Build the plant pathologist prompt.

    Recent detections are given as mappings with plant and disease names
    (snake_case or camelCase keys); entries missing either are skipped.
    """
    labels = [label for label in map(_detection_label, recent_detections or []) if label]
    lines = ["You are an expert plant pathologist and agricultural consultant."]
    if labels:
        lines.append(f"Recent detections: {', '.join(labels[:MAX_CONTEXT_DETECTIONS])}.")
    lines.extend([
        "",
        f"User question: {message}",
        "",
        "Please provide a helpful, accurate, and practical response.",
        "Focus on plant care, disease management, and agricultural best practices.",
        "Keep your response concise but informative.",
    ])
    return "\n".join(lines)


def build_suggestions(latest_detection: Optional[Dict[str, str]] = None) -> List[ChatSuggestion]:
    """Three general suggestions, plus two follow-ups about the latest detection when there is one."""
    suggestions = list(GENERAL_SUGGESTIONS)
    if latest_detection:
        disease = latest_detection["disease_name"]
        plant = latest_detection["plant_name"]
        suggestions.append(ChatSuggestion(
            type="disease_followup",
            title=f"More about {disease}",
            message=f"Tell me more about {disease} and how to treat it effectively.",
        ))
        suggestions.append(ChatSuggestion(
            type="disease_followup",
            title=f"Prevent {disease}",
            message=f"How can I prevent {disease} from affecting my other {plant} plants?",
        ))
    return suggestions
