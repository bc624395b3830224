# tests/test_chat.py
import unittest

from plant_health_api.modules.ai_assistant.application.commands.chat_commands import SendChatMessageCommand
from plant_health_api.modules.ai_assistant.application.handlers.chat_handlers import (
    ChatHistoryQueryHandler,
    ChatSuggestionsQueryHandler,
    SendChatMessageCommandHandler,
)
from plant_health_api.modules.ai_assistant.application.queries.chat_queries import (
    ChatHistoryQuery,
    ChatSuggestionsQuery,
)
from plant_health_api.modules.ai_assistant.domain.services.chat_service import (
    build_chat_prompt,
    build_suggestions,
    validate_chat_message,
)
from plant_health_api.modules.plant_detection.application.commands.detection_commands import RecordDetectionCommand
from plant_health_api.modules.plant_detection.application.handlers.command_handlers import (
    RecordDetectionCommandHandler,
)
from plant_health_api.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plant_health_api.shared.core.exceptions import APITimeoutError, ValidationError
from plant_health_api.shared.infrastructure.database.session import session_manager
from tests.utils import FakeGeminiClient, close_test_database, gemini_timeout, open_test_database


class TestChatService(unittest.TestCase):
    def test_prompt_lists_recent_detections(self):
        prompt = build_chat_prompt(
            "Why are my leaves yellow?",
            [
                {"plant_name": "Tomato", "disease_name": "Early Blight"},
                {"plantName": "Potato", "diseaseName": "Late Blight"},
                {"plant_name": "Pepper"},
            ],
        )
        self.assertIn("Recent detections: Tomato - Early Blight, Potato - Late Blight.", prompt)
        self.assertIn("User question: Why are my leaves yellow?", prompt)
        self.assertTrue(prompt.startswith("You are an expert plant pathologist"))

    def test_prompt_without_context(self):
        self.assertNotIn("Recent detections", build_chat_prompt("Hello", None))

    def test_general_suggestions(self):
        suggestions = build_suggestions(None)
        self.assertEqual(len(suggestions), 3)
        self.assertTrue(all(s.type == "general" for s in suggestions))

    def test_followups_for_latest_detection(self):
        suggestions = build_suggestions({"plant_name": "Tomato", "disease_name": "Early Blight"})
        self.assertEqual(len(suggestions), 5)
        self.assertEqual(suggestions[3].title, "More about Early Blight")
        self.assertIn("other Tomato plants", suggestions[4].message)

    def test_message_validation(self):
        self.assertEqual(validate_chat_message("  hi  "), "hi")
        with self.assertRaises(ValidationError):
            validate_chat_message("   ")
        with self.assertRaises(ValidationError):
            validate_chat_message("x" * 1001)
        self.assertEqual(len(validate_chat_message("x" * 1000)), 1000)


class TestChatHandlers(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.db_url = await open_test_database()
        async with session_manager.get_session() as session:
            await UserRepositoryImpl(session).get_or_create("user-1")

    async def asyncTearDown(self):
        await close_test_database(self.db_url)

    async def record(self, plant, disease):
        await RecordDetectionCommandHandler(session_manager).handle(
            RecordDetectionCommand(user_id="user-1", plant_name=plant, disease_name=disease, confidence=0.8)
        )

    async def test_send_uses_stored_detections_as_context(self):
        await self.record("Tomato", "Early Blight")
        gemini = FakeGeminiClient(text="  Remove the lower leaves.  ")

        message = await SendChatMessageCommandHandler(session_manager, gemini).handle(
            SendChatMessageCommand(user_id="user-1", message="What now?")
        )

        self.assertEqual(message.ai_response, "Remove the lower leaves.")
        self.assertIn("Tomato - Early Blight", gemini.prompts[0])
        self.assertEqual(
            message.context["recent_detections"],
            [{"plant_name": "Tomato", "disease_name": "Early Blight"}],
        )

    async def test_failed_answer_is_not_stored(self):
        handler = SendChatMessageCommandHandler(session_manager, FakeGeminiClient(error=gemini_timeout()))
        with self.assertRaises(APITimeoutError):
            await handler.handle(SendChatMessageCommand(user_id="user-1", message="Hello?"))

        page = await ChatHistoryQueryHandler(session_manager).handle(ChatHistoryQuery(user_id="user-1"))
        self.assertEqual(page.total, 0)

    async def test_history_is_newest_first(self):
        handler = SendChatMessageCommandHandler(session_manager, FakeGeminiClient(text="answer"))
        for text in ("first", "second", "third"):
            await handler.handle(SendChatMessageCommand(user_id="user-1", message=text, recent_detections=[]))

        page = await ChatHistoryQueryHandler(session_manager).handle(
            ChatHistoryQuery(user_id="user-1", page=1, limit=2)
        )
        self.assertEqual(page.total, 3)
        self.assertEqual(page.pages, 2)
        self.assertEqual([m.user_message for m in page.messages], ["third", "second"])

    async def test_suggestions_follow_latest_detection(self):
        handler = ChatSuggestionsQueryHandler(session_manager)
        self.assertEqual(len(await handler.handle(ChatSuggestionsQuery(user_id="user-1"))), 3)

        await self.record("Potato", "Late Blight")
        suggestions = await handler.handle(ChatSuggestionsQuery(user_id="user-1"))
        self.assertEqual(len(suggestions), 5)
        self.assertEqual(suggestions[-1].title, "Prevent Late Blight")


if __name__ == "__main__":
    unittest.main()
