import pytest
import json

from roomiesync.services.ai_service import AIService, REMINDER_FALLBACK


# ===== Mock Gemini Client =====

class MockGeminiResponse:
    """Mock response from Gemini API"""
    def __init__(self, text):
        self.text = text


@pytest.fixture
def mock_gemini_client(monkeypatch):
    """
    Mock Gemini API client to avoid real API calls.
    Returns different responses based on prompt content.
    """
    calls = []

    def mock_generate_content(model, contents, config):
        calls.append({"model": model, "contents": contents, "config": config})
        prompt_lower = contents.lower()

        if "gateway" in prompt_lower:
            raise Exception("Gemini API error: 503 service unavailable")
        if "gibberish" in prompt_lower:
            return MockGeminiResponse(text="I could not find an expense in that.")
        if "fenced" in prompt_lower:
            return MockGeminiResponse(text="Sure!\n```json\n" + json.dumps({
                "title": "Petrol", "amount": 1200, "category": "Petrol"
            }) + "\n```")
        if "extract expense" in prompt_lower:
            return MockGeminiResponse(text=json.dumps({
                "title": "Chicken and eggs", "amount": 450, "category": "Non-Veg"
            }))
        if "reminder" in prompt_lower and "silent" in prompt_lower:
            return MockGeminiResponse(text="")
        if "reminder" in prompt_lower:
            return MockGeminiResponse(text="  Hi Bob, the dishes are 3 days overdue. Please wrap them up today!\n")
        return MockGeminiResponse(text="{}")

    class MockModels:
        def generate_content(self, model, contents, config):
            return mock_generate_content(model, contents, config)

    class MockClient:
        def __init__(self, api_key):
            self.api_key = api_key
            self.models = MockModels()

    monkeypatch.setattr("google.genai.Client", MockClient)
    return calls


@pytest.mark.unit
@pytest.mark.ai
class TestParseExpense:
    """Free-text expense extraction"""

    def test_parse_expense_success(self, mock_gemini_client):
        service = AIService(api_key="test-key", model="gemini-2.5-flash")

        parsed = service.parse_expense_from_text("paid 450 for chicken and eggs")

        assert parsed.title == "Chicken and eggs"
        assert parsed.amount == 450
        assert parsed.category == "Non-Veg"

        call = mock_gemini_client[0]
        assert call["model"] == "gemini-2.5-flash"
        assert call["config"].response_mime_type == "application/json"
        assert "paid 450 for chicken and eggs" in call["contents"]

    def test_parse_expense_from_code_fence(self, mock_gemini_client):
        service = AIService(api_key="test-key")

        parsed = service.parse_expense_from_text("fenced: 1200 petrol")

        assert parsed.amount == 1200
        assert parsed.category == "Petrol"

    def test_unreadable_answer_returns_none(self, mock_gemini_client):
        service = AIService(api_key="test-key")

        assert service.parse_expense_from_text("gibberish") is None

    def test_client_error_returns_none(self, mock_gemini_client):
        service = AIService(api_key="test-key")

        assert service.parse_expense_from_text("gateway down") is None

    def test_disabled_without_api_key(self, mock_gemini_client):
        service = AIService(api_key="")

        assert service.enabled is False
        assert service.parse_expense_from_text("paid 450 for chicken") is None
        assert mock_gemini_client == []


@pytest.mark.unit
@pytest.mark.ai
class TestReminderMessage:
    """Overdue task reminders"""

    def test_reminder_success(self, mock_gemini_client):
        service = AIService(api_key="test-key")

        message = service.generate_reminder_message("Dishes", "Bob", 3)

        assert message == "Hi Bob, the dishes are 3 days overdue. Please wrap them up today!"
        prompt = mock_gemini_client[0]["contents"]
        assert "Bob" in prompt and '"Dishes"' in prompt and "3 days overdue" in prompt

    def test_empty_answer_falls_back(self, mock_gemini_client):
        service = AIService(api_key="test-key")

        assert service.generate_reminder_message("silent task", "Bob", 1) == REMINDER_FALLBACK

    def test_client_error_falls_back(self, mock_gemini_client):
        service = AIService(api_key="test-key")

        assert service.generate_reminder_message("gateway", "Bob", 2) == REMINDER_FALLBACK

    def test_disabled_falls_back(self):
        service = AIService(api_key="")

        assert service.generate_reminder_message("Dishes", "Bob", 2) == REMINDER_FALLBACK
