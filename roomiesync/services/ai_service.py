from typing import Optional
import json
import logging
import re

from google import genai
from google.genai import types
from pydantic import ValidationError

from roomiesync.config import settings
from roomiesync.models.expense import ExpenseCategory
from roomiesync.schemas.ai import ParsedExpense

logger = logging.getLogger(__name__)

REMINDER_FALLBACK = "Hey, just a reminder to complete your task!"

EXPENSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": types.Schema(
            type=types.Type.STRING, description="Short description of the expense"
        ),
        "amount": types.Schema(
            type=types.Type.NUMBER, description="Total cost found in text"
        ),
        "category": types.Schema(
            type=types.Type.STRING,
            enum=[c.value for c in ExpenseCategory],
            description="Best fitting category",
        ),
    },
    required=["title", "amount", "category"],
)

EXPENSE_INSTRUCTION = (
    "You are a financial assistant. Extract accurate expense details. "
    "If no currency is specified, assume standard units."
)


class AIService:
    """
    Best-effort helpers backed by Google Gemini.

    Neither helper raises: failures are logged and the caller gets a
    neutral result (None, or a canned reminder).
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.client = None

        if not api_key or api_key == "your_api_key_here":
            logger.warning("GEMINI_API_KEY is not set; AI helpers are disabled")
        else:
            self.client = genai.Client(api_key=api_key)

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def parse_expense_from_text(self, text: str) -> Optional[ParsedExpense]:
        """
        Extract title, amount and category from a free-text description.

        Args:
            text: e.g. "paid 450 for chicken and eggs"

        Returns:
            ParsedExpense, or None when the model is unavailable or its
            answer cannot be read
        """
        if not self.enabled:
            return None

        try:
            response_text = self._generate(
                f'Extract expense details from this text: "{text}"',
                config=types.GenerateContentConfig(
                    temperature=settings.GEMINI_TEMPERATURE,
                    max_output_tokens=settings.GEMINI_MAX_TOKENS,
                    response_mime_type="application/json",
                    response_schema=EXPENSE_SCHEMA,
                    system_instruction=EXPENSE_INSTRUCTION,
                ),
            )
            if response_text is None:
                return None
            data = self._extract_json_from_response(response_text)
            return ParsedExpense.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.error(f"Gemini parse error: {e}")
            return None

    def generate_reminder_message(
        self, task_title: str, assignee_name: str, days_overdue: int
    ) -> str:
        """Polite but firm reminder, under 50 words."""
        if not self.enabled:
            return REMINDER_FALLBACK

        prompt = (
            f"Write a polite but firm reminder message for {assignee_name} regarding "
            f'the task "{task_title}" which is {days_overdue} days overdue. '
            "Keep it under 50 words."
        )
        response_text = self._generate(
            prompt,
            config=types.GenerateContentConfig(
                temperature=settings.GEMINI_TEMPERATURE,
                max_output_tokens=settings.GEMINI_MAX_TOKENS,
            ),
        )
        return response_text.strip() if response_text else REMINDER_FALLBACK

    # ===== Helper Methods =====

    def _generate(self, prompt: str, config: types.GenerateContentConfig) -> Optional[str]:
        """
        Call Gemini once. No retries.

        Returns:
            Response text, or None on any client error or empty answer
        """
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            return None

        if not response or not response.text:
            logger.warning("Gemini returned an empty response")
            return None
        return response.text

    def _extract_json_from_response(self, response_text: str) -> dict:
        """
        Extract JSON from a Gemini response that may contain additional text.

        Tries:
        1. Direct JSON parse
        2. Extract JSON block from markdown code fence
        3. Find JSON object with regex

        Raises:
            ValueError: If no JSON object is found
        """
        try:
            return json.loads(response_text)
        except json.JSONDecodeError:
            pass

        match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", response_text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(1))
            except json.JSONDecodeError:
                pass

        match = re.search(r"\{.*\}", response_text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(0))
            except json.JSONDecodeError:
                pass

        raise ValueError(f"No JSON object in AI response: {response_text[:200]}")
