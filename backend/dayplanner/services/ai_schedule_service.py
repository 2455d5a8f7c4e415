"""
AI schedule generation.

Turns a free-text description of a day ("study from 6 to 9, then lunch")
into schedule entries using the configured LLM provider.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from dayplanner.core.config import Settings, get_settings
from dayplanner.core.exceptions import FormatError, LLMError, LLMValidationError
from dayplanner.core.logger import setup_logger
from dayplanner.interfaces.llm_provider import ILLMProvider
from dayplanner.models.schedule import ScheduleEntry
from dayplanner.services.llm_utils import generate_text_with_status
from dayplanner.utils.time_utils import is_canonical_time, normalize_time_text, parse_time_to_minutes

logger = setup_logger(__name__)

SYSTEM_PROMPT = """You are a smart schedule assistant. Parse natural language input and return a structured daily schedule.

Rules:
1. Convert all times to 12-hour format (e.g., "6:00 AM", "2:30 PM")
2. Fill in reasonable gaps and durations when not specified
3. Avoid scheduling conflicts
4. Keep tasks concise and clear
5. Return ONLY valid JSON array format

Example input: "Study DSA from 6am to 9am, then break for an hour, work on FSD from 10 to 1, lunch after that"
Example output: [
  {"start": "6:00 AM", "end": "9:00 AM", "task": "Study DSA"},
  {"start": "9:00 AM", "end": "10:00 AM", "task": "Break"},
  {"start": "10:00 AM", "end": "1:00 PM", "task": "Work on FSD"},
  {"start": "1:00 PM", "end": "2:00 PM", "task": "Lunch"}
]

Return only the JSON array, no other text."""

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


def parse_schedule_response(raw: str) -> list[ScheduleEntry]:
    """
    Parse an LLM reply into canonical schedule entries.

    Accepts a bare JSON array or a reply with an array embedded in
    surrounding prose or a code fence.

    Raises:
        LLMValidationError: If no valid array of complete items can be read
    """
    data: Any
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        match = _JSON_ARRAY_RE.search(raw)
        if not match:
            raise LLMValidationError("Invalid JSON response from AI", raw_output=raw)
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise LLMValidationError("Invalid JSON response from AI", raw_output=raw) from exc

    if not isinstance(data, list):
        raise LLMValidationError("AI response is not an array", raw_output=raw)

    entries: list[ScheduleEntry] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict) or not all(item.get(key) for key in ("start", "end", "task")):
            raise LLMValidationError(f"Invalid schedule item at index {index}", raw_output=raw)
        try:
            start = normalize_time_text(str(item["start"]))
            end = normalize_time_text(str(item["end"]))
        except FormatError as exc:
            raise LLMValidationError(
                f"Invalid time in schedule item at index {index}: {exc.text!r}",
                raw_output=raw,
            ) from exc
        entries.append(ScheduleEntry(start=start, end=end, task=str(item["task"]).strip()))
    return entries


def validate_schedule_items(items: list[ScheduleEntry]) -> bool:
    """True when every item has start, end and task, and both times are canonical."""
    for item in items:
        if not item.start or not item.end or not item.task:
            return False
        if not is_canonical_time(item.start) or not is_canonical_time(item.end):
            return False
    return True


def detect_schedule_conflicts(items: list[ScheduleEntry]) -> list[str]:
    """Describe every adjacent pair where an entry ends after the next one starts."""
    conflicts: list[str] = []
    for current, following in zip(items, items[1:]):
        if parse_time_to_minutes(current.end) > parse_time_to_minutes(following.start):
            conflicts.append(f'Conflict between "{current.task}" and "{following.task}"')
    return conflicts


class AIScheduleService:
    """Generates schedules from free text through an LLM provider."""

    def __init__(self, llm_provider: ILLMProvider, settings: Optional[Settings] = None):
        self._llm_provider = llm_provider
        self._settings = settings or get_settings()

    @property
    def model_name(self) -> str:
        return self._llm_provider.get_model_name()

    async def generate_schedule(self, prompt: str) -> list[ScheduleEntry]:
        """
        Generate schedule entries from a natural-language prompt.

        Raises:
            LLMError: The provider call failed or returned nothing
            LLMValidationError: The reply could not be parsed into entries
        """
        text, error_code, error_detail = await generate_text_with_status(
            self._llm_provider,
            prompt.strip(),
            temperature=self._settings.AI_SCHEDULE_TEMPERATURE,
            max_output_tokens=self._settings.AI_SCHEDULE_MAX_TOKENS,
            system_instruction=SYSTEM_PROMPT,
        )
        if not text:
            logger.warning(f"Schedule generation failed: {error_code} {error_detail or ''}")
            raise LLMError(
                "No response from AI",
                details={"error_code": error_code, "error_detail": error_detail},
            )

        entries = parse_schedule_response(text)
        if not entries:
            raise LLMValidationError("AI returned an empty schedule", raw_output=text)
        logger.info(f"Generated {len(entries)} schedule entries with {self.model_name}")
        return entries
