"""
Gemini API provider.

Calls Gemini through the google-genai client with an API key
(no GCP project required).
"""

from typing import Optional

from dayplanner.core.config import get_settings
from dayplanner.core.exceptions import LLMError
from dayplanner.interfaces.llm_provider import ILLMProvider


class GeminiAPIProvider(ILLMProvider):
    """Gemini API provider using API Key."""

    def __init__(self, model_name: str, api_key: Optional[str] = None):
        self._model_name = model_name
        self._api_key = api_key or get_settings().GOOGLE_API_KEY

        if not self._api_key:
            raise ValueError(
                "GOOGLE_API_KEY is required for Gemini API provider. "
                "Get your API key from https://aistudio.google.com/apikey"
            )

    def get_model_name(self) -> str:
        return f"Gemini API ({self._model_name})"

    async def complete(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        temperature: float = 0.2,
        max_output_tokens: int = 600,
    ) -> str:
        try:
            from google import genai
            from google.genai.types import Content, GenerateContentConfig, Part
        except ImportError as exc:
            raise LLMError(
                f"GenAI import failed: {exc}",
                details={"error_code": "genai_import_failed"},
            ) from exc

        config_kwargs: dict = {
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }
        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction

        try:
            client = genai.Client(api_key=self._api_key)
            response = await client.aio.models.generate_content(
                model=self._model_name,
                contents=[Content(role="user", parts=[Part(text=prompt)])],
                config=GenerateContentConfig(**config_kwargs),
            )
        except Exception as exc:
            raise LLMError(
                f"GenAI request failed: {exc}",
                details={"error_code": "genai_request_failed"},
            ) from exc
        return (response.text or "").strip()
