"""
LiteLLM provider implementation.

Routes completions to OpenAI, Bedrock, or any OpenAI-compatible proxy
through LiteLLM.
"""

import os
from typing import Optional

from dayplanner.core.config import get_settings
from dayplanner.core.exceptions import LLMError
from dayplanner.interfaces.llm_provider import ILLMProvider


class LiteLLMProvider(ILLMProvider):
    """LiteLLM provider with custom endpoint support."""

    def __init__(
        self,
        model_name: str,
        api_base: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        """
        Args:
            model_name: LiteLLM model identifier (e.g., "gpt-4")
            api_base: Custom API endpoint URL (optional, for proxy servers)
                     Note: Do NOT include /v1 suffix - LiteLLM adds it automatically
            api_key: Custom API key (optional, overrides default)
        """
        settings = get_settings()
        self._model_name = model_name
        self._api_base = api_base or settings.LITELLM_API_BASE or None
        self._api_key = api_key or settings.LITELLM_API_KEY or None

        if settings.DEBUG:
            os.environ["LITELLM_LOG"] = "DEBUG"

    def get_model_name(self) -> str:
        if self._api_base:
            return f"LiteLLM ({self._model_name} @ {self._api_base})"
        return f"LiteLLM ({self._model_name})"

    def _request_kwargs(
        self,
        prompt: str,
        system_instruction: Optional[str],
        temperature: float,
        max_output_tokens: int,
    ) -> dict:
        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        kwargs: dict = {
            "model": self._model_name,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_output_tokens,
        }
        if self._api_base:
            kwargs["api_base"] = self._api_base
        if self._api_key:
            kwargs["api_key"] = self._api_key
        return kwargs

    async def complete(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        temperature: float = 0.2,
        max_output_tokens: int = 600,
    ) -> str:
        try:
            import litellm
        except ImportError as exc:
            raise LLMError(
                f"LiteLLM import failed: {exc}",
                details={"error_code": "litellm_import_failed"},
            ) from exc

        kwargs = self._request_kwargs(prompt, system_instruction, temperature, max_output_tokens)
        try:
            response = await litellm.acompletion(**kwargs)
            content = response.choices[0].message.content
        except Exception as exc:
            raise LLMError(
                f"LiteLLM request failed: {exc}",
                details={"error_code": "litellm_request_failed"},
            ) from exc
        return (content or "").strip()
