"""
Shared LLM invocation utilities for text generation.
"""

from __future__ import annotations

from typing import Optional

from dayplanner.core.exceptions import LLMError
from dayplanner.core.logger import logger
from dayplanner.interfaces.llm_provider import ILLMProvider


def _maybe_detail(exc: Exception) -> Optional[str]:
    text = str(exc).strip()
    return text[:300] if text else None


async def generate_text_with_status(
    llm_provider: ILLMProvider,
    prompt: str,
    temperature: float = 0.2,
    max_output_tokens: int = 600,
    system_instruction: Optional[str] = None,
) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Generate text with error status.

    Returns (text, error_code, error_detail). Exactly one of text and
    error_code is set.
    """
    if not prompt:
        return None, "empty_prompt", None

    try:
        text = await llm_provider.complete(
            prompt,
            system_instruction=system_instruction,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
    except LLMError as exc:
        logger.warning(f"{llm_provider.get_model_name()}: {exc.message}")
        error_code = (exc.details or {}).get("error_code", "llm_request_failed")
        return None, error_code, _maybe_detail(exc)

    if not text:
        return None, "empty_response", None
    return text, None, None
