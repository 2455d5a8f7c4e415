"""
LLM provider interface.

A provider turns one prompt (plus optional system instruction) into one
text completion. Implementations: LiteLLM (OpenAI, Bedrock, proxies),
Gemini API.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILLMProvider(ABC):
    """Abstract interface for text-completion providers."""

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        temperature: float = 0.2,
        max_output_tokens: int = 600,
    ) -> str:
        """
        Run a single-turn completion.

        Args:
            prompt: User message
            system_instruction: Optional system prompt
            temperature: Sampling temperature
            max_output_tokens: Upper bound on generated tokens

        Returns:
            Completion text, stripped ("" when the model returned nothing)

        Raises:
            LLMError: Client library missing or the request failed;
                ``details["error_code"]`` names the failure
        """
        pass
