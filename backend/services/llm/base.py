"""Base LLM provider interface."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

# Chat parameters shared by the OpenAI-style providers
DEFAULT_TEMPERATURE = 0.7


class GenerationRequest(BaseModel):
    """A single prompt to be completed by whichever provider answers first."""

    model: str = Field(..., description="Model requested by the caller")
    system_prompt: str = Field(..., description="System prompt for context")
    user_message: str = Field(..., description="The user prompt/question")

    def chat_messages(self) -> list[dict[str, str]]:
        """Build an OpenAI-style messages list (system first, then user)."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_message},
        ]


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    text: str = Field(..., description="Generated text response")
    model: str = Field(..., description="Model that generated the response")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Provider-specific metadata")


class ProviderError(Exception):
    """Raised by a provider when it cannot produce a completion."""

    def __init__(self, provider_name: str, message: str):
        super().__init__(message)
        self.provider_name = provider_name
        self.message = message

    def __str__(self) -> str:
        return self.message


def describe_error(error: Exception) -> str:
    """Readable text for an exception whose str() may be empty (timeouts)."""
    return str(error) or type(error).__name__


def choice_content(data: Any) -> str:
    """Extract choices[0].message.content from an OpenAI-style chat reply.

    Raises:
        KeyError, IndexError, TypeError: If the reply does not have that shape
    """
    content = data["choices"][0]["message"]["content"]
    if not isinstance(content, str):
        raise TypeError(f"message content is {type(content).__name__}, expected str")
    return content


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Each provider must implement:
    - generate(): Produce a completion or raise ProviderError

    Providers may override fallback_text() to supply the reply used when
    they are the only configured provider and their request fails.
    """

    # Provider metadata (override in subclass)
    provider_name: str = "base"

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> LLMResponse:
        """Generate a text completion.

        Args:
            request: Model, system prompt and user message

        Returns:
            LLMResponse with generated text

        Raises:
            ProviderError: On HTTP errors, network failures or malformed replies
        """
        pass

    async def fallback_text(
        self,
        request: GenerationRequest,
        error: ProviderError,
    ) -> str | None:
        """Reply to return when this provider is the only one and it failed.

        Returns:
            Final text for the caller, or None to fall through to the
            configuration help message
        """
        return None
