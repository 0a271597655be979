"""Local LLM provider for OpenAI-compatible servers (Ollama, LM Studio)."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from .base import (
    DEFAULT_TEMPERATURE,
    BaseLLMProvider,
    GenerationRequest,
    LLMResponse,
    ProviderError,
    choice_content,
    describe_error,
)

logger = logging.getLogger(__name__)

MOCK_RESPONSE_TEXT = "**[Mock Generated Content]**..."


class LocalLLMProvider(BaseLLMProvider):
    """Provider for a local model server speaking the chat completions API.

    Ollama and LM Studio both expose /v1/chat/completions.

    Configured via:
        - USE_LOCAL_LLM: 'true' to enable
        - LOCAL_LLM_URL: Endpoint (default: http://localhost:11434/v1/chat/completions)
        - MOCK_DELAY_SECONDS: Delay before the placeholder reply
    """

    provider_name = "local"

    def __init__(
        self,
        url: str = "http://localhost:11434/v1/chat/completions",
        timeout: float = 60.0,
        mock_delay: float = 1.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize local provider.

        Args:
            url: Full chat completions URL
            timeout: Request timeout in seconds
            mock_delay: Seconds to wait before returning the placeholder reply
            sleep: Coroutine used for the delay (swap out in tests)
        """
        self.url = url
        self.timeout = timeout
        self.mock_delay = mock_delay
        self._sleep = sleep

    async def generate(self, request: GenerationRequest) -> LLMResponse:
        logger.info(f"Attempting Local LLM call to {self.url} with model {request.model}")

        payload = {
            "model": request.model,
            "messages": request.chat_messages(),
            "temperature": DEFAULT_TEMPERATURE,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            raise ProviderError(
                self.provider_name, f"Local LLM request failed: {describe_error(e)}"
            ) from e

        if response.is_error:
            raise ProviderError(self.provider_name, f"Local LLM Error: {response.reason_phrase}")

        try:
            data = response.json()
            text = choice_content(data)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(
                self.provider_name, f"Local LLM returned a malformed response: {describe_error(e)}"
            ) from e

        if not text.strip():
            raise ProviderError(self.provider_name, "Local LLM returned an empty completion")

        return LLMResponse(
            text=text,
            model=request.model,
            metadata={
                "provider": self.provider_name,
                "finish_reason": data["choices"][0].get("finish_reason"),
            },
        )

    async def fallback_text(
        self,
        request: GenerationRequest,
        error: ProviderError,
    ) -> str | None:
        """Placeholder reply when the local server is the only option."""
        logger.warning("No RapidAPI key found, returning mock response after local LLM failure.")
        await self._sleep(self.mock_delay)
        return MOCK_RESPONSE_TEXT
