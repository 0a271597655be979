"""Python backend provider for a custom generation server."""

import logging

import httpx

from .base import BaseLLMProvider, GenerationRequest, LLMResponse, ProviderError, describe_error

logger = logging.getLogger(__name__)


class PythonBackendProvider(BaseLLMProvider):
    """Provider for a self-hosted Python generation server.

    The server takes {"prompt", "system_prompt"} and answers {"text"}.

    Configured via:
        - USE_PYTHON_BACKEND: 'true' to enable
        - PYTHON_SERVER_URL: Endpoint (default: http://localhost:5001/generate)
    """

    provider_name = "python"

    def __init__(
        self,
        url: str = "http://localhost:5001/generate",
        model: str = "python-backend",
        timeout: float = 60.0,
    ):
        """Initialize Python backend provider.

        Args:
            url: Full URL of the generate endpoint
            model: Model name reported in responses (the server picks its own)
            timeout: Request timeout in seconds
        """
        self.url = url
        self.model = model
        self.timeout = timeout

    async def generate(self, request: GenerationRequest) -> LLMResponse:
        logger.info(f"Attempting Python Server call to {self.url}")

        payload = {
            "prompt": request.user_message,
            "system_prompt": request.system_prompt,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            raise ProviderError(
                self.provider_name, f"Python Server request failed: {describe_error(e)}"
            ) from e

        if response.is_error:
            raise ProviderError(
                self.provider_name, f"Python Server Error: {response.reason_phrase}"
            )

        try:
            text = response.json()["text"]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError(
                self.provider_name, f"Python Server returned a malformed response: {describe_error(e)}"
            ) from e

        if not isinstance(text, str) or not text.strip():
            raise ProviderError(self.provider_name, "Python Server returned an empty response")

        return LLMResponse(
            text=text,
            model=self.model,
            metadata={"provider": self.provider_name, "status_code": response.status_code},
        )

    async def fallback_text(
        self,
        request: GenerationRequest,
        error: ProviderError,
    ) -> str | None:
        """Surface the server error directly when nothing else is configured."""
        logger.error(f"Python backend failed with no other provider configured: {error}")
        return (
            f"**Python Backend Error**: {error}\n\n"
            "*Check the backend environment variables and server logs.*"
        )
