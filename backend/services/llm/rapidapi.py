"""RapidAPI provider for hosted GPT access."""

import logging

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

# RapidAPI endpoint
RAPIDAPI_HOST = "cheapest-gpt-4-turbo-gpt-4-vision-chatgpt-openai-ai-api.p.rapidapi.com"
RAPIDAPI_URL = f"https://{RAPIDAPI_HOST}/v1/chat/completions"
RAPIDAPI_MODEL = "gpt-4o"
RAPIDAPI_MAX_TOKENS = 1000


class RapidAPIProvider(BaseLLMProvider):
    """RapidAPI provider for an OpenAI-compatible hosted model.

    The endpoint only serves its own model, so the caller's model is
    not forwarded; requests always ask for gpt-4o.

    Configured via:
        - RAPIDAPI_KEY: API key; the provider is enabled when it is set
    """

    provider_name = "rapidapi"

    def __init__(
        self,
        api_key: str,
        timeout: float = 60.0,
    ):
        """Initialize RapidAPI provider.

        Args:
            api_key: RapidAPI key
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.timeout = timeout

    async def generate(self, request: GenerationRequest) -> LLMResponse:
        logger.info(f"Attempting RapidAPI call to {RAPIDAPI_HOST}")

        headers = {
            "Content-Type": "application/json",
            "x-rapidapi-host": RAPIDAPI_HOST,
            "x-rapidapi-key": self.api_key,
        }

        payload = {
            "messages": request.chat_messages(),
            "model": RAPIDAPI_MODEL,
            "max_tokens": RAPIDAPI_MAX_TOKENS,
            "temperature": DEFAULT_TEMPERATURE,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(RAPIDAPI_URL, headers=headers, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            raise ProviderError(
                self.provider_name, f"RapidAPI request failed: {describe_error(e)}"
            ) from e

        if response.is_error:
            raise ProviderError(self.provider_name, f"RapidAPI Error: {response.text}")

        try:
            data = response.json()
            text = choice_content(data)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(
                self.provider_name, f"RapidAPI returned a malformed response: {describe_error(e)}"
            ) from e

        if not text.strip():
            raise ProviderError(self.provider_name, "RapidAPI returned an empty completion")

        return LLMResponse(
            text=text,
            model=RAPIDAPI_MODEL,
            metadata={
                "provider": self.provider_name,
                "id": data.get("id"),
            },
        )
