"""Provider dispatcher with ordered fallback."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Sequence

from config import Settings

from .base import BaseLLMProvider, GenerationRequest, ProviderError, describe_error
from .local import LocalLLMProvider
from .python_backend import PythonBackendProvider
from .rapidapi import RapidAPIProvider

logger = logging.getLogger(__name__)

# Model sent whenever the local server or Python backend is in use
FORCED_MODEL = "meta-llama/Llama-4-Scout-17B-16E-Instruct"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def configuration_help(settings: Settings, model: str) -> str:
    """Help text returned when no provider produced a completion."""
    return f"""# Configuration Required

I cannot generate real output because no AI provider is configured or reachable.

**1. Local LLM (Recommended)**
- Ensure your local server (e.g., Ollama) is running at `{settings.local_llm_url}`.
- Run: `ollama run {model}`
- Restart this app: `uvicorn main:app --reload`

**2. RapidAPI**
- Add `RAPIDAPI_KEY` to your `.env.local` file.

**3. Python Backend (Hugging Face)**
- Ensure `HF_TOKEN` and `USE_PYTHON_BACKEND=true` are in `.env.local`.
- Ensure the python server is running: `python3 server.py`

**4. Debug Info**
- Local URL: {settings.local_llm_url}
- Use Local: {_flag(settings.use_local_llm)}
- Use Python: {_flag(settings.use_python_backend)}
- Rapid Key Found: {_flag(bool(settings.rapidapi_key))}
"""


class ProviderDispatcher:
    """Tries providers in priority order and always returns text.

    Order is fixed at construction: Python backend, local LLM, RapidAPI.
    The first provider that answers wins. A provider that is the only one
    configured may supply its own final reply when it fails (error text
    for the Python backend, a placeholder for the local server).
    Otherwise, when nothing succeeds, the configuration help is returned.

    Usage:
        dispatcher = create_dispatcher_from_settings(settings)
        text = await dispatcher.generate(
            model="gpt-4o",
            system_prompt="You are a helpful assistant.",
            user_message="Summarize this article...",
        )
    """

    def __init__(self, providers: Sequence[BaseLLMProvider], settings: Settings):
        """Initialize dispatcher with ordered providers.

        Args:
            providers: Enabled providers, in the order to try them
            settings: Settings the providers were built from
        """
        self.providers = list(providers)
        self.settings = settings

    def resolve_model(self, model: str) -> str:
        """Pick the model to request for this configuration."""
        if self.settings.use_local_llm or self.settings.use_python_backend:
            return FORCED_MODEL
        return model

    async def generate(self, model: str, system_prompt: str, user_message: str) -> str:
        """Generate a completion from the first provider that answers.

        Args:
            model: Requested model (replaced when local or Python mode is on)
            system_prompt: System prompt for context
            user_message: User prompt

        Returns:
            Generated text, a provider's final fallback text, or the
            configuration help message. Never raises for provider failures.
        """
        request = GenerationRequest(
            model=self.resolve_model(model),
            system_prompt=system_prompt,
            user_message=user_message,
        )
        sole_provider = len(self.providers) == 1

        for provider in self.providers:
            try:
                response = await provider.generate(request)
                logger.info(f"LLM response from {provider.provider_name}")
                return response.text

            except Exception as e:
                error = e if isinstance(e, ProviderError) else ProviderError(
                    provider.provider_name, describe_error(e)
                )
                logger.warning(f"Provider failed: {provider.provider_name}: {error}")
                if sole_provider:
                    fallback = await provider.fallback_text(request, error)
                    if fallback is not None:
                        return fallback

        logger.warning("No valid LLM provider found or all providers failed.")
        return configuration_help(self.settings, request.model)

    def provider_names(self) -> list[str]:
        """Names of the configured providers in the order they are tried."""
        return [provider.provider_name for provider in self.providers]


def create_dispatcher_from_settings(
    settings: Settings | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ProviderDispatcher:
    """Create dispatcher instance from application settings.

    Args:
        settings: Settings to use (defaults to the application settings)
        sleep: Coroutine used for the local placeholder delay

    Returns:
        ProviderDispatcher with every enabled provider, in priority order
    """
    if settings is None:
        from config import settings as app_settings
        settings = app_settings

    providers: list[BaseLLMProvider] = []

    if settings.use_python_backend:
        providers.append(
            PythonBackendProvider(
                url=settings.python_server_url,
                model=FORCED_MODEL,
                timeout=settings.llm_timeout,
            )
        )

    if settings.use_local_llm:
        providers.append(
            LocalLLMProvider(
                url=settings.local_llm_url,
                timeout=settings.llm_timeout,
                mock_delay=settings.mock_delay_seconds,
                sleep=sleep,
            )
        )

    if settings.rapidapi_key:
        providers.append(
            RapidAPIProvider(
                api_key=settings.rapidapi_key,
                timeout=settings.llm_timeout,
            )
        )

    return ProviderDispatcher(providers, settings)


async def generate_content(
    model: str,
    system_prompt: str,
    user_message: str,
    settings: Settings | None = None,
) -> str:
    """Generate content with the providers enabled in settings."""
    dispatcher = create_dispatcher_from_settings(settings)
    return await dispatcher.generate(model, system_prompt, user_message)
