"""LLM generation with multi-provider fallback.

This module provides a single entry point for text generation that tries
several HTTP providers in a fixed order and always returns a string.

Providers (in priority order):
    - PythonBackendProvider: Custom Python generation server
    - LocalLLMProvider: Local OpenAI-compatible server (Ollama, LM Studio)
    - RapidAPIProvider: Hosted GPT access via RapidAPI

Usage:
    from services.llm import generate_content

    text = await generate_content(
        model="gpt-4o",
        system_prompt="You are a helpful assistant.",
        user_message="Summarize this article...",
    )
"""

from .base import BaseLLMProvider, GenerationRequest, LLMResponse, ProviderError
from .local import MOCK_RESPONSE_TEXT, LocalLLMProvider
from .python_backend import PythonBackendProvider
from .rapidapi import RapidAPIProvider
from .service import (
    FORCED_MODEL,
    ProviderDispatcher,
    configuration_help,
    create_dispatcher_from_settings,
    generate_content,
)

__all__ = [
    "BaseLLMProvider",
    "GenerationRequest",
    "LLMResponse",
    "ProviderError",
    "LocalLLMProvider",
    "PythonBackendProvider",
    "RapidAPIProvider",
    "ProviderDispatcher",
    "configuration_help",
    "create_dispatcher_from_settings",
    "generate_content",
    "FORCED_MODEL",
    "MOCK_RESPONSE_TEXT",
]
