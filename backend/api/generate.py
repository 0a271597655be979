"""API endpoints for text generation."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from config import settings
from services.llm import FORCED_MODEL, ProviderDispatcher, create_dispatcher_from_settings

logger = logging.getLogger(__name__)
router = APIRouter()


def get_dispatcher() -> ProviderDispatcher:
    """Build a dispatcher from the current application settings."""
    return create_dispatcher_from_settings(settings)


class GenerateRequest(BaseModel):
    """Request to generate content."""

    model: str = Field(..., min_length=1, description="Requested model name")
    system_prompt: str = Field("", description="System prompt for context")
    user_message: str = Field(..., min_length=1, description="The prompt to send")


class GenerateResponse(BaseModel):
    """Generated content (or configuration help when no provider answered)."""

    text: str


class LLMSettingsResponse(BaseModel):
    """Current provider configuration."""

    providers: list[str]
    use_python_backend: bool
    python_server_url: str
    use_local_llm: bool
    local_llm_url: str
    rapidapi_configured: bool
    forced_model: str | None
    timeout: float


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    dispatcher: ProviderDispatcher = Depends(get_dispatcher),
) -> GenerateResponse:
    """Generate content using the first provider that answers.

    Providers are tried in order: Python backend, local LLM, RapidAPI.
    Provider failures never produce an error status; the text explains them.
    """
    logger.debug(f"Generate request for model {request.model}")
    text = await dispatcher.generate(
        model=request.model,
        system_prompt=request.system_prompt,
        user_message=request.user_message,
    )
    return GenerateResponse(text=text)


@router.get("/llm/settings", response_model=LLMSettingsResponse)
async def get_llm_settings(
    dispatcher: ProviderDispatcher = Depends(get_dispatcher),
) -> LLMSettingsResponse:
    """Get current LLM provider configuration (never exposes the API key)."""
    config = dispatcher.settings
    forced = config.use_local_llm or config.use_python_backend

    return LLMSettingsResponse(
        providers=dispatcher.provider_names(),
        use_python_backend=config.use_python_backend,
        python_server_url=config.python_server_url,
        use_local_llm=config.use_local_llm,
        local_llm_url=config.local_llm_url,
        rapidapi_configured=bool(config.rapidapi_key),
        forced_model=FORCED_MODEL if forced else None,
        timeout=config.llm_timeout,
    )
