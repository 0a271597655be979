"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    from services.llm import create_dispatcher_from_settings

    providers = create_dispatcher_from_settings(settings).provider_names()
    if providers:
        logging.info(f"LLM providers enabled (in order): {', '.join(providers)}")
    else:
        logging.warning("No LLM provider enabled; requests will return configuration help")

    yield

    logging.info("Shutdown complete")


API_DESCRIPTION = """
## Prompt Gateway API

Generates text with whichever configured language-model provider answers first.

### Providers (priority order)

| Provider | Enabled by |
|----------|------------|
| Python backend | `USE_PYTHON_BACKEND=true` |
| Local LLM (Ollama, LM Studio) | `USE_LOCAL_LLM=true` |
| RapidAPI | `RAPIDAPI_KEY` |

When every provider fails, the response text explains how to configure one.
"""

app = FastAPI(
    title=settings.app_name,
    description=API_DESCRIPTION,
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "llm", "description": "Text generation and provider configuration"},
    ],
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include routers
from api import generate  # noqa: E402

app.include_router(generate.router, prefix=settings.api_prefix, tags=["llm"])
