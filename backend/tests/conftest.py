"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.generate import get_dispatcher
from config import Settings
from main import app
from services.llm import ProviderDispatcher
from services.llm.rapidapi import RAPIDAPI_URL

PYTHON_URL = "http://python-backend.test/generate"
LOCAL_URL = "http://local-llm.test/v1/chat/completions"


# === Settings fixtures ===


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build Settings isolated from the environment and .env files."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "use_python_backend": False,
            "python_server_url": PYTHON_URL,
            "use_local_llm": False,
            "local_llm_url": LOCAL_URL,
            "rapidapi_key": None,
            "llm_timeout": 5.0,
            "mock_delay_seconds": 1.5,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


# === Fake HTTP fixtures ===


def _chat_reply(content: str) -> dict[str, Any]:
    """An OpenAI-style chat completion body."""
    return {
        "id": "chatcmpl-test",
        "choices": [{"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
    }


class FakeHTTP:
    """Canned responses for httpx.AsyncClient.post keyed by URL.

    Unrouted URLs fail like an unreachable server.
    """

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response | Exception] = {}
        self.calls: list[dict[str, Any]] = []
        self.client_cls: MagicMock | None = None

    def route(
        self,
        url: str,
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
    ) -> None:
        request = httpx.Request("POST", url)
        if content is not None:
            self.routes[url] = httpx.Response(status_code, content=content, request=request)
        else:
            self.routes[url] = httpx.Response(status_code, json=json, request=request)

    def fail(self, url: str, error: Exception) -> None:
        self.routes[url] = error

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        self.calls.append({"url": url, **kwargs})
        outcome = self.routes.get(url)
        if outcome is None:
            raise httpx.ConnectError("Connection refused", request=httpx.Request("POST", url))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["url"] == url]


@pytest.fixture
def fake_http() -> Generator[FakeHTTP, None, None]:
    """Patch httpx.AsyncClient so providers talk to a FakeHTTP."""
    fake = FakeHTTP()
    with patch("httpx.AsyncClient") as mock_client:
        session = mock_client.return_value.__aenter__.return_value
        session.post = AsyncMock(side_effect=fake.post)
        mock_client.return_value.__aexit__.return_value = False
        fake.client_cls = mock_client
        yield fake


@pytest.fixture
def python_url() -> str:
    return PYTHON_URL


@pytest.fixture
def local_url() -> str:
    return LOCAL_URL


@pytest.fixture
def rapidapi_url() -> str:
    return RAPIDAPI_URL


@pytest.fixture
def chat_reply() -> Callable[[str], dict[str, Any]]:
    return _chat_reply


# === API fixtures ===


@pytest_asyncio.fixture
async def client(make_settings) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with no providers configured."""
    settings = make_settings()

    def override_get_dispatcher() -> ProviderDispatcher:
        return ProviderDispatcher([], settings)

    app.dependency_overrides[get_dispatcher] = override_get_dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
