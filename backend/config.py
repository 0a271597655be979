"""Application configuration using pydantic-settings."""

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Prompt Gateway"
    log_level: str = "INFO"

    # LLM - Python backend (custom generation server, tried first)
    use_python_backend: bool = False
    python_server_url: str = "http://localhost:5001/generate"

    # LLM - Local OpenAI-compatible server (Ollama, LM Studio)
    use_local_llm: bool = False
    local_llm_url: str = "http://localhost:11434/v1/chat/completions"

    # LLM - RapidAPI (enabled when a key is present)
    rapidapi_key: str | None = None

    # LLM - General
    llm_timeout: float = 60.0  # Seconds per provider request
    mock_delay_seconds: float = 1.5  # Delay before the local-only mock reply

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    @field_validator("use_python_backend", "use_local_llm", mode="before")
    @classmethod
    def parse_flag(cls, value: Any) -> bool:
        """Only the literal string 'true' turns a provider flag on."""
        if isinstance(value, str):
            return value == "true"
        return bool(value)

    @field_validator("rapidapi_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


settings = Settings()
