"""Tests for application settings."""

import pytest

from config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider variables so tests start from defaults."""
    for name in (
        "USE_PYTHON_BACKEND",
        "PYTHON_SERVER_URL",
        "USE_LOCAL_LLM",
        "LOCAL_LLM_URL",
        "RAPIDAPI_KEY",
        "LLM_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for Settings loaded from the environment."""

    def test_defaults(self, clean_env):
        """Defaults match the documented endpoints with every provider off."""
        settings = Settings(_env_file=None)

        assert settings.use_python_backend is False
        assert settings.use_local_llm is False
        assert settings.rapidapi_key is None
        assert settings.local_llm_url == "http://localhost:11434/v1/chat/completions"
        assert settings.python_server_url == "http://localhost:5001/generate"
        assert settings.llm_timeout == 60.0
        assert settings.mock_delay_seconds == 1.5

    def test_reads_environment(self, clean_env):
        """Upper-case variables populate the settings."""
        clean_env.setenv("USE_LOCAL_LLM", "true")
        clean_env.setenv("LOCAL_LLM_URL", "http://gpu1:1234/v1/chat/completions")
        clean_env.setenv("RAPIDAPI_KEY", "abc123")
        clean_env.setenv("LLM_TIMEOUT", "15")

        settings = Settings(_env_file=None)

        assert settings.use_local_llm is True
        assert settings.local_llm_url == "http://gpu1:1234/v1/chat/completions"
        assert settings.rapidapi_key == "abc123"
        assert settings.llm_timeout == 15.0

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("true", True),
            ("TRUE", False),
            ("True", False),
            (" true ", False),
            ("1", False),
            ("yes", False),
            ("false", False),
            ("", False),
        ],
    )
    def test_only_true_enables_flag(self, clean_env, raw, expected):
        """Provider flags are on only for the string 'true'."""
        clean_env.setenv("USE_PYTHON_BACKEND", raw)

        settings = Settings(_env_file=None)

        assert settings.use_python_backend is expected

    def test_empty_rapidapi_key_is_unset(self, clean_env):
        """An empty key counts as no key."""
        clean_env.setenv("RAPIDAPI_KEY", "")

        settings = Settings(_env_file=None)

        assert settings.rapidapi_key is None

    def test_whitespace_rapidapi_key_is_kept(self, clean_env):
        """A whitespace-only key is still a key and enables RapidAPI."""
        clean_env.setenv("RAPIDAPI_KEY", " ")

        settings = Settings(_env_file=None)

        assert settings.rapidapi_key == " "

    def test_keyword_flags_accept_booleans(self):
        """Booleans passed directly are kept as-is."""
        settings = Settings(_env_file=None, use_local_llm=True, use_python_backend=False)

        assert settings.use_local_llm is True
        assert settings.use_python_backend is False
