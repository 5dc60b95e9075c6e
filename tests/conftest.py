"""Shared fixtures."""

import pytest

from review_tool import config

ENV_VARS = ["LOG_LEVEL", "GOOGLE_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Empty environment for the tool's variables, no .env files in reach."""
    for name in ENV_VARS:
        # setenv first so monkeypatch restores the original state, including
        # anything load_dotenv sets during the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "BUNDLED_ENV_FILE", tmp_path / "bundled" / ".env")
    config.get_config.cache_clear()
    yield monkeypatch
    config.get_config.cache_clear()
