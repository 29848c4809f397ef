"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import diffscribe.config as config_module
from diffscribe.config import LLMProvider
from diffscribe.models import ModelConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(temp_dir, monkeypatch):
    """Point the global config at an empty temp dir and reset loaded values."""
    config_dir = temp_dir / ".diffscribe"
    monkeypatch.setattr("diffscribe.global_config._CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "ACTIVE_PROVIDER", config_module.DEFAULT_PROVIDER)
    monkeypatch.setattr(config_module, "ACTIVE_MODEL", None)
    monkeypatch.setattr(config_module, "MAX_TOKENS", None)
    monkeypatch.setattr(config_module, "TEMPERATURE", None)
    for env_var in config_module.API_KEY_ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
    return config_dir


@pytest.fixture
def sample_diff():
    """Sample staged diff for testing."""
    return """diff --git a/app/auth.py b/app/auth.py
index 1234567..abcdefg 100644
--- a/app/auth.py
+++ b/app/auth.py
@@ -1,3 +1,8 @@
 def logout(session):
     session.clear()
+
+def login(session, user):
+    session["user_id"] = user.id
+    return True
"""


@pytest.fixture
def openai_config():
    """ModelConfig for an OpenAI model."""
    return ModelConfig(
        provider=LLMProvider.OPENAI,
        model="gpt-4",
        temperature=0.2,
        max_tokens=196,
    )


@pytest.fixture
def google_config():
    """ModelConfig for a Gemini model."""
    return ModelConfig(
        provider=LLMProvider.GOOGLE,
        model="gemini-2.0-flash",
        temperature=0.3,
        max_tokens=100,
    )


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    return mocker.patch("subprocess.run")


@pytest.fixture
def openai_response():
    """Build a fake chat.completions response with the given content."""

    def _build(content, prompt_tokens=120, completion_tokens=8):
        response = MagicMock()
        choice = MagicMock()
        choice.message.content = content
        response.choices = [choice]
        response.usage.prompt_tokens = prompt_tokens
        response.usage.completion_tokens = completion_tokens
        return response

    return _build
