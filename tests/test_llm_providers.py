"""Tests for LLM provider modules."""

import os
from unittest.mock import MagicMock, patch

import pytest

from diffscribe.config import LLMProvider
from diffscribe.global_config import save_credential
from diffscribe.llm import (
    LLMError,
    MissingAPIKeyError,
    generate_commit_message,
    get_provider,
)
from diffscribe.llm.google_provider import GoogleProvider, build_generate_request
from diffscribe.llm.openai_provider import OpenAIProvider
from diffscribe.models import Message, ModelConfig
from diffscribe.prompts import build_messages


def _gemini_response(text, finish_reason="STOP", prompt_tokens=50, output_tokens=9):
    response = MagicMock()
    part = MagicMock()
    part.text = text
    candidate = MagicMock()
    candidate.finish_reason = finish_reason
    candidate.content.parts = [part]
    response.candidates = [candidate]
    response.usage_metadata.prompt_token_count = prompt_tokens
    response.usage_metadata.candidates_token_count = output_tokens
    return response


class TestGetProvider:
    """Tests for get_provider factory function."""

    def test_returns_openai_provider(self, openai_config):
        provider = get_provider(openai_config)
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4"

    def test_returns_google_provider(self, google_config):
        provider = get_provider(google_config)
        assert isinstance(provider, GoogleProvider)
        assert provider.model == "gemini-2.0-flash"


class TestApiKey:
    """Tests for API key lookup."""

    def test_from_environment(self, openai_config):
        provider = OpenAIProvider(openai_config)

        with patch.dict(os.environ, {"OPENAI_API_KEY": "env-key"}):
            assert provider.get_api_key() == "env-key"

    def test_from_credentials_file(self, google_config):
        save_credential("GOOGLE_API_KEY", "file-key")

        assert GoogleProvider(google_config).get_api_key() == "file-key"

    def test_environment_beats_credentials_file(self, google_config):
        save_credential("GOOGLE_API_KEY", "file-key")

        with patch.dict(os.environ, {"GOOGLE_API_KEY": "env-key"}):
            assert GoogleProvider(google_config).get_api_key() == "env-key"

    def test_missing_key_raises(self, openai_config):
        with pytest.raises(MissingAPIKeyError) as exc_info:
            OpenAIProvider(openai_config).get_api_key()

        message = str(exc_info.value)
        assert "OPENAI_API_KEY" in message
        assert "diffscribe config set-key openai" in message

    def test_missing_key_stops_before_request(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")

        with pytest.raises(MissingAPIKeyError):
            GoogleProvider(google_config).complete(build_messages(sample_diff))

        mock_client.assert_not_called()


class TestOpenAIProvider:
    """Tests for OpenAIProvider.complete."""

    @pytest.fixture(autouse=True)
    def api_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    def test_sends_chat_completion(self, mocker, openai_config, openai_response, sample_diff):
        mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
        client = mock_openai.return_value
        client.chat.completions.create.return_value = openai_response("feat: add login")
        messages = build_messages(sample_diff)

        result = OpenAIProvider(openai_config).complete(messages)

        assert result.message == "feat: add login"
        assert result.model == "gpt-4"
        assert result.input_tokens == 120
        assert result.output_tokens == 8

        mock_openai.assert_called_once_with(api_key="sk-test", timeout=180, max_retries=0)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 196
        assert kwargs["messages"] == [m.model_dump() for m in messages]

    def test_cleans_reply(self, mocker, openai_config, openai_response, sample_diff):
        mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
        mock_openai.return_value.chat.completions.create.return_value = openai_response(
            "```\nAdd login endpoint\n```"
        )

        result = OpenAIProvider(openai_config).complete(build_messages(sample_diff))

        assert result.message == "Add login endpoint"

    def test_api_failure_raises_llm_error(self, mocker, openai_config, sample_diff):
        mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
        mock_openai.return_value.chat.completions.create.side_effect = RuntimeError("503")

        with pytest.raises(LLMError) as exc_info:
            OpenAIProvider(openai_config).complete(build_messages(sample_diff))

        assert "OpenAI API call failed" in str(exc_info.value)
        assert mock_openai.return_value.chat.completions.create.call_count == 1

    def test_empty_reply_raises(self, mocker, openai_config, openai_response, sample_diff):
        mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
        mock_openai.return_value.chat.completions.create.return_value = openai_response("  ")

        with pytest.raises(LLMError):
            OpenAIProvider(openai_config).complete(build_messages(sample_diff))

    def test_no_choices_raises(self, mocker, openai_config, sample_diff):
        mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
        response = MagicMock()
        response.choices = []
        mock_openai.return_value.chat.completions.create.return_value = response

        with pytest.raises(LLMError):
            OpenAIProvider(openai_config).complete(build_messages(sample_diff))

    def test_reply_of_only_quotes_raises(self, mocker, openai_config, openai_response, sample_diff):
        mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
        mock_openai.return_value.chat.completions.create.return_value = openai_response('""')

        with pytest.raises(LLMError) as exc_info:
            OpenAIProvider(openai_config).complete(build_messages(sample_diff))

        assert "empty commit message" in str(exc_info.value)


class TestBuildGenerateRequest:
    """Tests for mapping chat messages to Gemini contents."""

    def test_system_becomes_instruction(self, sample_diff):
        system, contents = build_generate_request(build_messages(sample_diff, system_prompt="Sys"))

        assert system == "Sys"
        assert len(contents) == 1
        assert contents[0].role == "user"
        assert contents[0].parts[0].text == sample_diff

    def test_assistant_becomes_model(self, sample_diff):
        _, contents = build_generate_request(build_messages(sample_diff, few_shot=True))

        assert [c.role for c in contents] == ["user", "model", "user"]

    def test_no_system_message(self):
        system, contents = build_generate_request([Message(role="user", content="diff")])

        assert system is None
        assert len(contents) == 1


class TestGoogleProvider:
    """Tests for GoogleProvider.complete."""

    @pytest.fixture(autouse=True)
    def api_key(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g-test")

    def test_generates_content(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")
        generate = mock_client.return_value.models.generate_content
        generate.return_value = _gemini_response("Add login endpoint\n")

        result = GoogleProvider(google_config).complete(
            build_messages(sample_diff, system_prompt="Sys")
        )

        assert result.message == "Add login endpoint"
        assert result.input_tokens == 50
        assert result.output_tokens == 9

        client_kwargs = mock_client.call_args.kwargs
        assert client_kwargs["api_key"] == "g-test"
        assert client_kwargs["http_options"].timeout == 180000

        kwargs = generate.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["config"].system_instruction == "Sys"
        assert kwargs["config"].temperature == 0.3
        assert kwargs["config"].max_output_tokens == 100
        assert kwargs["config"].response_mime_type == "text/plain"
        assert kwargs["contents"][0].parts[0].text == sample_diff

    def test_api_failure_raises_llm_error(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")
        mock_client.return_value.models.generate_content.side_effect = RuntimeError("timeout")

        with pytest.raises(LLMError) as exc_info:
            GoogleProvider(google_config).complete(build_messages(sample_diff))

        assert "Google Gemini API call failed" in str(exc_info.value)

    def test_no_candidates_raises(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")
        response = MagicMock()
        response.candidates = []
        mock_client.return_value.models.generate_content.return_value = response

        with pytest.raises(LLMError):
            GoogleProvider(google_config).complete(build_messages(sample_diff))

    def test_safety_block_raises(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")
        mock_client.return_value.models.generate_content.return_value = _gemini_response(
            "", finish_reason="FinishReason.SAFETY"
        )

        with pytest.raises(LLMError) as exc_info:
            GoogleProvider(google_config).complete(build_messages(sample_diff))

        assert "safety" in str(exc_info.value)

    def test_token_limit_without_text_raises(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")
        mock_client.return_value.models.generate_content.return_value = _gemini_response(
            None, finish_reason="FinishReason.MAX_TOKENS"
        )

        with pytest.raises(LLMError) as exc_info:
            GoogleProvider(google_config).complete(build_messages(sample_diff))

        assert "--tokens" in str(exc_info.value)

    def test_truncated_text_is_kept(self, mocker, google_config, sample_diff):
        mock_client = mocker.patch("diffscribe.llm.google_provider.genai.Client")
        mock_client.return_value.models.generate_content.return_value = _gemini_response(
            "Add login", finish_reason="FinishReason.MAX_TOKENS"
        )

        result = GoogleProvider(google_config).complete(build_messages(sample_diff))

        assert result.message == "Add login"


def test_generate_commit_message_uses_configured_provider(mocker, sample_diff):
    mocker.patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"})
    mock_openai = mocker.patch("diffscribe.llm.openai_provider.OpenAI")
    choice = MagicMock()
    choice.message.content = "Fix login redirect"
    mock_openai.return_value.chat.completions.create.return_value.choices = [choice]
    config = ModelConfig(
        provider=LLMProvider.OPENAI, model="gpt-4o", temperature=0, max_tokens=50
    )

    result = generate_commit_message(build_messages(sample_diff), config)

    assert result.message == "Fix login redirect"
    assert mock_openai.return_value.chat.completions.create.call_args.kwargs["model"] == "gpt-4o"
