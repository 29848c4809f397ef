"""LLM provider module for diffscribe.

This module provides a unified interface to the supported LLM vendors.
The active provider is configured in diffscribe/config.py.
"""

from dotenv import load_dotenv

from diffscribe.config import LLMProvider
from diffscribe.llm.base import BaseLLMProvider, LLMResult
from diffscribe.llm.exceptions import LLMError, MissingAPIKeyError
from diffscribe.models import Message, ModelConfig

# Load environment variables from .env file
load_dotenv()


def get_provider(config: ModelConfig) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        config: The model configuration; its provider selects the class.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    if config.provider == LLMProvider.OPENAI:
        from diffscribe.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(config)

    elif config.provider == LLMProvider.GOOGLE:
        from diffscribe.llm.google_provider import GoogleProvider

        return GoogleProvider(config)

    else:
        raise ValueError(f"Unsupported provider: {config.provider}")


def generate_commit_message(messages: list[Message], config: ModelConfig) -> LLMResult:
    """Generate a commit message from the prepared conversation.

    Args:
        messages: Output of build_messages().
        config: The effective model configuration.

    Returns:
        An LLMResult containing the cleaned message and token usage.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        LLMError: For request failures or empty replies.
    """
    provider = get_provider(config)
    return provider.complete(messages)


__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "LLMResult",
    "get_provider",
    "generate_commit_message",
]
