"""Base classes and shared utilities for LLM providers."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from diffscribe.config import API_KEY_ENV_VARS
from diffscribe.formatters import clean_commit_message
from diffscribe.llm.exceptions import LLMError, MissingAPIKeyError
from diffscribe.models import Message, ModelConfig


@dataclass
class LLMResult:
    """Result from an LLM completion call, including token usage."""

    message: str
    model: str
    input_tokens: int
    output_tokens: int


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    #: Human-readable vendor name used in error messages
    display_name = "LLM"

    def __init__(self, config: ModelConfig):
        """Initialize the provider.

        Args:
            config: Model and sampling parameters for every request.
        """
        self.config = config
        self.api_key_env_var = API_KEY_ENV_VARS[config.provider]

    @property
    def model(self) -> str:
        return self.config.model

    @abstractmethod
    def _request(self, api_key: str, messages: list[Message]) -> LLMResult:
        """Send one completion request to the vendor.

        Returns:
            An LLMResult with the raw reply text.

        Raises:
            LLMError: If the request fails or the reply is empty.
        """
        pass

    def complete(self, messages: list[Message]) -> LLMResult:
        """Generate a commit message for the given conversation.

        Args:
            messages: The ordered messages to send.

        Returns:
            An LLMResult whose message has been cleaned up.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For request failures or empty replies.
        """
        api_key = self.get_api_key()
        result = self._request(api_key, messages)

        message = clean_commit_message(result.message)
        if not message:
            raise LLMError(f"{self.display_name} returned an empty commit message")

        result.message = message
        return result

    def get_api_key(self) -> str:
        """Get the API key from environment or credentials file.

        Checks in order:
        1. Environment variable (including a loaded .env file)
        2. ~/.diffscribe/credentials file

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        api_key = os.getenv(self.api_key_env_var)
        if api_key:
            return api_key

        from diffscribe.global_config import get_credential

        api_key = get_credential(self.api_key_env_var)
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{self.display_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {self.api_key_env_var}=your_key_here\n"
            f"  2. Run: diffscribe config set-key {self.config.provider.value}\n"
            f"  3. Manually add to ~/.diffscribe/credentials"
        )
