"""OpenAI chat-completion provider implementation."""

from openai import OpenAI

from diffscribe.config import REQUEST_TIMEOUT
from diffscribe.llm.base import BaseLLMProvider, LLMResult
from diffscribe.llm.exceptions import LLMError
from diffscribe.models import Message


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    display_name = "OpenAI"

    def _request(self, api_key: str, messages: list[Message]) -> LLMResult:
        """Call the chat-completions endpoint.

        Args:
            api_key: The OpenAI API key.
            messages: The ordered messages to send.

        Returns:
            An LLMResult containing the first choice's content.

        Raises:
            LLMError: If the API call fails or returns no content.
        """
        client = OpenAI(api_key=api_key, timeout=REQUEST_TIMEOUT, max_retries=0)

        try:
            response = client.chat.completions.create(
                model=self.config.model,
                messages=[m.model_dump() for m in messages],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}")

        if not response.choices:
            raise LLMError("OpenAI returned no choices in response")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise LLMError("OpenAI returned empty response")

        input_tokens = 0
        output_tokens = 0
        if response.usage:
            input_tokens = response.usage.prompt_tokens or 0
            output_tokens = response.usage.completion_tokens or 0

        return LLMResult(
            message=content,
            model=self.config.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
