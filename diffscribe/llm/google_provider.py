"""Google Gemini provider implementation."""

from google import genai
from google.genai import types

from diffscribe.config import REQUEST_TIMEOUT
from diffscribe.llm.base import BaseLLMProvider, LLMResult
from diffscribe.llm.exceptions import LLMError
from diffscribe.models import Message

# Gemini calls the assistant role "model"
_ROLE_MAP = {
    "user": "user",
    "assistant": "model",
}


def build_generate_request(messages: list[Message]) -> tuple[str | None, list[types.Content]]:
    """Split chat messages into a system instruction and Gemini contents.

    Args:
        messages: The ordered messages to send.

    Returns:
        A (system_instruction, contents) tuple. System messages are joined
        with blank lines; None when there are none.
    """
    system_parts = []
    contents = []

    for message in messages:
        if message.role == "system":
            system_parts.append(message.content)
            continue
        contents.append(
            types.Content(
                role=_ROLE_MAP[message.role],
                parts=[types.Part(text=message.content)],
            )
        )

    system_instruction = "\n\n".join(system_parts) if system_parts else None
    return system_instruction, contents


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    display_name = "Google"

    def _request(self, api_key: str, messages: list[Message]) -> LLMResult:
        """Call the generateContent endpoint.

        Args:
            api_key: The Gemini API key.
            messages: The ordered messages to send.

        Returns:
            An LLMResult containing the first candidate's first text part.

        Raises:
            LLMError: If the API call fails, is blocked, or returns no text.
        """
        # HttpOptions.timeout is in milliseconds
        client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=REQUEST_TIMEOUT * 1000),
        )

        system_instruction, contents = build_generate_request(messages)

        try:
            response = client.models.generate_content(
                model=self.config.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    system_instruction=system_instruction,
                    temperature=self.config.temperature,
                    max_output_tokens=self.config.max_tokens,
                    response_mime_type="text/plain",
                ),
            )
        except Exception as e:
            raise LLMError(f"Google Gemini API call failed: {e}")

        if not response.candidates:
            raise LLMError("Google Gemini returned no candidates in response")

        candidate = response.candidates[0]
        finish_reason = str(getattr(candidate, "finish_reason", "") or "")
        if "SAFETY" in finish_reason:
            raise LLMError(f"Google Gemini blocked response due to safety filters: {finish_reason}")

        text = ""
        if candidate.content and candidate.content.parts:
            text = candidate.content.parts[0].text or ""

        if not text.strip():
            if "MAX_TOKENS" in finish_reason:
                raise LLMError(
                    "Google Gemini used up the token limit before answering. "
                    "Try a larger --tokens value."
                )
            raise LLMError("Google Gemini returned empty response")

        input_tokens = 0
        output_tokens = 0
        usage = getattr(response, "usage_metadata", None)
        if usage:
            input_tokens = usage.prompt_token_count or 0
            output_tokens = usage.candidates_token_count or 0

        return LLMResult(
            message=text,
            model=self.config.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
