"""Request-scoped data models.

- Message: one role-tagged turn of the conversation sent to the LLM
- ModelConfig: provider, model and sampling parameters for a request
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from diffscribe.config import LLMProvider


class Message(BaseModel):
    """A single chat message.

    Attributes:
        role: Who is speaking (system, user or assistant).
        content: The message text.
    """

    role: Literal["system", "user", "assistant"]
    content: str


class ModelConfig(BaseModel):
    """Model selection and sampling parameters.

    Attributes:
        provider: The vendor serving the model.
        model: The vendor's model id.
        temperature: Sampling temperature, 0 to 2.
        max_tokens: Maximum number of tokens to generate.
    """

    provider: LLMProvider
    model: str
    temperature: float = Field(ge=0, le=2)
    max_tokens: int = Field(gt=0)

    @field_validator("model")
    @classmethod
    def model_must_not_be_empty(cls, v: str) -> str:
        """Ensure model id is not blank."""
        if not v or not v.strip():
            raise ValueError("Model cannot be empty")
        return v.strip()
