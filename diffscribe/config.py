"""Configuration for diffscribe LLM providers.

Configuration is loaded from ~/.diffscribe/config.yaml
Use 'diffscribe config' commands to modify settings.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import ValidationError


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    GOOGLE = "google"


class InvalidOptionError(Exception):
    """Raised when a CLI option or config value is invalid."""

    pass


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.diffscribe/config.yaml doesn't set them

DEFAULT_PROVIDER = LLMProvider.GOOGLE

DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-3.5-turbo-16k",
    LLMProvider.GOOGLE: "gemini-2.5-flash",
}

DEFAULT_TEMPERATURES = {
    LLMProvider.OPENAI: 0.2,
    LLMProvider.GOOGLE: 0.3,
}

DEFAULT_OPENAI_MAX_TOKENS = 196

# Gemini 2.5 flash/pro spend output tokens on internal reasoning
GEMINI_THINKING_MAX_TOKENS = 65536
GEMINI_DEFAULT_MAX_TOKENS = 100

# Seconds to wait for a completion before giving up
REQUEST_TIMEOUT = 180


# ============================================================
# ACTIVE CONFIGURATION (loaded from global config)
# ============================================================

# None means "use the vendor default" - overridden by load_config()
ACTIVE_PROVIDER = DEFAULT_PROVIDER
ACTIVE_MODEL: Optional[str] = None
MAX_TOKENS: Optional[int] = None
TEMPERATURE: Optional[float] = None


def load_config() -> None:
    """Load configuration from the global config file.

    This should be called by the CLI before using the LLM.

    Raises:
        GlobalConfigError: If the config file exists but cannot be read.
        InvalidOptionError: If a model is configured without a provider and
            no known provider serves it.
    """
    global ACTIVE_PROVIDER, ACTIVE_MODEL, MAX_TOKENS, TEMPERATURE

    # Import here to avoid circular dependency
    from diffscribe import global_config

    provider = global_config.get_active_provider()
    model = global_config.get_active_model()
    max_tokens = global_config.get_max_tokens()
    temperature = global_config.get_temperature()

    if provider:
        ACTIVE_PROVIDER = provider
    elif model:
        # A model without a provider implies the provider that serves it
        ACTIVE_PROVIDER, _ = resolve_model(model)
    if model:
        ACTIVE_MODEL = model
    if max_tokens is not None:
        MAX_TOKENS = max_tokens
    if temperature is not None:
        TEMPERATURE = temperature


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OPENAI: [
        "gpt-3.5-turbo",
        "gpt-3.5-turbo-16k",
        "gpt-4",
        "gpt-4-32k",
        "gpt-4o",
        "gpt-4o-mini",
    ],
    LLMProvider.GOOGLE: [
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
        "gemini-2.5-flash",
        "gemini-2.5-flash-preview-09-2025",
        "gemini-2.5-flash-lite",
        "gemini-2.5-flash-lite-preview-09-2025",
        "gemini-2.5-pro",
        "gemini-3-pro-preview",
    ],
}

# Dated preview suffix, e.g. "-preview-09-2025"
_VERSION_SUFFIX = re.compile(r"-\w+-\d{2}-\d{4}$")


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GOOGLE: "GOOGLE_API_KEY",
}


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]


def models_for_cli(provider: LLMProvider) -> list[str]:
    """List a provider's models the way they are typed on the command line.

    Dated preview suffixes are dropped, so
    ``gemini-2.5-flash-preview-09-2025`` is listed as ``gemini-2.5-flash``.
    Duplicates keep their first position.

    Args:
        provider: The LLM provider.

    Returns:
        Model names without version suffixes.
    """
    names = []
    for model in AVAILABLE_MODELS[provider]:
        name = _VERSION_SUFFIX.sub("", model)
        if name not in names:
            names.append(name)
    return names


def parse_provider(value: str) -> LLMProvider:
    """Parse a provider name.

    Raises:
        InvalidOptionError: If the provider is unknown.
    """
    try:
        return LLMProvider(value.lower())
    except ValueError:
        valid = ", ".join(p.value for p in LLMProvider)
        raise InvalidOptionError(f"Invalid provider: {value}. Valid providers: {valid}")


def resolve_model(value: str, provider: Optional[LLMProvider] = None) -> tuple[LLMProvider, str]:
    """Resolve a model name to its provider and exact model id.

    An exact id wins. Otherwise the first model whose id starts with
    ``value + "-"`` is used, so a dated preview can be requested without
    its date.

    Args:
        value: The model name given by the user.
        provider: Restrict the lookup to one provider.

    Returns:
        A (provider, model id) tuple.

    Raises:
        InvalidOptionError: If no known model matches.
    """
    providers = [provider] if provider else list(LLMProvider)

    for candidate in providers:
        if value in AVAILABLE_MODELS[candidate]:
            return candidate, value

    for candidate in providers:
        for model in AVAILABLE_MODELS[candidate]:
            if model.startswith(f"{value}-"):
                return candidate, model

    supported = ", ".join(m for p in providers for m in AVAILABLE_MODELS[p])
    raise InvalidOptionError(
        f"Wrong model option! Currently supported models are: {supported}"
    )


def get_default_max_tokens(provider: LLMProvider, model: str) -> int:
    """Get the default output token limit for a model."""
    if provider == LLMProvider.OPENAI:
        return DEFAULT_OPENAI_MAX_TOKENS

    if model.startswith("gemini-2.5-flash") and "lite" not in model:
        return GEMINI_THINKING_MAX_TOKENS
    if model.startswith("gemini-2.5-pro"):
        return GEMINI_THINKING_MAX_TOKENS
    return GEMINI_DEFAULT_MAX_TOKENS


def validate_temperature(temperature) -> float:
    """Check that a temperature is a number between 0 and 2.

    Raises:
        InvalidOptionError: If the value is out of range or not a number.
    """
    if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
        raise InvalidOptionError("Temperature must be a positive float between 0 and 2!")
    if not 0 <= temperature <= 2:
        raise InvalidOptionError("Temperature must be a positive float between 0 and 2!")
    return float(temperature)


def validate_max_tokens(max_tokens) -> int:
    """Check that a token limit is a positive integer.

    Raises:
        InvalidOptionError: If the value is not a positive integer.
    """
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
        raise InvalidOptionError(
            "Maximum number of tokens must be a positive integer more than 0!"
        )
    return max_tokens


def build_model_config(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
):
    """Build the effective ModelConfig from CLI options and loaded config.

    Precedence: CLI option > global config > vendor default. A model given
    without a provider selects the provider that serves it.

    Args:
        provider: Provider name from the CLI.
        model: Model name from the CLI.
        temperature: Temperature from the CLI.
        max_tokens: Output token limit from the CLI.

    Returns:
        A validated ModelConfig.

    Raises:
        InvalidOptionError: If any option is invalid.
    """
    from diffscribe.models import ModelConfig

    cli_provider = parse_provider(provider) if provider else None

    if model:
        effective_provider, effective_model = resolve_model(model, cli_provider)
    else:
        effective_provider = cli_provider or ACTIVE_PROVIDER
        configured_model = ACTIVE_MODEL if effective_provider == ACTIVE_PROVIDER else None
        # Configured models were confirmed by 'config set-provider', use them verbatim
        effective_model = configured_model or DEFAULT_MODELS[effective_provider]

    if temperature is None:
        temperature = TEMPERATURE
    if temperature is None:
        temperature = DEFAULT_TEMPERATURES[effective_provider]

    if max_tokens is None:
        max_tokens = MAX_TOKENS
    if max_tokens is None:
        max_tokens = get_default_max_tokens(effective_provider, effective_model)

    try:
        return ModelConfig(
            provider=effective_provider,
            model=effective_model,
            temperature=validate_temperature(temperature),
            max_tokens=validate_max_tokens(max_tokens),
        )
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        raise InvalidOptionError(f"Invalid model configuration: {details}")
