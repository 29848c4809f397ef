"""Global configuration management for diffscribe.

Handles user-level configuration stored in ~/.diffscribe/:
- config.yaml: Provider, model, sampling and prompt settings
- credentials: API keys for LLM providers
"""

import os
import stat
from pathlib import Path
from typing import Dict, Optional, Any

import yaml

from diffscribe.config import LLMProvider


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".diffscribe"


def get_global_config_dir() -> Path:
    """Get the global diffscribe configuration directory.

    Returns:
        Path to ~/.diffscribe/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.diffscribe/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file."""
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.diffscribe/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file cannot be read or is not a mapping.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")

    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.diffscribe/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _parse_credentials(lines) -> Dict[str, str]:
    credentials = {}
    for line in lines:
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        # Parse KEY=value format
        if "=" in line:
            key, value = line.split("=", 1)
            credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.diffscribe/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        with open(credentials_file, "r") as f:
            return _parse_credentials(f)
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(provider_key: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "OPENAI_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[provider_key] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# diffscribe API credentials\n")
            f.write("# Format: PROVIDER_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    """Get an API key from credentials file.

    Args:
        provider_key: Environment variable name (e.g., "GOOGLE_API_KEY")

    Returns:
        The API key if found, None otherwise.
    """
    credentials = load_credentials()
    return credentials.get(provider_key)


def get_active_provider() -> Optional[LLMProvider]:
    """Get the active LLM provider from global config.

    Returns:
        LLMProvider enum value, or None if not configured.
    """
    config = load_global_config()
    provider_str = config.get("provider")

    if not provider_str:
        return None

    try:
        return LLMProvider(provider_str)
    except ValueError:
        raise GlobalConfigError(f"Unknown provider in config: {provider_str}")


def get_active_model() -> Optional[str]:
    """Get the active model from global config."""
    config = load_global_config()
    return config.get("model")


def set_provider_and_model(provider: LLMProvider, model: str) -> None:
    """Set the active provider and model in global config.

    Args:
        provider: The LLM provider to use.
        model: The model name to use.
    """
    config = load_global_config()
    config["provider"] = provider.value
    config["model"] = model
    save_global_config(config)


def get_editor_preference() -> Optional[str]:
    """Get the user's preferred editor from global config."""
    config = load_global_config()
    return config.get("editor")


def get_max_tokens() -> Optional[int]:
    """Get max_tokens setting from global config."""
    config = load_global_config()
    return config.get("max_tokens")


def get_temperature() -> Optional[float]:
    """Get temperature setting from global config."""
    config = load_global_config()
    return config.get("temperature")


def get_prompt_file() -> Optional[Path]:
    """Get the custom system prompt file from global config.

    Relative paths and ``~`` are resolved against the user's home.

    Returns:
        Path to the prompt file, or None if not configured.
    """
    config = load_global_config()
    prompt_file = config.get("prompt_file")

    if not prompt_file:
        return None

    path = Path(prompt_file).expanduser()
    if not path.is_absolute():
        path = Path.home() / path
    return path


def is_configured() -> bool:
    """Check if diffscribe has been configured.

    Returns:
        True if config.yaml exists, False otherwise.
    """
    return get_config_file_path().exists()
