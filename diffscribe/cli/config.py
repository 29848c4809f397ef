"""CLI commands for global configuration management."""

import typer

from diffscribe import global_config
from diffscribe.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    LLMProvider,
    InvalidOptionError,
    models_for_cli,
    parse_provider,
)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global diffscribe configuration in ~/.diffscribe/",
    add_completion=False,
)


def _parse_provider_or_exit(provider: str) -> LLMProvider:
    try:
        return parse_provider(provider)
    except InvalidOptionError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        if not global_config.is_configured():
            typer.echo("No configuration found. Run 'diffscribe config set-provider' to set up.")
            return

        config = global_config.load_global_config()

        typer.echo("Current diffscribe configuration (~/.diffscribe/config.yaml):")
        typer.echo()
        typer.echo(f"  Provider: {config.get('provider', 'not set')}")
        typer.echo(f"  Model: {config.get('model', 'not set')}")
        typer.echo(f"  Max Tokens: {config.get('max_tokens', 'provider default')}")
        typer.echo(f"  Temperature: {config.get('temperature', 'provider default')}")

        for key, label in (("editor", "Editor"), ("prompt_file", "Prompt File")):
            value = config.get(key)
            if value:
                typer.echo(f"  {label}: {value}")

        typer.echo()

        provider_str = config.get("provider")
        if provider_str in {p.value for p in LLMProvider}:
            env_var = API_KEY_ENV_VARS[LLMProvider(provider_str)]
            api_key = global_config.get_credential(env_var)

            if api_key:
                masked_key = api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"
                typer.echo(f"  API Key ({env_var}): {masked_key}")
            else:
                typer.echo(f"  API Key ({env_var}): not set")

    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(
        ...,
        help="Provider name (openai, google)"
    )
) -> None:
    """Set or update an API key for a provider."""
    llm_provider = _parse_provider_or_exit(provider)
    env_var = API_KEY_ENV_VARS[llm_provider]

    typer.echo(f"Setting API key for {llm_provider.value}")
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    if not api_key.strip():
        typer.echo("API key cannot be empty.", err=True)
        raise typer.Exit(1)

    try:
        global_config.save_credential(env_var, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(
        ...,
        help="Provider name (openai, google)"
    ),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (optional, will prompt if not provided)"
    )
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider_or_exit(provider)

    if not model:
        models = AVAILABLE_MODELS[llm_provider]
        typer.echo(f"Available models for {llm_provider.value}:")
        for i, m in enumerate(models, 1):
            typer.echo(f"  {i}. {m}")

        model_choice = typer.prompt(f"Select a model (1-{len(models)})", type=int, default=1)
        if model_choice < 1 or model_choice > len(models):
            typer.echo("Invalid choice. Aborting.", err=True)
            raise typer.Exit(1)

        model = models[model_choice - 1]
    elif model not in AVAILABLE_MODELS[llm_provider]:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")
        proceed = typer.confirm("Continue anyway?", default=False)
        if not proceed:
            raise typer.Exit(0)

    try:
        global_config.set_provider_and_model(llm_provider, model)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("list-models")
def config_list_models(
    provider: str = typer.Argument(
        None,
        help="Provider name (optional, shows all if not provided)"
    )
) -> None:
    """List models accepted by --model for a provider (or all providers)."""
    providers = [_parse_provider_or_exit(provider)] if provider else list(LLMProvider)

    for llm_provider in providers:
        typer.echo(f"{llm_provider.value}:")
        for model in models_for_cli(llm_provider):
            typer.echo(f"  • {model}")
        typer.echo()
