"""Main CLI command for generating and committing a message."""

from pathlib import Path
from typing import Optional

import typer

from diffscribe import __version__
from diffscribe.config import InvalidOptionError, build_model_config, load_config
from diffscribe.git import GitError, NoStagedChangesError, get_staged_diff
from diffscribe.global_config import GlobalConfigError
from diffscribe.llm import LLMError, MissingAPIKeyError, generate_commit_message
from diffscribe.models import Message, ModelConfig
from diffscribe.prompts import COMMIT_TYPES, build_messages, load_system_prompt
from diffscribe.cli.respond import handle_user_response


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"diffscribe {__version__}")
        raise typer.Exit()


def _generate(messages: list[Message], model_config: ModelConfig, verbose: bool) -> str:
    typer.echo(f"Generating commit message with {model_config.model}...", err=True)
    result = generate_commit_message(messages, model_config)

    if verbose:
        typer.echo(
            f"Model: {result.model} | Tokens: {result.input_tokens:,} input / "
            f"{result.output_tokens:,} output",
            err=True,
        )

    return result.message


def main_command(
    ctx: typer.Context,
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider to use (openai, google)",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="ID of the model to use, e.g. gpt-4 or gemini-2.5-pro",
    ),
    temperature: Optional[float] = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Sampling temperature between 0 and 2",
    ),
    tokens: Optional[int] = typer.Option(
        None,
        "--tokens",
        "-k",
        help="Maximum number of tokens to generate",
    ),
    commit_type: Optional[str] = typer.Option(
        None,
        "--type",
        help=f"Preferred commit type ({', '.join(COMMIT_TYPES)})",
    ),
    prompt_file: Optional[Path] = typer.Option(
        None,
        "--prompt-file",
        help="Use the text of this file as the system prompt",
    ),
    few_shot: bool = typer.Option(
        False,
        "--few-shot",
        help="Show the model a worked example before the diff",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Commit with the first generated message without asking",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show model and token usage",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate an AI-powered commit message for the staged changes and commit it."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    try:
        # Step 1: Resolve and validate options before touching git or the network
        load_config()
        model_config = build_model_config(provider, model, temperature, tokens)

        if commit_type and commit_type.lower() not in COMMIT_TYPES:
            raise InvalidOptionError(
                f"Invalid commit type: {commit_type}. Valid types: {', '.join(COMMIT_TYPES)}"
            )

        system_prompt = load_system_prompt(prompt_file)

        # Step 2: Read the staged diff
        typer.echo("Reading staged changes...", err=True)
        diff = get_staged_diff()

        # Step 3: Build the conversation once; regeneration reuses it
        messages = build_messages(
            diff,
            system_prompt=system_prompt,
            commit_type=commit_type.lower() if commit_type else None,
            few_shot=few_shot,
        )

        def regenerate() -> str:
            return _generate(messages, model_config, verbose)

        # Step 4: Generate and hand over to the user
        message = regenerate()
        handle_user_response(message, regenerate, assume_yes=yes)

    except NoStagedChangesError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo("Stage your changes first with: git add <file>...", err=True)
        raise typer.Exit(1)
    except (InvalidOptionError, GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except MissingAPIKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)
