"""CLI entry point for diffscribe.

This module provides the main CLI application that combines the default
generate-and-commit command with the configuration subcommands.
"""

import typer

from diffscribe.cli.config import config_app
from diffscribe.cli.main import main_command

# Main application
app = typer.Typer(
    name="diffscribe",
    help="diffscribe: AI-generated commit messages for staged changes",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
]
