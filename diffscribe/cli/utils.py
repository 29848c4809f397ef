"""Shared utility functions for CLI commands."""

import os
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path

import typer

from diffscribe import global_config


def find_editor() -> list[str]:
    """Find an available text editor.

    Preference order:
    1. editor from ~/.diffscribe/config.yaml
    2. $VISUAL / $EDITOR environment variables
    3. nano as fallback

    Returns:
        List of command parts to run the editor.
    """
    editor = global_config.get_editor_preference()
    if editor:
        return shlex.split(editor)

    for env_var in ("VISUAL", "EDITOR"):
        editor = os.environ.get(env_var)
        if editor:
            return shlex.split(editor)

    # noinspection PyArgumentList
    if shutil.which("nano"):
        return ["nano"]

    # Last resort: vi
    return ["vi"]


def open_editor(file_path: Path) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
    """
    editor_cmd = find_editor()

    typer.echo(f"Opening editor: {' '.join(editor_cmd)}", err=True)

    try:
        result = subprocess.run(
            editor_cmd + [str(file_path)],
            check=False,
        )

        if result.returncode != 0:
            typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)

    except FileNotFoundError:
        typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)


def edit_message(message: str) -> str:
    """Let the user edit a message in their editor.

    Args:
        message: The current commit message.

    Returns:
        The edited message with surrounding whitespace removed. Empty if
        the user cleared the file.
    """
    fd, name = tempfile.mkstemp(prefix="diffscribe-", suffix=".txt")
    path = Path(name)
    try:
        with os.fdopen(fd, "w") as f:
            f.write(message + "\n")
        open_editor(path)
        return path.read_text().strip()
    finally:
        path.unlink(missing_ok=True)


def display_message(message: str) -> None:
    """Print a commit message between horizontal rules."""
    typer.echo("")
    typer.echo("=" * 60)
    typer.echo(message)
    typer.echo("=" * 60)
    typer.echo("")
