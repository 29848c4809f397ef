"""Interactive handling of a generated commit message.

The message moves through these states until it is committed or dropped:

    Generated --modify/editor--> Generated (edited)
    Generated --regenerate-----> Generated (new)
    Generated --accept---------> Committing --> Done
    Generated --discard--------> Done
"""

from enum import Enum
from typing import Callable

import typer

from diffscribe.git import commit_changes
from diffscribe.cli.utils import display_message, edit_message


class ResponseAction(Enum):
    """What to do with the proposed message."""

    ACCEPT = "a"
    MODIFY = "m"
    EDITOR = "e"
    REGENERATE = "r"
    DISCARD = "d"


ACTION_PROMPT = "[a]ccept, [m]odify, [e]ditor, [r]egenerate or [d]iscard?"

# Single letters and full action words only
_ANSWERS = {
    **{action.value: action for action in ResponseAction},
    **{action.name.lower(): action for action in ResponseAction},
}


def choose_action() -> ResponseAction:
    """Ask the user what to do until a valid choice is given.

    Accepts the letter or the full word; Enter accepts.
    """
    while True:
        answer = typer.prompt(ACTION_PROMPT, default="a", show_default=False)
        action = _ANSWERS.get(answer.strip().lower())
        if action is not None:
            return action
        typer.echo(f"Invalid choice: {answer!r}", err=True)


def prompt_new_message(current: str) -> str:
    """Prompt for a replacement message, pre-filled with the current one.

    Blank input is rejected and the prompt repeats.
    """
    while True:
        new_message = typer.prompt("Please enter the new commit message", default=current)
        if new_message.strip():
            return new_message.strip()
        typer.echo("Commit message is required", err=True)


def handle_user_response(
    message: str,
    regenerate: Callable[[], str],
    assume_yes: bool = False,
) -> bool:
    """Drive the accept/modify/regenerate/discard loop.

    Args:
        message: The generated commit message.
        regenerate: Returns a freshly generated message for the same diff.
        assume_yes: Accept the first message without asking.

    Returns:
        True if the changes were committed, False if the message was discarded.

    Raises:
        GitError: If ``git commit`` fails.
        LLMError: If regeneration fails.
    """
    while True:
        display_message(message)

        action = ResponseAction.ACCEPT if assume_yes else choose_action()

        if action == ResponseAction.MODIFY:
            message = prompt_new_message(message)

        elif action == ResponseAction.EDITOR:
            edited = edit_message(message)
            if edited:
                message = edited
            else:
                typer.echo("Empty message from editor, keeping the previous one.", err=True)

        elif action == ResponseAction.REGENERATE:
            typer.echo("Regenerating commit message...", err=True)
            message = regenerate()

        elif action == ResponseAction.ACCEPT:
            typer.echo("Committing...", err=True)
            output = commit_changes(message)
            if output:
                typer.echo(output)
            typer.echo("Commit successful!", err=True)
            return True

        else:
            typer.echo("Commit message discarded.", err=True)
            return False
