"""Commit executor."""

from diffscribe.git.runner import _run_git_command


def commit_changes(message: str) -> str:
    """Commit the staged changes with the given message.

    Args:
        message: The commit message, passed verbatim to ``git commit -m``.

    Returns:
        The stdout of ``git commit``.

    Raises:
        GitError: If the commit process fails.
    """
    return _run_git_command(["commit", "-m", message])
