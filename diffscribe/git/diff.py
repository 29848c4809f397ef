"""Staged diff reader."""

from diffscribe.git.exceptions import NoStagedChangesError
from diffscribe.git.runner import _run_git_command


def get_staged_diff() -> str:
    """Get the output of ``git diff --staged``.

    Returns:
        The staged diff text.

    Raises:
        GitError: If the git process fails.
        NoStagedChangesError: If nothing is staged.
    """
    diff = _run_git_command(["diff", "--staged"], strip=False)

    if not diff.strip():
        raise NoStagedChangesError("There are no changes yet!")

    return diff
