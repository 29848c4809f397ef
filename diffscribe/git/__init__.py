"""Git process wrappers for diffscribe.

This package provides:
- exceptions: GitError, NoStagedChangesError
- runner: _run_git_command
- diff: get_staged_diff
- commit: commit_changes
"""

from diffscribe.git.exceptions import (
    GitError,
    NoStagedChangesError,
)
from diffscribe.git.runner import _run_git_command
from diffscribe.git.diff import get_staged_diff
from diffscribe.git.commit import commit_changes


__all__ = [
    "GitError",
    "NoStagedChangesError",
    "_run_git_command",
    "get_staged_diff",
    "commit_changes",
]
