"""Prompt assembly for commit message generation.

- system: the built-in system prompt
- examples: a canned few-shot diff and answer
- load_system_prompt: resolve the system prompt asset (file or built-in)
- build_messages: assemble the conversation sent to the LLM
"""

from pathlib import Path
from typing import Optional

from diffscribe.config import InvalidOptionError
from diffscribe.models import Message
from diffscribe.prompts.examples import FEW_SHOT_ANSWER, FEW_SHOT_DIFF
from diffscribe.prompts.system import DEFAULT_SYSTEM_PROMPT


COMMIT_TYPES = [
    "feat",
    "fix",
    "docs",
    "refactor",
    "style",
    "chore",
    "build",
    "ci",
    "perf",
    "test",
]


def load_system_prompt(path: Optional[Path] = None) -> str:
    """Load the system prompt.

    Resolution order: the given path, then ``prompt_file`` from the global
    config, then the built-in prompt.

    Args:
        path: Explicit prompt file (from --prompt-file).

    Returns:
        The system prompt text.

    Raises:
        InvalidOptionError: If the prompt file is missing or empty.
    """
    if path is None:
        from diffscribe import global_config

        path = global_config.get_prompt_file()

    if path is None:
        return DEFAULT_SYSTEM_PROMPT

    if not path.is_file():
        raise InvalidOptionError(f"Prompt file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise InvalidOptionError(f"Cannot read prompt file {path}: {e}")

    if not text:
        raise InvalidOptionError(f"Prompt file is empty: {path}")

    return text


def build_user_content(diff: str, commit_type: Optional[str] = None) -> str:
    """Build the user turn carrying the staged diff."""
    if commit_type:
        return f"Preferred commit type: {commit_type}\n\n{diff}"
    return diff


def build_messages(
    diff: str,
    system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    commit_type: Optional[str] = None,
    few_shot: bool = False,
) -> list[Message]:
    """Assemble the message list for a completion request.

    Args:
        diff: The staged diff.
        system_prompt: Instruction text for the system turn.
        commit_type: Preferred commit type hint (feat, fix, ...).
        few_shot: Prepend the canned example exchange.

    Returns:
        Ordered messages: system, optional example pair, then the diff.
    """
    messages = [Message(role="system", content=system_prompt)]

    if few_shot:
        messages.append(Message(role="user", content=FEW_SHOT_DIFF))
        messages.append(Message(role="assistant", content=FEW_SHOT_ANSWER))

    messages.append(Message(role="user", content=build_user_content(diff, commit_type)))
    return messages


__all__ = [
    "COMMIT_TYPES",
    "DEFAULT_SYSTEM_PROMPT",
    "FEW_SHOT_ANSWER",
    "FEW_SHOT_DIFF",
    "build_messages",
    "build_user_content",
    "load_system_prompt",
]
