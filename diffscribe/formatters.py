"""Commit message clean-up."""


def clean_commit_message(raw: str) -> str:
    """Normalize a message returned by the LLM.

    Removes markdown code fences and a matching pair of surrounding
    quotes, and trims whitespace. Inner text is left untouched.

    Args:
        raw: The raw text response from the LLM.

    Returns:
        The cleaned commit message.
    """
    cleaned = raw.strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (``` or ```text)
        lines = lines[1:]
        # Remove last line if it's ```
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()

    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in ("\"", "'", "`"):
        cleaned = cleaned[1:-1].strip()

    return cleaned
