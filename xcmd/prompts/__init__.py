"""
Prompt text sent to the model.

SYSTEM_PROMPT is fixed for every request; build_prompt() produces the
per-attempt input, listing earlier suggestions the user turned down.
"""

from typing import Sequence

SYSTEM_PROMPT = " ".join([
    "You convert user requests into one safe shell command.",
    "Respond with exactly one bash command and no explanation.",
    "Do not include markdown, comments, backticks, or a leading '$'.",
    "If a command is unsafe or ambiguous, prefer a non-destructive command.",
])

REJECTED_HEADER = "Prior suggestions to avoid:"
RETRY_INSTRUCTION = "Return a different command that still satisfies the request."


def build_prompt(query: str, rejected_suggestions: Sequence[str]) -> str:
    """
    Build the model input for one attempt.

    Args:
        query: The user's request, unchanged for the whole run
        rejected_suggestions: Commands already turned down, oldest first

    Returns:
        The query itself when nothing was rejected yet, otherwise a block
        that repeats the request and numbers every rejected command
    """
    if not rejected_suggestions:
        return query

    rejected_text = "\n".join(
        f"{idx}. {suggestion}"
        for idx, suggestion in enumerate(rejected_suggestions, start=1)
    )

    return "\n\n".join([
        f"User request: {query}",
        REJECTED_HEADER,
        rejected_text,
        RETRY_INSTRUCTION,
    ])


__all__ = ["SYSTEM_PROMPT", "build_prompt"]
