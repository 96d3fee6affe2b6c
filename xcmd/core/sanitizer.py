"""
Turns raw model text into a single runnable command line.
"""

import re

# Fenced block, optionally tagged with a shell name
FENCED_BLOCK_RE = re.compile(r"```(?:bash|shell|sh|zsh)?\s*([\s\S]*?)```", re.IGNORECASE)
EDGE_BACKTICKS_RE = re.compile(r"^`+|`+$")
COMMAND_LABEL_RE = re.compile(r"^command:\s*", re.IGNORECASE)
PROMPT_MARKER_RE = re.compile(r"^\$\s*")


def sanitize_suggestion(text: str) -> str:
    """
    Extract one clean command line from model output.

    Strips code fences, stray backticks, a "Command:" label and a leading
    "$" prompt marker, then keeps only the first non-empty line.

    Args:
        text: Raw model output (may be empty, multi-line or fenced)

    Returns:
        The command, or "" when nothing usable remains
    """
    cleaned = (text or "").strip()
    if not cleaned:
        return ""

    fenced = FENCED_BLOCK_RE.search(cleaned)
    if fenced:
        cleaned = fenced.group(1).strip()

    cleaned = EDGE_BACKTICKS_RE.sub("", cleaned).strip()
    cleaned = COMMAND_LABEL_RE.sub("", cleaned).strip()
    cleaned = PROMPT_MARKER_RE.sub("", cleaned).strip()

    for line in cleaned.split("\n"):
        line = line.strip()
        if line:
            # Second pass: the marker can survive on the first real line
            return PROMPT_MARKER_RE.sub("", line).strip()

    return ""
