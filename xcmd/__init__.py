"""
xcmd - natural language to a single shell command.

Turns a request like "list s3 buckets" into one command, shows it, and lets
the user run it or ask for a different one.
"""

__version__ = "0.3.1"

from xcmd.core.loop import SuggestionLoop, LoopState
from xcmd.core.fetcher import SuggestionFetcher
from xcmd.core.sanitizer import sanitize_suggestion
from xcmd.prompts import build_prompt

__all__ = [
    "SuggestionLoop",
    "LoopState",
    "SuggestionFetcher",
    "sanitize_suggestion",
    "build_prompt",
]
