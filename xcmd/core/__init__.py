"""
Core modules for the suggestion loop, its inputs and its collaborators.
"""

from xcmd.core.exceptions import (
    XcmdError,
    NoSuggestionError,
    CredentialMissingError,
    EmptyOutputError,
)
from xcmd.core.config import Config

__all__ = [
    "XcmdError",
    "NoSuggestionError",
    "CredentialMissingError",
    "EmptyOutputError",
    "Config",
]
