"""
Exception types raised by xcmd.
"""


class XcmdError(Exception):
    """Base class for all xcmd errors."""


class NoSuggestionError(XcmdError):
    """No usable command could be produced for the request."""

    def __init__(self, message: str = "No suggestion found"):
        super().__init__(message)


class CredentialMissingError(XcmdError):
    """No API key could be resolved from the environment or the key file."""

    def __init__(self, message: str = "No API key found. Run `x init` or set OPENAI_API_KEY (or OPENAI_TOKEN)."):
        super().__init__(message)


class EmptyOutputError(XcmdError):
    """A model response carried no text in any of its known shapes."""
