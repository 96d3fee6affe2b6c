"""
API key lookup and storage.

Keys are looked up in order: OPENAI_API_KEY, OPENAI_TOKEN (legacy name), then
the key file written by `x init`. The first non-empty source wins.
"""

import os
from pathlib import Path
from typing import Optional

from loguru import logger

from xcmd.core.exceptions import CredentialMissingError

API_KEY_ENV_VARS = ("OPENAI_API_KEY", "OPENAI_TOKEN")


def resolve_api_key(key_file: Path) -> Optional[str]:
    """
    Find the API key to use for this run.

    Args:
        key_file: Path of the file written by `x init`

    Returns:
        The key, or None when no source provides one
    """
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            logger.debug(f"Using API key from ${name}")
            return value

    if key_file.is_file():
        value = key_file.read_text(encoding="utf-8").strip()
        if value:
            logger.debug(f"Using API key from {key_file}")
            return value

    return None


def require_api_key(key_file: Path) -> str:
    """Like resolve_api_key, but raise CredentialMissingError when nothing is found."""
    api_key = resolve_api_key(key_file)
    if not api_key:
        raise CredentialMissingError()
    return api_key


def store_api_key(key_file: Path, api_key: str) -> None:
    """
    Write the key to the key file, readable only by the current user.

    Raises:
        ValueError: If the key is empty
    """
    api_key = api_key.strip()
    if not api_key:
        raise ValueError("No API key provided")

    key_file.parent.mkdir(parents=True, exist_ok=True)
    key_file.write_text(api_key, encoding="utf-8")
    key_file.chmod(0o600)
    logger.info(f"API key stored in {key_file}")
