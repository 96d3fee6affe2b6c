"""
Configuration management for xcmd.
Loads settings from environment variables and .env file.
"""

import os
import sys
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from loguru import logger

# Load environment variables from .env file
# Try the current directory first, then the user config directory
_possible_env_paths = [
    Path.cwd() / ".env",
    Path.home() / ".xcmd" / ".env",
]
for _env_path in _possible_env_paths:
    if _env_path.exists():
        load_dotenv(_env_path)
        break

DEFAULT_MODEL = "gpt-5-mini"
DEFAULT_REASONING_EFFORT = "minimal"
DEFAULT_TIMEOUT = 60.0
DEFAULT_API_KEY_FILE = Path.home() / ".x"

_TRUTHY = {"true", "1", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default
    if parsed <= 0:
        logger.warning(f"Ignoring non-positive {name}={value!r}, using {default}")
        return default
    return parsed


class Config:
    """Configuration manager for xcmd."""

    def __init__(self):
        """Initialize configuration from environment variables."""

        # Model Configuration
        self.model: str = os.getenv("X_MODEL") or DEFAULT_MODEL
        self.reasoning_effort: str = os.getenv("X_REASONING_EFFORT") or DEFAULT_REASONING_EFFORT
        self.timeout: float = _env_float("X_TIMEOUT", DEFAULT_TIMEOUT)

        # Credentials (the key itself is resolved lazily, see core.credentials)
        key_file = os.getenv("X_API_KEY_FILE")
        self.api_key_file: Path = Path(key_file).expanduser() if key_file else DEFAULT_API_KEY_FILE

        # Logging
        self.log_level: str = os.getenv("LOG_LEVEL", "DEBUG").upper()
        self.console_log_level: str = os.getenv("CONSOLE_LOG_LEVEL", "WARNING").upper()
        log_file = os.getenv("LOG_FILE")
        self.log_file: Optional[Path] = Path(log_file).expanduser() if log_file else None

        # Mock / offline mode
        self.mock_mode: bool = _env_flag("MOCK_MODE")

        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on settings."""
        logger.remove()  # Remove default handler

        logger.add(
            sys.stderr,
            level=self.console_log_level,
            colorize=True,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
        )

        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                self.log_file,
                level=self.log_level,
                rotation="1 MB",
                retention="1 week",
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
            )

        if self.mock_mode:
            logger.info("Mock mode enabled (LLM responses will be simulated)")

    def enable_verbose(self) -> None:
        """Lower the console sink to DEBUG for the rest of the run."""
        self.console_log_level = "DEBUG"
        self._setup_logging()

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"Config(model={self.model}, "
            f"reasoning_effort={self.reasoning_effort}, "
            f"mock_mode={self.mock_mode})"
        )


# Global config instance
config = Config()
