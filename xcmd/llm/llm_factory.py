"""
LLM Factory - picks the client for this run.
"""

from typing import Optional

from loguru import logger

from xcmd.core.config import Config
from xcmd.core.exceptions import CredentialMissingError
from xcmd.llm.base_client import BaseLLMClient
from xcmd.llm.mock_client import MockLLMClient
from xcmd.llm.openai_client import OpenAIClient


def create_llm_client(
    config: Config,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    mock: Optional[bool] = None
) -> BaseLLMClient:
    """
    Create the LLM client for this run.

    Args:
        config: Configuration object
        api_key: Resolved API key (not needed in mock mode)
        model: Model override, defaults to config.model
        mock: Force mock mode on or off, defaults to config.mock_mode

    Returns:
        Initialized LLM client

    Raises:
        CredentialMissingError: If a real client is needed and no key was given
    """
    model = model or config.model

    # Short-circuit to mock client when offline mode is enabled
    use_mock = config.mock_mode if mock is None else mock
    if use_mock:
        logger.info("Mock mode active – using MockLLMClient.")
        return MockLLMClient()

    if not api_key:
        raise CredentialMissingError()

    logger.info(f"Creating LLM client for model: {model}")
    return OpenAIClient(api_key=api_key, model=model, timeout=config.timeout)
