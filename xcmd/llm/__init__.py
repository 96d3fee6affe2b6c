"""
LLM integration layer for xcmd.
Provides a unified interface over the real and the offline client.
"""

from xcmd.llm.base_client import (
    BaseLLMClient,
    DirectOutput,
    FragmentOutput,
    LLMResponse,
    SuggestionRequest,
)
from xcmd.llm.openai_client import OpenAIClient
from xcmd.llm.mock_client import MockLLMClient
from xcmd.llm.llm_factory import create_llm_client

__all__ = [
    "BaseLLMClient",
    "DirectOutput",
    "FragmentOutput",
    "LLMResponse",
    "SuggestionRequest",
    "OpenAIClient",
    "MockLLMClient",
    "create_llm_client",
]
