"""
Base LLM client interface.
All LLM providers must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional, Any, Union
from dataclasses import dataclass, field

from xcmd.core.exceptions import EmptyOutputError

# Incomplete reason reported when the output-size budget ran out
MAX_OUTPUT_TOKENS_REASON = "max_output_tokens"


@dataclass(frozen=True)
class SuggestionRequest:
    """One generation request. Built fresh for every attempt."""
    model: str
    instructions: str
    input: str
    max_output_tokens: int
    reasoning_effort: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Keyword arguments for the Responses API."""
        payload: Dict[str, Any] = {
            "model": self.model,
            "instructions": self.instructions,
            "input": self.input,
            "max_output_tokens": self.max_output_tokens,
        }
        if self.reasoning_effort:
            payload["reasoning"] = {"effort": self.reasoning_effort}
        return payload


@dataclass(frozen=True)
class DirectOutput:
    """Response that exposes its full text in a single field."""
    text: str


@dataclass(frozen=True)
class FragmentOutput:
    """Response whose text is spread over nested content fragments."""
    fragments: List[str] = field(default_factory=list)


ResponseOutput = Union[DirectOutput, FragmentOutput]


def extract_text(output: ResponseOutput) -> str:
    """
    Get the plain text out of either response shape.

    Raises:
        EmptyOutputError: If the shape carries no non-blank text
    """
    if isinstance(output, DirectOutput):
        text = output.text.strip()
    else:
        text = "\n".join(fragment for fragment in output.fragments if fragment).strip()

    if not text:
        raise EmptyOutputError(f"{type(output).__name__} carried no text")
    return text


@dataclass
class LLMResponse:
    """Response from an LLM."""
    output: ResponseOutput
    model: str
    tokens_used: int = 0
    incomplete_reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def text(self) -> str:
        """Extracted text; raises EmptyOutputError when there is none."""
        return extract_text(self.output)

    @property
    def truncated_by_budget(self) -> bool:
        """True when generation stopped because max_output_tokens ran out."""
        return self.incomplete_reason == MAX_OUTPUT_TOKENS_REASON


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    def __init__(self, api_key: Optional[str], model: str):
        """
        Initialize the LLM client.

        Args:
            api_key: API key for the provider
            model: Model identifier
        """
        self.api_key = api_key
        self.model = model

    @abstractmethod
    def create_response(self, request: SuggestionRequest) -> LLMResponse:
        """
        Send one generation request.

        Args:
            request: Fully built request for this attempt

        Returns:
            LLMResponse with the output shape and truncation info
        """
        pass

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}(model={self.model})"
