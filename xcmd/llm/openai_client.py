"""
OpenAI LLM client implementation.
Uses the Responses API, which reasoning models like gpt-5-mini require.
"""

from typing import Any, List, Optional

from loguru import logger
from openai import OpenAI

from xcmd.llm.base_client import (
    BaseLLMClient,
    DirectOutput,
    FragmentOutput,
    LLMResponse,
    ResponseOutput,
    SuggestionRequest,
)


def _field(obj: Any, name: str) -> Any:
    """Read a field from an SDK object or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def to_response_output(raw: Any) -> ResponseOutput:
    """
    Classify a raw Responses API payload into one of the two output shapes.

    A non-blank ``output_text`` wins; otherwise every ``output[].content[].text``
    fragment is collected in order.
    """
    direct = _field(raw, "output_text")
    if isinstance(direct, str) and direct.strip():
        return DirectOutput(direct)

    fragments: List[str] = []
    for item in _field(raw, "output") or []:
        for content in _field(item, "content") or []:
            text = _field(content, "text")
            if isinstance(text, str) and text:
                fragments.append(text)
    return FragmentOutput(fragments)


def incomplete_reason(raw: Any) -> Optional[str]:
    """Reason the response stopped early, if it did."""
    reason = _field(_field(raw, "incomplete_details"), "reason")
    return reason if isinstance(reason, str) else None


class OpenAIClient(BaseLLMClient):
    """OpenAI LLM client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-5-mini",
        timeout: float = 60.0,
        client: Optional[Any] = None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model name
            timeout: Per-request timeout in seconds
            client: Preconstructed SDK client (used by tests)
        """
        super().__init__(api_key, model)
        self.timeout = timeout
        self.client = client or OpenAI(api_key=api_key, timeout=timeout)
        logger.debug(f"OpenAI client initialized: {model}")

    def create_response(self, request: SuggestionRequest) -> LLMResponse:
        """Send the request through ``responses.create``."""
        try:
            raw = self.client.responses.create(**request.to_payload())
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        usage = _field(raw, "usage")
        tokens_used = _field(usage, "total_tokens") or 0
        reason = incomplete_reason(raw)

        logger.debug(
            f"OpenAI response: {tokens_used} tokens, "
            f"budget={request.max_output_tokens}, incomplete={reason}"
        )

        return LLMResponse(
            output=to_response_output(raw),
            model=_field(raw, "model") or self.model,
            tokens_used=tokens_used,
            incomplete_reason=reason,
            metadata={
                "status": _field(raw, "status"),
                "response_id": _field(raw, "id"),
            },
        )
