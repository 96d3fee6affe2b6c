"""
Fetches one suggestion from the model, escalating the output budget once
when a reasoning model spends the whole budget before emitting text.
"""

from typing import Optional, Sequence

from loguru import logger

from xcmd.core.exceptions import EmptyOutputError, NoSuggestionError
from xcmd.core.sanitizer import sanitize_suggestion
from xcmd.llm.base_client import BaseLLMClient, LLMResponse, SuggestionRequest
from xcmd.prompts import SYSTEM_PROMPT, build_prompt

INITIAL_OUTPUT_TOKENS = 200
ESCALATED_OUTPUT_TOKENS = 500


class SuggestionFetcher:
    """Builds requests, calls the client and returns a sanitized command."""

    def __init__(
        self,
        client: BaseLLMClient,
        model: Optional[str] = None,
        reasoning_effort: Optional[str] = "minimal"
    ):
        """
        Args:
            client: LLM client used for every attempt
            model: Model name placed in the request (defaults to the client's)
            reasoning_effort: Reasoning hint sent with each request
        """
        self.client = client
        self.model = model or client.model
        self.reasoning_effort = reasoning_effort

    def build_request(
        self,
        query: str,
        rejected_suggestions: Sequence[str],
        max_output_tokens: int
    ) -> SuggestionRequest:
        return SuggestionRequest(
            model=self.model,
            instructions=SYSTEM_PROMPT,
            input=build_prompt(query, rejected_suggestions),
            max_output_tokens=max_output_tokens,
            reasoning_effort=self.reasoning_effort,
        )

    def fetch(self, query: str, rejected_suggestions: Sequence[str]) -> str:
        """
        Get one command for the query, avoiding the rejected ones.

        Args:
            query: The user's request
            rejected_suggestions: Commands already turned down, oldest first

        Returns:
            A single-line command

        Raises:
            NoSuggestionError: If no command could be extracted after the
                single budget escalation
        """
        response = self.client.create_response(
            self.build_request(query, rejected_suggestions, INITIAL_OUTPUT_TOKENS)
        )
        suggestion = self._suggestion_from(response)

        # Reasoning models can use up the budget before emitting any text
        if not suggestion and response.truncated_by_budget:
            logger.info(
                f"Empty output truncated at {INITIAL_OUTPUT_TOKENS} tokens, "
                f"retrying with {ESCALATED_OUTPUT_TOKENS}"
            )
            response = self.client.create_response(
                self.build_request(query, rejected_suggestions, ESCALATED_OUTPUT_TOKENS)
            )
            suggestion = self._suggestion_from(response)
        elif not suggestion and response.incomplete_reason:
            logger.warning(f"Response incomplete ({response.incomplete_reason}), not retrying")

        if suggestion.startswith("!"):
            suggestion = suggestion[1:].strip()

        if not suggestion:
            raise NoSuggestionError()

        logger.debug(f"Suggestion: {suggestion}")
        return suggestion

    @staticmethod
    def _suggestion_from(response: LLMResponse) -> str:
        try:
            text = response.text()
        except EmptyOutputError as e:
            logger.debug(f"No text in response: {e}")
            return ""
        return sanitize_suggestion(text)
