"""
Shared fixtures for the xcmd test suite.
"""

from typing import Iterable, List, Optional, Tuple

import pytest

from xcmd.core.keypress import CancellationSignal, Decision
from xcmd.llm.base_client import DirectOutput, FragmentOutput, LLMResponse


def text_response(text: str, incomplete_reason: Optional[str] = None) -> LLMResponse:
    """Response with a direct text field."""
    return LLMResponse(output=DirectOutput(text), model="test-model", incomplete_reason=incomplete_reason)


def empty_response(incomplete_reason: Optional[str] = None) -> LLMResponse:
    """Response with no text at all."""
    return LLMResponse(output=FragmentOutput([]), model="test-model", incomplete_reason=incomplete_reason)


class RecordingStatus:
    """Collects loop callbacks as (event, value) pairs."""

    def __init__(self):
        self.events: List[Tuple[str, str]] = []

    def fetching(self, query):
        self.events.append(("fetching", query))

    def proposing(self, suggestion):
        self.events.append(("proposing", suggestion))

    def accepted(self, suggestion):
        self.events.append(("accepted", suggestion))

    def printed(self, suggestion):
        self.events.append(("printed", suggestion))

    def failed(self, message):
        self.events.append(("failed", message))

    def named(self, event: str) -> List[str]:
        return [value for name, value in self.events if name == event]


class ScriptedDecisions:
    """Decision source that replays a fixed list of decisions."""

    def __init__(self, decisions: Iterable[Decision], cancel: Optional[CancellationSignal] = None):
        self._decisions = list(decisions)
        self.cancel = cancel
        self.calls = 0

    def next_decision(self) -> Decision:
        decision = self._decisions[self.calls]
        self.calls += 1
        if decision is Decision.INTERRUPTED and self.cancel is not None:
            self.cancel.set("ctrl-c")
        return decision


@pytest.fixture
def status():
    return RecordingStatus()


@pytest.fixture
def executed():
    """List that an execute handoff can append to."""
    return []
