"""
The suggest / decide cycle.

Fetches a suggestion, shows it, and waits for the user to run it (Enter) or
ask for another one (Space). At most MAX_ALTERNATIVES suggestions are fetched
per run; every rejected one is fed back into the next prompt.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from xcmd.core.exceptions import NoSuggestionError
from xcmd.core.fetcher import SuggestionFetcher
from xcmd.core.keypress import CancellationSignal, Decision, KeypressDecisions

MAX_ALTERNATIVES = 3

ExecuteCommand = Callable[[str], None]


class LoopState(Enum):
    FETCHING = "fetching"
    AWAITING_DECISION = "awaiting_decision"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
    INTERRUPTED = "interrupted"


TERMINAL_STATES = {LoopState.ACCEPTED, LoopState.EXHAUSTED, LoopState.FAILED, LoopState.INTERRUPTED}


@dataclass
class LoopOutcome:
    """Final state of one run."""
    state: LoopState
    suggestion: Optional[str] = None
    rejected: List[str] = field(default_factory=list)
    fetch_count: int = 0
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.state is LoopState.ACCEPTED


class SuggestionLoop:
    """
    Runs the suggestion state machine for a single query.

    ``status`` receives presentation callbacks: fetching(query),
    proposing(suggestion), accepted(suggestion),
    printed(suggestion) and failed(message).

    Without ``decisions`` the loop is non-interactive: the first suggestion is
    printed and the run ends with no execution.
    """

    def __init__(
        self,
        fetcher: SuggestionFetcher,
        status,
        decisions: Optional[KeypressDecisions] = None,
        execute: Optional[ExecuteCommand] = None,
        cancel: Optional[CancellationSignal] = None,
        max_alternatives: int = MAX_ALTERNATIVES
    ):
        if decisions is not None and execute is None:
            raise ValueError("Interactive runs need an execute handoff")
        self.fetcher = fetcher
        self.status = status
        self.decisions = decisions
        self.execute = execute
        self.cancel = cancel or CancellationSignal()
        self.max_alternatives = max_alternatives

    @property
    def interactive(self) -> bool:
        return self.decisions is not None

    def run(self, query: str) -> LoopOutcome:
        """
        Drive the loop until it accepts, runs out of alternatives, fails or is
        interrupted. Errors never escape; they end the run in FAILED.
        """
        outcome = LoopOutcome(state=LoopState.FETCHING)

        try:
            while outcome.state not in TERMINAL_STATES:
                if outcome.state is LoopState.FETCHING:
                    self._fetch(query, outcome)
                else:
                    self._await_decision(outcome)
        except KeyboardInterrupt:
            self.cancel.set("ctrl-c")
            outcome.state = LoopState.INTERRUPTED
        except Exception as e:
            logger.error(f"Suggestion loop failed: {e}")
            outcome.state = LoopState.FAILED
            outcome.error = e
            self.status.failed(str(e) or type(e).__name__)

        logger.debug(
            f"Loop finished in {outcome.state.value} after {outcome.fetch_count} fetches, "
            f"{len(outcome.rejected)} rejected"
        )
        return outcome

    def _fetch(self, query: str, outcome: LoopOutcome) -> None:
        if self.cancel.is_set():
            outcome.state = LoopState.INTERRUPTED
            return

        self.status.fetching(query)
        outcome.fetch_count += 1
        # Pass a copy so the prompt for this attempt cannot change under it
        outcome.suggestion = self.fetcher.fetch(query, list(outcome.rejected))

        if not self.interactive:
            self.status.printed(outcome.suggestion)
            outcome.state = LoopState.ACCEPTED
            return

        outcome.state = LoopState.AWAITING_DECISION

    def _await_decision(self, outcome: LoopOutcome) -> None:
        suggestion = outcome.suggestion
        self.status.proposing(suggestion)
        decision = self.decisions.next_decision()

        if decision is Decision.INTERRUPTED or self.cancel.is_set():
            outcome.state = LoopState.INTERRUPTED
            return

        if decision is Decision.ACCEPT:
            logger.info(f"Accepted: {suggestion}")
            self.status.accepted(suggestion)
            outcome.state = LoopState.ACCEPTED
            self.execute(suggestion)
            return

        outcome.rejected.append(suggestion)
        logger.info(f"Rejected ({len(outcome.rejected)}/{self.max_alternatives}): {suggestion}")

        if len(outcome.rejected) >= self.max_alternatives:
            error = NoSuggestionError()
            outcome.state = LoopState.EXHAUSTED
            outcome.error = error
            self.status.failed(str(error))
            return

        outcome.state = LoopState.FETCHING
