"""
Mock LLM client used for offline/demo mode.
Generates deterministic responses to exercise the suggestion loop without network access.
"""

from typing import Iterable, List, Optional, Tuple

from loguru import logger

from xcmd.llm.base_client import (
    BaseLLMClient,
    DirectOutput,
    LLMResponse,
    SuggestionRequest,
)

# Keyword -> alternatives, tried in order on each new attempt
MOCK_COMMANDS: List[Tuple[str, List[str]]] = [
    ("s3", ["aws s3 ls", "aws s3api list-buckets --output table", "aws s3api list-buckets --query 'Buckets[].Name'"]),
    ("disk", ["df -h", "du -sh * | sort -h", "lsblk"]),
    ("process", ["ps aux", "top -b -n 1 | head -20", "pgrep -a ."]),
    ("port", ["lsof -i -P -n | grep LISTEN", "ss -tulpn", "netstat -tulpn"]),
    ("git", ["git status", "git log --oneline -10", "git branch -a"]),
    ("file", ["ls -la", "find . -maxdepth 1 -type f", "tree -L 1"]),
]
FALLBACK_COMMANDS = ["ls -la", "pwd", "echo 'no mock command for this request'"]


class MockLLMClient(BaseLLMClient):
    """
    Offline client.

    With ``responses`` it replays them in order (one per call), which tests use
    to script truncation and failures. Without, it picks a canned command by
    keyword and moves to the next alternative on every call.
    """

    def __init__(self, model: str = "mock-llm", responses: Optional[Iterable[LLMResponse]] = None):
        super().__init__(api_key=None, model=model)
        self._scripted = list(responses) if responses is not None else None
        self.requests: List[SuggestionRequest] = []

    def create_response(self, request: SuggestionRequest) -> LLMResponse:
        self.requests.append(request)
        call_index = len(self.requests) - 1

        if self._scripted is not None:
            if call_index >= len(self._scripted):
                raise RuntimeError(f"MockLLMClient ran out of scripted responses after {call_index} calls")
            response = self._scripted[call_index]
            logger.debug(f"Mock response #{call_index + 1}: {response.output!r}")
            return response

        candidates = self._candidates_for(request.input)
        command = candidates[call_index % len(candidates)]
        logger.debug(f"Mock suggestion #{call_index + 1}: {command}")
        return LLMResponse(
            output=DirectOutput(command),
            model=self.model,
            tokens_used=len(command.split()),
            metadata={"mock": True},
        )

    @staticmethod
    def _candidates_for(prompt: str) -> List[str]:
        lowered = prompt.lower()
        for keyword, commands in MOCK_COMMANDS:
            if keyword in lowered:
                return commands
        return FALLBACK_COMMANDS

    @property
    def call_count(self) -> int:
        return len(self.requests)

