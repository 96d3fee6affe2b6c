"""
Tests for mapping Responses API payloads onto LLMResponse.
"""

from types import SimpleNamespace

import pytest

from xcmd.core.exceptions import EmptyOutputError
from xcmd.llm.base_client import DirectOutput, FragmentOutput, SuggestionRequest
from xcmd.llm.openai_client import OpenAIClient, incomplete_reason, to_response_output


class FakeResponses:
    def __init__(self, raw):
        self.raw = raw
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return self.raw


def fake_sdk(raw):
    return SimpleNamespace(responses=FakeResponses(raw))


def request(budget=200):
    return SuggestionRequest(
        model="gpt-5-mini",
        instructions="be brief",
        input="list files",
        max_output_tokens=budget,
        reasoning_effort="minimal",
    )


class TestResponseShapes:

    def test_direct_text_is_preferred(self):
        raw = SimpleNamespace(
            output_text="ls -la",
            output=[SimpleNamespace(content=[SimpleNamespace(text="ignored")])],
        )
        assert to_response_output(raw) == DirectOutput("ls -la")

    def test_blank_direct_text_falls_back_to_fragments(self):
        raw = {
            "output_text": "   ",
            "output": [
                {"type": "reasoning", "content": None},
                {"type": "message", "content": [{"text": "git"}, {"text": ""}, {"text": "status"}]},
            ],
        }
        output = to_response_output(raw)
        assert output == FragmentOutput(["git", "status"])

    def test_nothing_at_all(self):
        assert to_response_output({}) == FragmentOutput([])

    def test_incomplete_reason(self):
        assert incomplete_reason({"incomplete_details": {"reason": "max_output_tokens"}}) == "max_output_tokens"
        assert incomplete_reason({"incomplete_details": None}) is None
        assert incomplete_reason(SimpleNamespace()) is None


class TestOpenAIClient:

    def test_sends_payload_and_maps_response(self):
        raw = SimpleNamespace(
            id="resp_1",
            model="gpt-5-mini-2025",
            status="completed",
            output_text="ls -la",
            output=[],
            incomplete_details=None,
            usage=SimpleNamespace(total_tokens=42),
        )
        sdk = fake_sdk(raw)
        client = OpenAIClient(api_key="sk-test", client=sdk)

        response = client.create_response(request())

        assert sdk.responses.calls == [{
            "model": "gpt-5-mini",
            "instructions": "be brief",
            "input": "list files",
            "max_output_tokens": 200,
            "reasoning": {"effort": "minimal"},
        }]
        assert response.text() == "ls -la"
        assert response.tokens_used == 42
        assert response.model == "gpt-5-mini-2025"
        assert response.metadata["response_id"] == "resp_1"
        assert not response.truncated_by_budget

    def test_truncated_empty_response(self):
        raw = {
            "status": "incomplete",
            "output": [{"type": "reasoning", "content": []}],
            "incomplete_details": {"reason": "max_output_tokens"},
        }
        client = OpenAIClient(api_key="sk-test", client=fake_sdk(raw))

        response = client.create_response(request())

        assert response.truncated_by_budget
        with pytest.raises(EmptyOutputError):
            response.text()

    def test_errors_propagate(self):
        class Failing:
            def create(self, **kwargs):
                raise TimeoutError("slow")

        client = OpenAIClient(api_key="sk-test", client=SimpleNamespace(responses=Failing()))
        with pytest.raises(TimeoutError):
            client.create_response(request())
