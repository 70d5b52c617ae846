"""Tests for LLM protocols and data classes."""

from __future__ import annotations

import pytest

from src.nl2scry.llm.protocols import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    LLMToolCall,
    LLMToolDefinition,
    MessageRole,
    TokenUsage,
)

CARD_SCHEMA = {
    "type": "object",
    "properties": {"cardName": {"type": "string"}},
    "required": ["cardName"],
}


class TestMessageRole:
    """Test suite for MessageRole enum."""

    def test_all_roles_defined(self) -> None:
        assert MessageRole.SYSTEM == "system"
        assert MessageRole.USER == "user"
        assert MessageRole.ASSISTANT == "assistant"
        assert MessageRole.TOOL == "tool"


class TestLLMToolDefinition:
    """Test suite for LLMToolDefinition."""

    def test_to_openai_format(self) -> None:
        tool = LLMToolDefinition(name="scryfall-search", description="Find a card", parameters=CARD_SCHEMA)

        assert tool.to_openai_format() == {
            "type": "function",
            "function": {
                "name": "scryfall-search",
                "description": "Find a card",
                "parameters": CARD_SCHEMA,
            },
        }

    def test_to_anthropic_format(self) -> None:
        tool = LLMToolDefinition(name="scryfall-search", description="Find a card", parameters=CARD_SCHEMA)

        assert tool.to_anthropic_format() == {
            "name": "scryfall-search",
            "description": "Find a card",
            "input_schema": CARD_SCHEMA,
        }


class TestLLMResponse:
    """Test suite for LLMResponse."""

    def test_text_only(self) -> None:
        response = LLMResponse(content="t:dragon")

        assert not response.has_tool_calls
        assert response.finish_reason == "stop"

    @pytest.mark.parametrize(
        ("reason", "truncated"),
        [("stop", False), ("end_turn", False), ("length", True), ("max_tokens", True)],
    )
    def test_truncated(self, reason: str, truncated: bool) -> None:
        assert LLMResponse(finish_reason=reason).truncated is truncated

    def test_with_tool_calls(self) -> None:
        call = LLMToolCall(id="call-1", name="scryfall-search", arguments={"cardName": "bolt"})
        response = LLMResponse(tool_calls=(call,), finish_reason="tool_calls")

        assert response.has_tool_calls
        assert response.tool_calls[0].arguments == {"cardName": "bolt"}


class TestTokenUsage:
    def test_total_and_sum(self) -> None:
        first = TokenUsage(prompt_tokens=100, completion_tokens=20)
        second = TokenUsage(prompt_tokens=150, completion_tokens=5)

        usage = first + second

        assert usage == TokenUsage(prompt_tokens=250, completion_tokens=25)
        assert usage.total_tokens == 275

    def test_default_is_zero(self) -> None:
        assert LLMResponse().usage.total_tokens == 0


class TestLLMMessage:
    """Test suite for LLMMessage."""

    def test_constructors(self) -> None:
        assert LLMMessage.system("rules") == LLMMessage(role=MessageRole.SYSTEM, content="rules")
        assert LLMMessage.user("red dragons").role == MessageRole.USER

    def test_assistant_turn_keeps_tool_calls(self) -> None:
        call = LLMToolCall(id="call-1", name="scryfall-search", arguments={"cardName": "bolt"})

        msg = LLMMessage.assistant_turn(LLMResponse(content="looking", tool_calls=(call,)))

        assert msg.role == MessageRole.ASSISTANT
        assert msg.content == "looking"
        assert msg.tool_calls == (call,)

    def test_tool_result_serializes_payload(self) -> None:
        call = LLMToolCall(id="call-1", name="scryfall-search")

        msg = LLMMessage.tool_result(call, {"error": "Card not found", "query": "bolt"})

        assert msg.tool_call_id == "call-1"
        assert msg.name == "scryfall-search"
        assert msg.content == '{"error": "Card not found", "query": "bolt"}'

    def test_tool_result_message(self) -> None:
        msg = LLMMessage(
            role=MessageRole.TOOL,
            content='{"name": "Lightning Bolt"}',
            tool_call_id="call-1",
            name="scryfall-search",
        )

        assert msg.tool_call_id == "call-1"
        assert msg.tool_calls == ()


class TestLLMProviderProtocol:
    """Structural conformance checks."""

    def test_duck_typed_provider_conforms(self) -> None:
        class Fake:
            model_name = "fake"

            async def complete(self, messages, tools=None, temperature=0.0, max_tokens=4096):
                return LLMResponse(content="")

        assert isinstance(Fake(), LLMProvider)
