"""Tests for LLM providers (Claude, OpenAI)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import openai
import pytest

from src.nl2scry.errors import TransientProviderError, UnrecoverableProviderError
from src.nl2scry.llm.claude import ClaudeProvider
from src.nl2scry.llm.openai import OpenAIProvider
from src.nl2scry.llm.protocols import (
    LLMMessage,
    LLMToolCall,
    LLMToolDefinition,
    MessageRole,
)

TOOLS = [LLMToolDefinition(name="scryfall-search", description="Find a card")]


def _status_response(status_code: int, url: str) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", url))


class TestClaudeProvider:
    """Test suite for ClaudeProvider."""

    @pytest.fixture
    def mock_client(self):
        mock_response = MagicMock()
        mock_response.content = [MagicMock(type="text", text="t:dragon c:r")]
        mock_response.stop_reason = "end_turn"
        mock_response.usage = MagicMock(input_tokens=100, output_tokens=50)

        client = MagicMock()
        client.messages.create = AsyncMock(return_value=mock_response)
        return client

    @pytest.fixture
    def provider(self, mock_client) -> ClaudeProvider:
        # Bypass __init__ so no real client is built
        provider = ClaudeProvider.__new__(ClaudeProvider)
        provider._model = "claude-sonnet-4-5-20250929"
        provider._client = mock_client
        return provider

    async def test_complete_text_response(self, provider, mock_client) -> None:
        messages = [
            LLMMessage(role=MessageRole.SYSTEM, content="You translate searches."),
            LLMMessage(role=MessageRole.USER, content="red dragons"),
        ]

        response = await provider.complete(messages, tools=TOOLS)

        assert response.content == "t:dragon c:r"
        assert response.usage.total_tokens == 150
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["system"] == "You translate searches."
        assert kwargs["messages"] == [{"role": "user", "content": "red dragons"}]
        assert kwargs["tools"][0]["name"] == "scryfall-search"

    async def test_complete_with_tool_calls(self, provider, mock_client) -> None:
        tool_use_block = MagicMock()
        tool_use_block.type = "tool_use"
        tool_use_block.id = "toolu_1"
        tool_use_block.name = "scryfall-search"
        tool_use_block.input = {"cardName": "lightnig bolt"}
        mock_client.messages.create.return_value.content = [tool_use_block]

        response = await provider.complete(
            [LLMMessage(role=MessageRole.USER, content="cards like lightnig bolt")], tools=TOOLS
        )

        assert response.has_tool_calls
        assert response.tool_calls[0].name == "scryfall-search"
        assert response.tool_calls[0].arguments == {"cardName": "lightnig bolt"}

    async def test_tool_results_grouped_in_one_user_turn(self, provider, mock_client) -> None:
        calls = (
            LLMToolCall(id="a", name="scryfall-search", arguments={"cardName": "x"}),
            LLMToolCall(id="b", name="scryfall-search", arguments={"cardName": "y"}),
        )
        messages = [
            LLMMessage(role=MessageRole.USER, content="x and y"),
            LLMMessage(role=MessageRole.ASSISTANT, tool_calls=calls),
            LLMMessage(role=MessageRole.TOOL, content="{}", tool_call_id="a"),
            LLMMessage(role=MessageRole.TOOL, content="{}", tool_call_id="b"),
        ]

        await provider.complete(messages)

        sent = mock_client.messages.create.call_args.kwargs["messages"]
        assert len(sent) == 3
        assert [b["tool_use_id"] for b in sent[2]["content"]] == ["a", "b"]
        assert sent[1]["content"][0]["type"] == "tool_use"

    async def test_rate_limit_is_transient(self, provider, mock_client) -> None:
        mock_client.messages.create.side_effect = anthropic.RateLimitError(
            "slow down",
            response=_status_response(429, "https://api.anthropic.com/v1/messages"),
            body=None,
        )

        with pytest.raises(TransientProviderError):
            await provider.complete([LLMMessage(role=MessageRole.USER, content="q")])

    async def test_connection_error_is_transient(self, provider, mock_client) -> None:
        mock_client.messages.create.side_effect = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )

        with pytest.raises(TransientProviderError):
            await provider.complete([LLMMessage(role=MessageRole.USER, content="q")])

    async def test_authentication_error_is_unrecoverable(self, provider, mock_client) -> None:
        mock_client.messages.create.side_effect = anthropic.AuthenticationError(
            "invalid x-api-key",
            response=_status_response(401, "https://api.anthropic.com/v1/messages"),
            body=None,
        )

        with pytest.raises(UnrecoverableProviderError):
            await provider.complete([LLMMessage(role=MessageRole.USER, content="q")])

    def test_model_name_property(self, provider) -> None:
        assert provider.model_name == "claude-sonnet-4-5-20250929"


class TestOpenAIProvider:
    """Test suite for OpenAIProvider."""

    @pytest.fixture
    def mock_client(self):
        mock_message = MagicMock()
        mock_message.content = "t:dragon c:r"
        mock_message.tool_calls = None

        mock_choice = MagicMock()
        mock_choice.message = mock_message
        mock_choice.finish_reason = "stop"

        mock_response = MagicMock()
        mock_response.choices = [mock_choice]
        mock_response.usage = MagicMock(prompt_tokens=100, completion_tokens=50, total_tokens=150)

        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=mock_response)
        return client

    def _provider(self, mock_client, max_tokens_param: str = "max_completion_tokens") -> OpenAIProvider:
        provider = OpenAIProvider.__new__(OpenAIProvider)
        provider._model = "gpt-4o-mini"
        provider._provider_label = "openai"
        provider._max_tokens_param = max_tokens_param
        provider._client = mock_client
        return provider

    async def test_complete_text_response(self, mock_client) -> None:
        provider = self._provider(mock_client)

        response = await provider.complete(
            [
                LLMMessage(role=MessageRole.SYSTEM, content="sys"),
                LLMMessage(role=MessageRole.USER, content="red dragons"),
            ],
            max_tokens=256,
        )

        assert response.content == "t:dragon c:r"
        assert response.usage.total_tokens == 150
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
        assert kwargs["max_completion_tokens"] == 256
        assert "tools" not in kwargs

    async def test_max_tokens_param_override(self, mock_client) -> None:
        provider = self._provider(mock_client, max_tokens_param="max_tokens")

        await provider.complete([LLMMessage(role=MessageRole.USER, content="q")], max_tokens=64)

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["max_tokens"] == 64
        assert "max_completion_tokens" not in kwargs

    async def test_complete_with_tool_calls(self, mock_client) -> None:
        mock_tool_call = MagicMock()
        mock_tool_call.id = "call-123"
        mock_tool_call.function.name = "scryfall-search"
        mock_tool_call.function.arguments = '{"cardName": "Lighnting Bolt"}'

        response_message = mock_client.chat.completions.create.return_value.choices[0].message
        response_message.content = None
        response_message.tool_calls = [mock_tool_call]

        provider = self._provider(mock_client)
        response = await provider.complete(
            [LLMMessage(role=MessageRole.USER, content="Lighnting Bolt reprints")], tools=TOOLS
        )

        assert response.content == ""
        assert response.tool_calls[0].id == "call-123"
        assert response.tool_calls[0].arguments == {"cardName": "Lighnting Bolt"}

    async def test_invalid_tool_arguments_become_empty(self, mock_client) -> None:
        mock_tool_call = MagicMock()
        mock_tool_call.id = "call-1"
        mock_tool_call.function.name = "scryfall-search"
        mock_tool_call.function.arguments = "{not json"
        mock_client.chat.completions.create.return_value.choices[0].message.tool_calls = [
            mock_tool_call
        ]

        response = await self._provider(mock_client).complete(
            [LLMMessage(role=MessageRole.USER, content="q")]
        )

        assert response.tool_calls[0].arguments == {}

    async def test_assistant_tool_calls_serialized(self, mock_client) -> None:
        call = LLMToolCall(id="call-1", name="scryfall-search", arguments={"cardName": "bolt"})
        messages = [
            LLMMessage(role=MessageRole.USER, content="bolt"),
            LLMMessage(role=MessageRole.ASSISTANT, tool_calls=(call,)),
            LLMMessage(role=MessageRole.TOOL, content='{"name": "Lightning Bolt"}', tool_call_id="call-1"),
        ]

        await self._provider(mock_client).complete(messages)

        sent = mock_client.chat.completions.create.call_args.kwargs["messages"]
        assert sent[1]["content"] is None
        assert sent[1]["tool_calls"][0]["function"]["arguments"] == '{"cardName": "bolt"}'
        assert sent[2] == {
            "role": "tool",
            "tool_call_id": "call-1",
            "content": '{"name": "Lightning Bolt"}',
        }

    async def test_server_error_is_transient(self, mock_client) -> None:
        mock_client.chat.completions.create.side_effect = openai.InternalServerError(
            "overloaded",
            response=_status_response(503, "https://api.openai.com/v1/chat/completions"),
            body=None,
        )

        with pytest.raises(TransientProviderError):
            await self._provider(mock_client).complete([LLMMessage(role=MessageRole.USER, content="q")])

    async def test_timeout_is_transient(self, mock_client) -> None:
        mock_client.chat.completions.create.side_effect = openai.APITimeoutError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )

        with pytest.raises(TransientProviderError):
            await self._provider(mock_client).complete([LLMMessage(role=MessageRole.USER, content="q")])

    async def test_authentication_error_is_unrecoverable(self, mock_client) -> None:
        mock_client.chat.completions.create.side_effect = openai.AuthenticationError(
            "Incorrect API key",
            response=_status_response(401, "https://api.openai.com/v1/chat/completions"),
            body=None,
        )

        with pytest.raises(UnrecoverableProviderError):
            await self._provider(mock_client).complete([LLMMessage(role=MessageRole.USER, content="q")])
