"""Tests for run_tool_loop."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

from src.nl2scry.llm.protocols import (
    LLMMessage,
    LLMResponse,
    LLMToolCall,
    LLMToolDefinition,
    MessageRole,
    TokenUsage,
)
from src.nl2scry.llm.tools import ToolSpec, run_tool_loop


def _echo_tool() -> tuple[ToolSpec, AsyncMock]:
    handler = AsyncMock(side_effect=lambda args: {"echo": args.get("value")})
    spec = ToolSpec(definition=LLMToolDefinition(name="echo", description="Echo"), handler=handler)
    return spec, handler


def _llm(*responses: LLMResponse) -> MagicMock:
    llm = MagicMock()
    llm.complete = AsyncMock(side_effect=list(responses))
    return llm


class TestRunToolLoop:
    async def test_returns_first_text_answer(self) -> None:
        spec, handler = _echo_tool()
        llm = _llm(LLMResponse(content="done"))
        messages = [LLMMessage(role=MessageRole.USER, content="hi")]

        response = await run_tool_loop(llm, messages, [spec], temperature=0.0, max_tokens=10)

        assert response.content == "done"
        handler.assert_not_awaited()
        kwargs = llm.complete.call_args.kwargs
        assert kwargs["tools"] == [spec.definition]
        assert kwargs["max_tokens"] == 10

    async def test_each_tool_call_gets_its_own_result(self) -> None:
        spec, handler = _echo_tool()
        llm = _llm(
            LLMResponse(
                tool_calls=(
                    LLMToolCall(id="a", name="echo", arguments={"value": 1}),
                    LLMToolCall(id="b", name="echo", arguments={"value": 2}),
                )
            ),
            LLMResponse(content="done"),
        )

        await run_tool_loop(llm, [LLMMessage(role=MessageRole.USER, content="hi")], [spec])

        conversation = llm.complete.call_args_list[1].args[0]
        assert conversation[1].role == MessageRole.ASSISTANT
        assert [m.tool_call_id for m in conversation[2:]] == ["a", "b"]
        assert [json.loads(m.content) for m in conversation[2:]] == [{"echo": 1}, {"echo": 2}]
        assert handler.await_count == 2

    async def test_loops_until_no_tool_calls(self) -> None:
        spec, handler = _echo_tool()
        call = LLMToolCall(id="x", name="echo", arguments={"value": "v"})
        llm = _llm(
            LLMResponse(tool_calls=(call,)),
            LLMResponse(tool_calls=(call,)),
            LLMResponse(tool_calls=(call,)),
            LLMResponse(content="final"),
        )

        response = await run_tool_loop(llm, [LLMMessage(role=MessageRole.USER, content="hi")], [spec])

        assert response.content == "final"
        assert llm.complete.await_count == 4
        assert handler.await_count == 3

    async def test_unknown_tool_reported_to_model(self) -> None:
        spec, handler = _echo_tool()
        llm = _llm(
            LLMResponse(tool_calls=(LLMToolCall(id="z", name="missing", arguments={}),)),
            LLMResponse(content="ok"),
        )

        await run_tool_loop(llm, [LLMMessage(role=MessageRole.USER, content="hi")], [spec])

        tool_message = llm.complete.call_args_list[1].args[0][-1]
        assert json.loads(tool_message.content) == {"error": "Unknown tool: missing"}
        handler.assert_not_awaited()

    async def test_input_messages_not_modified(self) -> None:
        spec, _ = _echo_tool()
        llm = _llm(
            LLMResponse(tool_calls=(LLMToolCall(id="a", name="echo", arguments={}),)),
            LLMResponse(content="ok"),
        )
        messages = [LLMMessage(role=MessageRole.USER, content="hi")]

        await run_tool_loop(llm, messages, [spec])

        assert len(messages) == 1

    async def test_no_tools_sends_none(self) -> None:
        llm = _llm(LLMResponse(content="ok"))

        await run_tool_loop(llm, [LLMMessage(role=MessageRole.USER, content="hi")], [])

        assert llm.complete.call_args.kwargs["tools"] is None

    async def test_usage_summed_over_turns(self) -> None:
        spec, _ = _echo_tool()
        llm = _llm(
            LLMResponse(
                tool_calls=(LLMToolCall(id="a", name="echo", arguments={}),),
                usage=TokenUsage(prompt_tokens=900, completion_tokens=20),
            ),
            LLMResponse(
                content="t:dragon",
                finish_reason="stop",
                usage=TokenUsage(prompt_tokens=950, completion_tokens=5),
            ),
        )

        response = await run_tool_loop(llm, [LLMMessage.user("dragons")], [spec])

        assert response.content == "t:dragon"
        assert response.finish_reason == "stop"
        assert response.usage == TokenUsage(prompt_tokens=1850, completion_tokens=25)
