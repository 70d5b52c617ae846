"""
Tool Invocation Loop

A tool is a capability descriptor (name, description, JSON schema) paired
with an async handler. ``run_tool_loop`` lets the model call tools as many
times as it wants and returns its final text answer.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

from src.nl2scry.llm.protocols import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    LLMToolCall,
    LLMToolDefinition,
    TokenUsage,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolSpec:
    """A tool exposed to the model together with the code that runs it."""

    definition: LLMToolDefinition
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.definition.name


async def _execute_tool_call(call: LLMToolCall, registry: dict[str, ToolSpec]) -> dict[str, Any]:
    spec = registry.get(call.name)
    if spec is None:
        logger.warning(f"Model requested unknown tool: {call.name}")
        return {"error": f"Unknown tool: {call.name}"}
    return await spec.handler(call.arguments)


async def run_tool_loop(
    llm: LLMProvider,
    messages: list[LLMMessage],
    tools: list[ToolSpec],
    temperature: float = 0.0,
    max_tokens: int = 4096,
) -> LLMResponse:
    """
    Drive the model until it answers without requesting a tool.

    Tool calls within one model turn run in order; each result is sent
    back as its own tool message. The number of rounds is bounded only by
    the model. ``messages`` is not modified.

    Returns:
        The final LLMResponse (the one without tool calls), with ``usage``
        summed over every turn of the loop
    """
    conversation = list(messages)
    definitions = [t.definition for t in tools]
    registry = {t.name: t for t in tools}
    usage = TokenUsage()

    while True:
        response = await llm.complete(
            conversation,
            tools=definitions or None,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        usage = usage + response.usage
        if not response.has_tool_calls:
            return replace(response, usage=usage)

        conversation.append(LLMMessage.assistant_turn(response))
        for call in response.tool_calls:
            result = await _execute_tool_call(call, registry)
            conversation.append(LLMMessage.tool_result(call, result))
