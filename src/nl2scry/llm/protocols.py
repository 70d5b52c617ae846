"""
Model Binding Protocols

The conversation vocabulary shared by the translation engine, the tool
loop and the provider bindings, plus the ``LLMProvider`` protocol every
binding satisfies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

# Anthropic reports "max_tokens", the OpenAI protocol reports "length"
TRUNCATED_FINISH_REASONS = frozenset({"length", "max_tokens"})


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class LLMToolDefinition:
    """
    A capability offered to the model: name, description and JSON Schema
    of its arguments. Rendered per provider by the ``to_*_format`` methods.
    """

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)

    def to_openai_format(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def to_anthropic_format(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }


@dataclass(frozen=True)
class LLMToolCall:
    """A single tool invocation requested by the model."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TokenUsage:
    """Token counts for one completion, or summed over several."""

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def __add__(self, other: TokenUsage) -> TokenUsage:
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
        )


@dataclass(frozen=True)
class LLMResponse:
    """One model turn: text, requested tool calls, or both."""

    content: str = ""
    tool_calls: tuple[LLMToolCall, ...] = ()
    finish_reason: str = "stop"
    usage: TokenUsage = field(default_factory=TokenUsage)

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0

    @property
    def truncated(self) -> bool:
        """True when the model stopped because it hit the token limit."""
        return self.finish_reason in TRUNCATED_FINISH_REASONS


@dataclass(frozen=True)
class LLMMessage:
    """
    One entry of the conversation sent to a provider.

    Assistant turns may carry tool calls; tool messages carry the JSON
    result for the call named by ``tool_call_id``. Prefer the constructors
    below to building messages field by field.
    """

    role: MessageRole
    content: str = ""
    tool_calls: tuple[LLMToolCall, ...] = ()
    tool_call_id: str | None = None
    name: str | None = None

    @classmethod
    def system(cls, text: str) -> LLMMessage:
        return cls(role=MessageRole.SYSTEM, content=text)

    @classmethod
    def user(cls, text: str) -> LLMMessage:
        return cls(role=MessageRole.USER, content=text)

    @classmethod
    def assistant_turn(cls, response: LLMResponse) -> LLMMessage:
        """Echo a model turn back into the conversation, tool calls included."""
        return cls(
            role=MessageRole.ASSISTANT,
            content=response.content,
            tool_calls=response.tool_calls,
        )

    @classmethod
    def tool_result(cls, call: LLMToolCall, payload: dict[str, Any]) -> LLMMessage:
        return cls(
            role=MessageRole.TOOL,
            content=json.dumps(payload),
            tool_call_id=call.id,
            name=call.name,
        )


@runtime_checkable
class LLMProvider(Protocol):
    """
    A model binding.

    ``complete`` performs exactly one request. Failures are raised as
    TransientProviderError or UnrecoverableProviderError; retrying is the
    caller's decision.
    """

    @property
    def model_name(self) -> str: ...

    async def complete(
        self,
        messages: list[LLMMessage],
        tools: list[LLMToolDefinition] | None = None,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """
        Run one completion over ``messages`` (system instruction first).

        Returns:
            LLMResponse with text and/or tool calls
        """
        ...
