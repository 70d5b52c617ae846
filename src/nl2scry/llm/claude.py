"""
Claude (Anthropic) LLM Provider

Implementation of LLMProvider using the Anthropic API.
"""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from src.common.telemetry import trace_span
from src.nl2scry.errors import TransientProviderError
from src.nl2scry.llm.errors import error_for_status
from src.nl2scry.llm.protocols import (
    LLMMessage,
    LLMResponse,
    LLMToolCall,
    LLMToolDefinition,
    MessageRole,
    TokenUsage,
)

logger = logging.getLogger(__name__)


def _to_anthropic_messages(messages: list[LLMMessage]) -> tuple[str, list[dict[str, Any]]]:
    """Split out the system instruction and convert the rest to Anthropic format."""
    system_message = ""
    anthropic_messages: list[dict[str, Any]] = []

    for msg in messages:
        if msg.role == MessageRole.SYSTEM:
            system_message = msg.content
        elif msg.role == MessageRole.USER:
            anthropic_messages.append({"role": "user", "content": msg.content})
        elif msg.role == MessageRole.ASSISTANT:
            if msg.tool_calls:
                content: list[dict[str, Any]] = []
                if msg.content:
                    content.append({"type": "text", "text": msg.content})
                for tc in msg.tool_calls:
                    content.append(
                        {
                            "type": "tool_use",
                            "id": tc.id,
                            "name": tc.name,
                            "input": tc.arguments,
                        }
                    )
                anthropic_messages.append({"role": "assistant", "content": content})
            else:
                anthropic_messages.append({"role": "assistant", "content": msg.content})
        elif msg.role == MessageRole.TOOL:
            block = {
                "type": "tool_result",
                "tool_use_id": msg.tool_call_id,
                "content": msg.content,
            }
            # Results for parallel tool calls must share one user turn
            previous = anthropic_messages[-1] if anthropic_messages else None
            if (
                previous is not None
                and previous["role"] == "user"
                and isinstance(previous["content"], list)
                and all(b.get("type") == "tool_result" for b in previous["content"])
            ):
                previous["content"].append(block)
            else:
                anthropic_messages.append({"role": "user", "content": [block]})

    return system_message, anthropic_messages


class ClaudeProvider:
    """
    LLM provider using Anthropic's Claude API.

    Supports tool-calling via Anthropic's native tool_use API.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5-20250929",
        base_url: str | None = None,
    ):
        """
        Initialize Claude provider.

        Args:
            api_key: Anthropic API key
            model: Model name (e.g., claude-sonnet-4-5-20250929)
            base_url: Optional custom base URL
        """
        self._model = model
        # Retries are owned by the translation engine
        self._client = anthropic.AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
        )

    @property
    def model_name(self) -> str:
        """Return the model name."""
        return self._model

    async def complete(
        self,
        messages: list[LLMMessage],
        tools: list[LLMToolDefinition] | None = None,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """
        Generate a completion using Claude.

        Raises:
            TransientProviderError: Rate limit, connection or server failure
            UnrecoverableProviderError: Authentication or request rejected
        """
        with trace_span(
            "llm.complete",
            {
                "llm.provider": "anthropic",
                "llm.model": self._model,
                "llm.message_count": len(messages),
                "llm.tools_count": len(tools) if tools else 0,
            },
        ) as span:
            system_message, anthropic_messages = _to_anthropic_messages(messages)

            kwargs: dict[str, Any] = {
                "model": self._model,
                "messages": anthropic_messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            if system_message:
                kwargs["system"] = system_message
            if tools:
                kwargs["tools"] = [t.to_anthropic_format() for t in tools]

            try:
                response = await self._client.messages.create(**kwargs)
            except anthropic.APIConnectionError as e:
                raise TransientProviderError(f"anthropic connection error: {e}") from e
            except anthropic.APIStatusError as e:
                raise error_for_status(e.status_code, "anthropic", e.message) from e

            text_parts: list[str] = []
            tool_calls: list[LLMToolCall] = []

            for block in response.content:
                if block.type == "text":
                    text_parts.append(block.text)
                elif block.type == "tool_use":
                    tool_calls.append(
                        LLMToolCall(
                            id=block.id,
                            name=block.name,
                            arguments=block.input if isinstance(block.input, dict) else {},
                        )
                    )

            usage = TokenUsage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
            )
            span.set_attribute("llm.tool_calls_count", len(tool_calls))
            span.set_attribute("llm.finish_reason", response.stop_reason or "stop")

            return LLMResponse(
                content="".join(text_parts),
                tool_calls=tuple(tool_calls),
                finish_reason=response.stop_reason or "stop",
                usage=usage,
            )
