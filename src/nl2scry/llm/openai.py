"""
OpenAI LLM Provider

Implementation of LLMProvider using the OpenAI chat completions API.
Also serves Gemini through Google's OpenAI-compatible endpoint.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import openai

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


def _to_openai_messages(messages: list[LLMMessage]) -> list[dict[str, Any]]:
    openai_messages: list[dict[str, Any]] = []

    for msg in messages:
        if msg.role in (MessageRole.SYSTEM, MessageRole.USER):
            openai_messages.append({"role": msg.role.value, "content": msg.content})
        elif msg.role == MessageRole.ASSISTANT:
            assistant_msg: dict[str, Any] = {
                "role": "assistant",
                "content": msg.content or None,
            }
            if msg.tool_calls:
                assistant_msg["tool_calls"] = [
                    {
                        "id": tc.id,
                        "type": "function",
                        "function": {
                            "name": tc.name,
                            "arguments": json.dumps(tc.arguments),
                        },
                    }
                    for tc in msg.tool_calls
                ]
            openai_messages.append(assistant_msg)
        elif msg.role == MessageRole.TOOL:
            openai_messages.append(
                {
                    "role": "tool",
                    "tool_call_id": msg.tool_call_id,
                    "content": msg.content,
                }
            )

    return openai_messages


class OpenAIProvider:
    """
    LLM provider using OpenAI's API.

    Supports tool-calling via OpenAI's function calling API. Any endpoint
    speaking the same protocol can be targeted with ``base_url``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        provider_label: str = "openai",
        max_tokens_param: str = "max_completion_tokens",
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: API key for the endpoint
            model: Model name
            base_url: Optional custom base URL (OpenAI-compatible endpoint)
            provider_label: Name used in traces and error messages
            max_tokens_param: Request field carrying the token limit; OpenAI
                wants max_completion_tokens, compatible endpoints may want max_tokens
        """
        self._model = model
        self._provider_label = provider_label
        self._max_tokens_param = max_tokens_param
        # Retries are owned by the translation engine
        self._client = openai.AsyncOpenAI(
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
        Generate a completion using the chat completions API.

        Raises:
            TransientProviderError: Rate limit, connection or server failure
            UnrecoverableProviderError: Authentication or request rejected
        """
        with trace_span(
            "llm.complete",
            {
                "llm.provider": self._provider_label,
                "llm.model": self._model,
                "llm.message_count": len(messages),
                "llm.tools_count": len(tools) if tools else 0,
            },
        ) as span:
            kwargs: dict[str, Any] = {
                "model": self._model,
                "messages": _to_openai_messages(messages),
                self._max_tokens_param: max_tokens,
                "temperature": temperature,
            }
            if tools:
                kwargs["tools"] = [t.to_openai_format() for t in tools]

            try:
                response = await self._client.chat.completions.create(**kwargs)
            except openai.APIConnectionError as e:
                raise TransientProviderError(
                    f"{self._provider_label} connection error: {e}"
                ) from e
            except openai.APIStatusError as e:
                raise error_for_status(e.status_code, self._provider_label, e.message) from e

            choice = response.choices[0]
            content = choice.message.content or ""
            tool_calls: list[LLMToolCall] = []

            if choice.message.tool_calls:
                for tc in choice.message.tool_calls:
                    try:
                        arguments = json.loads(tc.function.arguments or "{}")
                    except json.JSONDecodeError:
                        logger.warning(f"Unparseable arguments for tool {tc.function.name}")
                        arguments = {}
                    tool_calls.append(
                        LLMToolCall(
                            id=tc.id,
                            name=tc.function.name,
                            arguments=arguments if isinstance(arguments, dict) else {},
                        )
                    )

            usage = TokenUsage()
            if response.usage:
                usage = TokenUsage(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                )
            span.set_attribute("llm.tool_calls_count", len(tool_calls))
            span.set_attribute("llm.finish_reason", choice.finish_reason or "stop")

            return LLMResponse(
                content=content,
                tool_calls=tuple(tool_calls),
                finish_reason=choice.finish_reason or "stop",
                usage=usage,
            )
