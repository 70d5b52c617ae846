"""
LLM Provider Abstraction Layer

Provides a unified interface for interacting with the supported LLM
providers (Anthropic, OpenAI, Google Gemini) using their native
tool-calling APIs.
"""

from src.nl2scry.llm.factory import create_llm_provider, parse_provider
from src.nl2scry.llm.protocols import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    LLMToolCall,
    LLMToolDefinition,
    MessageRole,
)
from src.nl2scry.llm.tools import ToolSpec, run_tool_loop

__all__ = [
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "LLMToolCall",
    "LLMToolDefinition",
    "MessageRole",
    "ToolSpec",
    "create_llm_provider",
    "parse_provider",
    "run_tool_loop",
]
