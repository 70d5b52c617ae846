"""
LLM Provider Factory

Selects the model binding for a ProviderConfig.
"""

from __future__ import annotations

from src.nl2scry.errors import ConfigurationError
from src.nl2scry.llm.protocols import LLMProvider
from src.nl2scry.models import DEFAULT_MODELS, ProviderConfig, ProviderName

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def parse_provider(value: str) -> ProviderName:
    """
    Match a stored provider string exactly against the supported backends.

    Raises:
        ConfigurationError: If the value names no supported provider
    """
    try:
        return ProviderName(value)
    except ValueError:
        supported = ", ".join(p.value for p in ProviderName)
        raise ConfigurationError(
            f"Unknown provider: {value!r}. Supported providers: {supported}"
        ) from None


def create_llm_provider(config: ProviderConfig) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        config: Provider, credential and model identifier

    Returns:
        LLMProvider instance (no network traffic happens here)

    Raises:
        ConfigurationError: If the provider is not supported
    """
    provider = parse_provider(config.provider)
    model = config.model_id or DEFAULT_MODELS[provider]

    if provider == ProviderName.ANTHROPIC:
        from src.nl2scry.llm.claude import ClaudeProvider

        return ClaudeProvider(api_key=config.credential, model=model)

    from src.nl2scry.llm.openai import OpenAIProvider

    if provider == ProviderName.OPENAI:
        return OpenAIProvider(api_key=config.credential, model=model)

    return OpenAIProvider(
        api_key=config.credential,
        model=model,
        base_url=GEMINI_OPENAI_BASE_URL,
        provider_label="google",
        max_tokens_param="max_tokens",
    )
