"""
Translation Engine

Turns a free-text card search request into a single Scryfall query.
The model may call the scryfall-search tool any number of times; the
whole interaction, tool round trips included, is one attempt and is
retried as a unit on transient provider failures.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.common.resilience import RetryConfig, retry_with_backoff
from src.common.telemetry import add_span_event, trace_span
from src.nl2scry.config import NL2ScryConfig
from src.nl2scry.errors import TranslationError, TransientProviderError
from src.nl2scry.llm.factory import create_llm_provider
from src.nl2scry.llm.protocols import LLMMessage, LLMProvider, LLMResponse
from src.nl2scry.llm.tools import run_tool_loop
from src.nl2scry.models import ProviderConfig, TranslationRequest, TranslationResult
from src.nl2scry.resolution.protocols import CardResolver
from src.nl2scry.resolution.scryfall import ScryfallCardResolver
from src.nl2scry.resolution.tool import build_card_search_tool
from src.nl2scry.translation.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    base_delay=1.0,
    max_delay=10.0,
    retryable_exceptions=(TransientProviderError,),
)


class TranslationEngine:
    """
    Stateless translator: nothing is kept between calls, so concurrent
    translations share only the resolver's HTTP connection pool.
    """

    def __init__(
        self,
        resolver: CardResolver,
        provider_factory: Callable[[ProviderConfig], LLMProvider] = create_llm_provider,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        """
        Initialize the engine.

        Args:
            resolver: Card resolver backing the scryfall-search tool
            provider_factory: Builds the model binding for a ProviderConfig
            retry_config: Attempt budget and backoff for the model interaction
            temperature: Sampling temperature
            max_tokens: Token limit for each completion
            system_prompt: Fixed system instruction
        """
        self._resolver = resolver
        self._provider_factory = provider_factory
        self._retry_config = retry_config
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = system_prompt

    @classmethod
    def from_config(
        cls,
        config: NL2ScryConfig,
        resolver: CardResolver | None = None,
    ) -> TranslationEngine:
        """Build an engine (and a Scryfall resolver unless given) from service settings."""
        resolver = resolver or ScryfallCardResolver(
            base_url=config.scryfall_base_url,
            timeout_seconds=config.scryfall_timeout_seconds,
        )
        return cls(
            resolver=resolver,
            retry_config=RetryConfig(
                max_attempts=config.llm_max_attempts,
                base_delay=config.llm_retry_base_delay,
                max_delay=config.llm_retry_max_delay,
                retryable_exceptions=(TransientProviderError,),
            ),
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
        )

    @property
    def resolver(self) -> CardResolver:
        return self._resolver

    async def translate(
        self,
        request: TranslationRequest,
        config: ProviderConfig,
    ) -> TranslationResult:
        """
        Translate one request.

        The model's answer is only trimmed; a grammatically invalid query
        is returned as-is.

        Args:
            request: The user's free-text request
            config: Complete provider configuration

        Returns:
            Successful TranslationResult

        Raises:
            ConfigurationError: Unknown provider (raised before any network call)
            UnrecoverableProviderError: Provider rejected the request
            TransientProviderError: Attempt budget exhausted
            TranslationError: Model produced an empty answer
        """
        with trace_span(
            "translation.translate",
            {
                "translation.query_length": len(request.raw_query),
                "llm.provider": config.provider,
            },
        ) as span:
            llm = self._provider_factory(config)
            tools = [build_card_search_tool(self._resolver)]
            attempts = 0

            async def run_attempt() -> LLMResponse:
                nonlocal attempts
                attempts += 1
                messages = [
                    LLMMessage.system(self._system_prompt),
                    LLMMessage.user(request.raw_query),
                ]
                return await run_tool_loop(
                    llm,
                    messages,
                    tools,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                )

            def on_retry(attempt: int, error: Exception, delay: float) -> None:
                add_span_event(
                    "translation.retry",
                    {"attempt": attempt, "error": str(error), "delay_seconds": delay},
                )

            response = await retry_with_backoff(
                run_attempt, config=self._retry_config, on_retry=on_retry
            )
            span.set_attribute("translation.attempts", attempts)
            span.set_attribute("llm.finish_reason", response.finish_reason)
            span.set_attribute("llm.prompt_tokens", response.usage.prompt_tokens)
            span.set_attribute("llm.completion_tokens", response.usage.completion_tokens)
            if response.truncated:
                logger.warning(
                    f"Model answer hit the token limit ({self._max_tokens}); returning it as-is"
                )

            logger.info(f"Final translated query: {response.content}")
            logger.debug(f"Translation used {response.usage.total_tokens} tokens")
            query = response.content.strip()
            if not query:
                raise TranslationError("The model returned an empty query")

            return TranslationResult.success(query, attempts=attempts)
