"""
Request Gateway

The boundary between the UI process and the translation pipeline. Checks
that a provider is configured, delegates to the TranslationEngine and turns
every failure into a result value.
"""

from __future__ import annotations

import logging
from typing import Any

from src.common.logging import register_secret
from src.common.telemetry import trace_span
from src.nl2scry.config import NL2ScryConfig
from src.nl2scry.errors import ConfigurationError, TranslationError
from src.nl2scry.gateway.settings_store import SettingsStore, create_settings_store
from src.nl2scry.models import TranslationRequest, TranslationResult
from src.nl2scry.translation.engine import TranslationEngine

logger = logging.getLogger(__name__)

TRANSLATE_MESSAGE_TYPE = "translate-query"

MISSING_CONFIG_MESSAGE = (
    "No API key configured. Open settings to configure a provider and API key."
)


class RequestGateway:
    """Entry point for translation requests coming from the UI process."""

    def __init__(self, settings_store: SettingsStore, engine: TranslationEngine):
        self._settings_store = settings_store
        self._engine = engine

    @classmethod
    def from_config(cls, config: NL2ScryConfig) -> RequestGateway:
        return cls(
            settings_store=create_settings_store(config),
            engine=TranslationEngine.from_config(config),
        )

    @property
    def engine(self) -> TranslationEngine:
        return self._engine

    async def handle(self, query: str) -> TranslationResult:
        """
        Translate ``query`` using the currently stored provider settings.

        Never raises: configuration problems, provider failures and
        unexpected errors all come back as a failed TranslationResult.
        """
        with trace_span("gateway.handle", {"query.length": len(query or "")}) as span:
            try:
                if not query or not query.strip():
                    return TranslationResult.failure("invalid_request", "Query must not be empty")

                config = await self._settings_store.load()
                register_secret(config.credential)
                if not config.is_complete:
                    raise ConfigurationError(MISSING_CONFIG_MESSAGE)

                return await self._engine.translate(TranslationRequest(raw_query=query), config)

            except TranslationError as e:
                logger.error(f"Translation error ({e.kind}): {e}")
                span.set_attribute("gateway.error_kind", e.kind)
                return TranslationResult.failure(e.kind, str(e))
            except Exception as e:
                # Nothing may escape to the transport
                logger.exception(f"Unexpected translation failure: {e}")
                span.set_attribute("gateway.error_kind", "internal_error")
                return TranslationResult.failure("internal_error", str(e) or type(e).__name__)

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """
        Handle one inbound UI message.

        Returns:
            None for messages that are not translate requests, otherwise
            ``{"translatedQuery": str}`` or ``{"translatedQuery": None, "error": str}``
        """
        if message.get("type") != TRANSLATE_MESSAGE_TYPE:
            return None

        query = message.get("query")
        result = await self.handle(query if isinstance(query, str) else "")
        return result.to_response()
