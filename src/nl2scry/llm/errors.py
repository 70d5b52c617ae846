"""Mapping of provider HTTP failures onto the translation error taxonomy."""

from __future__ import annotations

from src.nl2scry.errors import (
    TranslationError,
    TransientProviderError,
    UnrecoverableProviderError,
)

# Timeout, conflict and rate limiting are worth another attempt
RETRYABLE_STATUS_CODES = frozenset({408, 409, 429})


def error_for_status(status_code: int, provider: str, detail: str) -> TranslationError:
    """Build the taxonomy error for a provider response with ``status_code``."""
    message = f"{provider} request failed ({status_code}): {detail}"
    if status_code >= 500 or status_code in RETRYABLE_STATUS_CODES:
        return TransientProviderError(message)
    return UnrecoverableProviderError(message)
