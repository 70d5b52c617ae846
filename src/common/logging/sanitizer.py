"""
Log Sanitization

Keeps provider credentials out of log output. Two layers are applied to
every record: well-known key shapes (Anthropic, OpenAI, Google, bearer
headers, ``apiKey`` fields) and the literal credentials registered at
runtime with ``register_secret``, whatever their shape.
"""

from __future__ import annotations

import logging
import re
import threading
from re import Pattern
from typing import Any

REDACTION_PLACEHOLDER = "[REDACTED]"

# Shorter values are too likely to collide with ordinary words
MIN_SECRET_LENGTH = 8

CREDENTIAL_PATTERNS: list[tuple[str, Pattern[str]]] = [
    # settings JSON and query strings: "apiKey": "...", api_key=...
    (
        "API_KEY",
        re.compile(r"(api[_-]?key|apikey)['\"]?\s*[=:]\s*['\"]?[\w\-]{16,}['\"]?", re.IGNORECASE),
    ),
    ("ANTHROPIC_KEY", re.compile(r"sk-ant-[a-zA-Z0-9\-_]{20,}")),
    ("OPENAI_KEY", re.compile(r"sk-[a-zA-Z0-9\-_]{20,}")),
    ("GOOGLE_KEY", re.compile(r"AIza[0-9A-Za-z\-_]{30,}")),
    ("BEARER", re.compile(r"Bearer\s+[a-zA-Z0-9\-_\.]+", re.IGNORECASE)),
    (
        "X_API_KEY",
        re.compile(
            r"x-(goog-)?api-key['\"]?\s*[=:]\s*['\"]?[\w\-]{16,}['\"]?", re.IGNORECASE
        ),
    ),
]

_secrets_lock = threading.Lock()
_registered_secrets: set[str] = set()


def register_secret(value: str | None) -> None:
    """
    Redact ``value`` verbatim from every record passing a SanitizingFilter.

    Values shorter than MIN_SECRET_LENGTH are ignored.
    """
    if not value or len(value) < MIN_SECRET_LENGTH:
        return
    with _secrets_lock:
        _registered_secrets.add(value)


def clear_registered_secrets() -> None:
    with _secrets_lock:
        _registered_secrets.clear()


class SanitizingFilter(logging.Filter):
    """
    Logging filter that rewrites records in place, never drops them.

    Usage:
        logger = logging.getLogger(__name__)
        logger.addFilter(SanitizingFilter())
    """

    def __init__(
        self,
        name: str = "",
        additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
        redaction_placeholder: str = REDACTION_PLACEHOLDER,
    ):
        super().__init__(name)
        self._patterns = CREDENTIAL_PATTERNS + list(additional_patterns or [])
        self._placeholder = redaction_placeholder

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = self.sanitize(str(record.msg))

        if isinstance(record.args, dict):
            record.args = {k: self._sanitize_arg(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple) and record.args:
            record.args = tuple(self._sanitize_arg(arg) for arg in record.args)

        return True

    def sanitize(self, text: str) -> str:
        """Return ``text`` with registered secrets and known key shapes redacted."""
        with _secrets_lock:
            # Longest first, so a secret containing another is removed whole
            secrets = sorted(_registered_secrets, key=len, reverse=True)
        for secret in secrets:
            text = text.replace(secret, f"CREDENTIAL={self._placeholder}")

        for label, pattern in self._patterns:
            text = pattern.sub(f"{label}={self._placeholder}", text)
        return text

    def _sanitize_arg(self, value: Any) -> Any:
        return self.sanitize(value) if isinstance(value, str) else value


def configure_sanitized_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
    additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
) -> None:
    """
    Configure the root logger with sanitization enabled.

    Args:
        level: Logging level (int or name such as "INFO")
        format_string: Log format string (uses default if not specified)
        additional_patterns: Extra patterns to redact
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=level,
        format=format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    root_logger = logging.getLogger()
    sanitizing_filter = SanitizingFilter(additional_patterns=additional_patterns)

    # Root logger filters are skipped for records propagated from child loggers
    for target in (root_logger, *root_logger.handlers):
        if not any(isinstance(f, SanitizingFilter) for f in target.filters):
            target.addFilter(sanitizing_filter)
