"""
NL2Scry Data Models

Values created at the start of one translation and discarded at its end.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ProviderName(str, Enum):
    """Supported language model backends."""

    GOOGLE = "google"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


DEFAULT_MODELS: dict[ProviderName, str] = {
    ProviderName.GOOGLE: "gemini-flash-lite-latest",
    ProviderName.ANTHROPIC: "claude-sonnet-4-5-20250929",
    ProviderName.OPENAI: "gpt-4o-mini",
}


@dataclass(frozen=True)
class ProviderConfig:
    """
    Provider selection and credential, as read from the settings store.

    ``provider`` is kept as the raw stored string; it is matched against
    ProviderName only when a model binding is created.
    """

    provider: str = ""
    credential: str = ""
    model_id: str = ""

    @property
    def is_complete(self) -> bool:
        """True when both provider and credential are present."""
        return bool(self.provider) and bool(self.credential)

    def __repr__(self) -> str:
        return (
            f"ProviderConfig(provider={self.provider!r}, "
            f"credential={'***' if self.credential else ''!r}, model_id={self.model_id!r})"
        )


@dataclass(frozen=True)
class TranslationRequest:
    """A free-text search request."""

    raw_query: str


@dataclass(frozen=True)
class CardMatch:
    """Resolver hit: the three fields forwarded to the model."""

    canonical_name: str
    type_line: str
    oracle_text: str

    found = True

    def to_tool_payload(self) -> dict[str, Any]:
        return {
            "name": self.canonical_name,
            "type_line": self.type_line,
            "oracle_text": self.oracle_text,
        }


@dataclass(frozen=True)
class CardNotFound:
    """Resolver miss. A normal outcome, not an error."""

    attempted_name: str

    found = False
    not_found = True

    def to_tool_payload(self) -> dict[str, Any]:
        return {"error": "Card not found", "query": self.attempted_name}


ToolResult = CardMatch | CardNotFound


@dataclass(frozen=True)
class TranslationResult:
    """
    Outcome of one translation.

    Exactly one of ``query`` and ``error_kind``/``message`` is set.
    """

    query: str | None = None
    error_kind: str | None = None
    message: str | None = None
    attempts: int = 0

    @classmethod
    def success(cls, query: str, attempts: int = 1) -> TranslationResult:
        return cls(query=query, attempts=attempts)

    @classmethod
    def failure(cls, error_kind: str, message: str) -> TranslationResult:
        return cls(error_kind=error_kind, message=message)

    @property
    def ok(self) -> bool:
        return self.query is not None

    def to_response(self) -> dict[str, Any]:
        """Response shape expected by the UI process."""
        if self.ok:
            return {"translatedQuery": self.query}
        return {"translatedQuery": None, "error": self.message or "Translation failed"}
