"""
Scryfall Card Resolver

Implements the CardResolver protocol with Scryfall's fuzzy named-card
endpoint (GET /cards/named?fuzzy=...).
"""

from __future__ import annotations

import logging

import httpx

from src import __version__
from src.common.telemetry import trace_span
from src.nl2scry.models import CardMatch, CardNotFound, ToolResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.scryfall.com"


class ScryfallCardResolver:
    """
    Card resolver backed by the Scryfall API.

    One HTTP round trip per call and no retries: a lookup that does not
    succeed is reported as CardNotFound immediately. Only the card's name,
    type line and oracle text are forwarded.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            base_url: Scryfall API base URL
            timeout_seconds: Timeout for each lookup
            client: Optional pre-built client (the resolver then does not own it)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "User-Agent": f"nl2scry/{__version__}",
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(self._timeout_seconds),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def resolve(self, name: str) -> ToolResult:
        """
        Fuzzy-match a card name.

        Args:
            name: Card name, possibly partial or misspelled

        Returns:
            CardMatch with canonical name, type line and oracle text,
            or CardNotFound carrying the attempted name

        Raises:
            ValueError: If name is empty
        """
        if not name or not name.strip():
            raise ValueError("Card name must not be empty")

        logger.info(f"Tool call: scryfall-search, cardName: {name}")

        with trace_span("scryfall.resolve", {"card.name": name[:100]}) as span:
            try:
                client = await self._get_client()
                response = await client.get("/cards/named", params={"fuzzy": name})
            except httpx.HTTPError as e:
                logger.warning(f"Card lookup failed for {name!r}: {e}")
                span.set_attribute("card.found", False)
                span.set_attribute("card.error", str(e))
                return CardNotFound(attempted_name=name)

            if not response.is_success:
                logger.info(f"Card not found: {name}")
                span.set_attribute("card.found", False)
                span.set_attribute("http.status_code", response.status_code)
                return CardNotFound(attempted_name=name)

            try:
                card = response.json()
            except ValueError:
                card = None
            if not isinstance(card, dict):
                logger.warning(f"Card lookup for {name!r} returned a body that is not a JSON object")
                span.set_attribute("card.found", False)
                span.set_attribute("card.error", "invalid response body")
                return CardNotFound(attempted_name=name)

            match = CardMatch(
                canonical_name=card.get("name", name),
                type_line=card.get("type_line") or "",
                oracle_text=card.get("oracle_text") or "",
            )
            logger.info(f"Card found: {match.canonical_name}")
            span.set_attribute("card.found", True)
            span.set_attribute("card.canonical_name", match.canonical_name)
            return match
