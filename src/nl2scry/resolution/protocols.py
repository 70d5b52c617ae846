"""
Card Resolution Protocols

Defines the interface for canonicalizing a card name before it is placed
in a query.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from src.nl2scry.models import ToolResult


@runtime_checkable
class CardResolver(Protocol):
    """
    Protocol for card name resolution.

    Implementations perform at most one lookup per call and never raise
    for a miss.
    """

    async def resolve(self, name: str) -> ToolResult:
        """
        Resolve a possibly partial or misspelled card name.

        Args:
            name: Card name as written by the user (non-empty)

        Returns:
            CardMatch on a hit, CardNotFound otherwise
        """
        ...
