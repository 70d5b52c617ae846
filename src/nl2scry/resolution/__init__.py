"""
Card Resolution

Canonicalizes card names against Scryfall so that the model can put exact
names into queries.
"""

from src.nl2scry.resolution.protocols import CardResolver
from src.nl2scry.resolution.scryfall import ScryfallCardResolver
from src.nl2scry.resolution.tool import (
    CARD_SEARCH_DEFINITION,
    CARD_SEARCH_TOOL_NAME,
    build_card_search_tool,
)

__all__ = [
    "CARD_SEARCH_DEFINITION",
    "CARD_SEARCH_TOOL_NAME",
    "CardResolver",
    "ScryfallCardResolver",
    "build_card_search_tool",
]
