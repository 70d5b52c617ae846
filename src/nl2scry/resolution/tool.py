"""
Card search tool exposed to the language model.
"""

from __future__ import annotations

from typing import Any

from src.nl2scry.llm.protocols import LLMToolDefinition
from src.nl2scry.llm.tools import ToolSpec
from src.nl2scry.models import CardNotFound
from src.nl2scry.resolution.protocols import CardResolver

CARD_SEARCH_TOOL_NAME = "scryfall-search"

CARD_SEARCH_DEFINITION = LLMToolDefinition(
    name=CARD_SEARCH_TOOL_NAME,
    description=(
        "Fuzzy search for a Magic card by name using the Scryfall API. "
        "Returns the card's exact name. Use this when the user mentions a "
        "specific card name to get the correct spelling."
    ),
    parameters={
        "type": "object",
        "properties": {
            "cardName": {
                "type": "string",
                "description": "The card name to search for (can be partial or misspelled)",
            },
        },
        "required": ["cardName"],
    },
)


def build_card_search_tool(resolver: CardResolver) -> ToolSpec:
    """Wrap ``resolver`` as the scryfall-search tool."""

    async def handler(arguments: dict[str, Any]) -> dict[str, Any]:
        card_name = arguments.get("cardName")
        # The model can send a blank or non-string name; that is a miss, not a crash
        if not isinstance(card_name, str) or not card_name.strip():
            return CardNotFound(attempted_name=str(card_name or "")).to_tool_payload()
        result = await resolver.resolve(card_name)
        return result.to_tool_payload()

    return ToolSpec(definition=CARD_SEARCH_DEFINITION, handler=handler)
