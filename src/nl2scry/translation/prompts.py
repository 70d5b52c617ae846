"""
Prompt templates for query translation.
"""

from __future__ import annotations

from src.nl2scry.resolution.tool import CARD_SEARCH_TOOL_NAME
from src.nl2scry.translation.grammar import SCRYFALL_SYNTAX_REFERENCE

ROLE_STATEMENT = "You are an expert at Magic the Gathering and using the Scryfall api."

TASK_STATEMENT = (
    "Your job is to help users generate search queries that adhere to the "
    "scryfall search syntax based on their natural language query."
)

OUTPUT_CONSTRAINT = (
    "Respond with ONLY the Scryfall search query. "
    "No explanation, no markdown, no extra text."
)


def build_system_prompt(
    syntax_reference: str = SCRYFALL_SYNTAX_REFERENCE,
    tool_name: str = CARD_SEARCH_TOOL_NAME,
) -> str:
    """
    Assemble the fixed system instruction.

    Args:
        syntax_reference: Grammar reference text, embedded as-is
        tool_name: Name of the card lookup tool the model should use
    """
    return "\n".join(
        [
            ROLE_STATEMENT,
            f"The scryfall search api has the following syntax rules for searching: {syntax_reference}",
            TASK_STATEMENT,
            (
                f"When users mention specific card names, use the {tool_name} tool to look up "
                "the exact card name before including it in the query."
            ),
            OUTPUT_CONSTRAINT,
        ]
    )


SYSTEM_PROMPT = build_system_prompt()
