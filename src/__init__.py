"""NL2Scry - Natural language to Scryfall search query translation."""

__version__ = "0.1.0"
