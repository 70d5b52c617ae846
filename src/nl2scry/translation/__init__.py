"""
Query Translation

System prompt assembly and the engine that drives the model.
"""

from src.nl2scry.translation.engine import DEFAULT_RETRY_CONFIG, TranslationEngine
from src.nl2scry.translation.prompts import SYSTEM_PROMPT, build_system_prompt

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "SYSTEM_PROMPT",
    "TranslationEngine",
    "build_system_prompt",
]
