"""NL2Scry - Natural language to Scryfall query translation.

Key components:
- RequestGateway: Validates provider settings and never lets a failure escape
- TranslationEngine: Drives the model, with retries over the whole interaction
- ScryfallCardResolver: Fuzzy card-name lookup exposed to the model as a tool
- LLM Providers: Anthropic, OpenAI and Google Gemini backends
"""

from src.nl2scry.config import NL2ScryConfig, load_config
from src.nl2scry.errors import (
    ConfigurationError,
    TranslationError,
    TransientProviderError,
    UnrecoverableProviderError,
)
from src.nl2scry.gateway import RequestGateway
from src.nl2scry.models import (
    CardMatch,
    CardNotFound,
    ProviderConfig,
    ProviderName,
    TranslationRequest,
    TranslationResult,
)
from src.nl2scry.resolution import ScryfallCardResolver
from src.nl2scry.translation import TranslationEngine

__all__ = [
    # Core
    "RequestGateway",
    "TranslationEngine",
    "ScryfallCardResolver",
    # Models
    "CardMatch",
    "CardNotFound",
    "ProviderConfig",
    "ProviderName",
    "TranslationRequest",
    "TranslationResult",
    # Errors
    "ConfigurationError",
    "TranslationError",
    "TransientProviderError",
    "UnrecoverableProviderError",
    # Config
    "NL2ScryConfig",
    "load_config",
]
