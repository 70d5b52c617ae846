"""
Request Gateway

The only component addressed by the UI process.
"""

from src.nl2scry.gateway.gateway import (
    MISSING_CONFIG_MESSAGE,
    TRANSLATE_MESSAGE_TYPE,
    RequestGateway,
)
from src.nl2scry.gateway.settings_store import (
    EnvSettingsStore,
    JsonFileSettingsStore,
    SettingsStore,
    create_settings_store,
)

__all__ = [
    "MISSING_CONFIG_MESSAGE",
    "TRANSLATE_MESSAGE_TYPE",
    "EnvSettingsStore",
    "JsonFileSettingsStore",
    "RequestGateway",
    "SettingsStore",
    "create_settings_store",
]
