"""
Provider Settings Stores

Read-only (from the gateway's point of view) access to the provider,
credential and model selected by the user. Every load returns a fresh
snapshot; the last write to the backing store wins.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from src.nl2scry.config import NL2ScryConfig
from src.nl2scry.errors import ConfigurationError
from src.nl2scry.models import ProviderConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class SettingsStore(Protocol):
    """Source of the current ProviderConfig."""

    async def load(self) -> ProviderConfig:
        """Return the current provider settings (possibly incomplete)."""
        ...


class JsonFileSettingsStore:
    """
    Settings kept in a JSON file with the keys ``provider``, ``apiKey`` and
    ``modelId``. A missing file or key reads as an empty value.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> ProviderConfig:
        return await asyncio.to_thread(self._read)

    def _read(self) -> ProviderConfig:
        if not self._path.exists():
            logger.debug(f"Settings file {self._path} does not exist")
            return ProviderConfig()

        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Settings file {self._path} is not valid JSON. "
                "Open settings to configure a provider and API key."
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {self._path} must contain a JSON object")

        return ProviderConfig(
            provider=str(data.get("provider") or ""),
            credential=str(data.get("apiKey") or ""),
            model_id=str(data.get("modelId") or ""),
        )

    def save(self, config: ProviderConfig) -> None:
        """Write the settings file, readable by the owner only."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "provider": config.provider,
            "apiKey": config.credential,
            "modelId": config.model_id,
        }
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            # The creation mode does not apply to a file that already exists
            os.fchmod(f.fileno(), 0o600)
            json.dump(payload, f, indent=2)
        logger.info(f"Saved provider settings to {self._path}")


class EnvSettingsStore:
    """
    Settings read from NL2SCRY_PROVIDER, NL2SCRY_API_KEY and NL2SCRY_MODEL_ID
    at every load.
    """

    PROVIDER_VAR = "NL2SCRY_PROVIDER"
    API_KEY_VAR = "NL2SCRY_API_KEY"
    MODEL_ID_VAR = "NL2SCRY_MODEL_ID"

    async def load(self) -> ProviderConfig:
        return ProviderConfig(
            provider=os.getenv(self.PROVIDER_VAR, ""),
            credential=os.getenv(self.API_KEY_VAR, ""),
            model_id=os.getenv(self.MODEL_ID_VAR, ""),
        )


def create_settings_store(config: NL2ScryConfig) -> SettingsStore:
    """Pick the settings store named by ``config.settings_source``."""
    if config.settings_source == "env":
        return EnvSettingsStore()
    return JsonFileSettingsStore(config.settings_path)
