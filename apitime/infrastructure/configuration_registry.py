"""Configuration Registry — keyed store of API base URLs with serialized access.

Invariants:
    - One asyncio.Lock guards the map: a single add or get runs at a time
    - The lock is held only for the map access itself, never across IO
    - Lookups are key-exact; a missing key returns None (the runner raises)
    - Re-registering a key overwrites the previous entry (last write wins)
    - No eviction, no TTL: entries live as long as the registry

Design Decisions:
    - Explicitly constructed and passed to the runner: no hidden module singleton,
      so each test builds an isolated registry
    - from_settings() seeds entries from APITIME_CONFIGURATIONS
"""

import asyncio
import logging

import httpx

from apitime.config import Settings
from apitime.core.endpoint import APIConfiguration

logger = logging.getLogger(__name__)


class ConfigurationRegistry:
    """Holds APIConfiguration entries by key."""

    def __init__(self, configurations: list[APIConfiguration] | None = None):
        self._configurations: dict[str, APIConfiguration] = {
            c.key: c for c in configurations or []
        }
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfigurationRegistry":
        return cls([
            APIConfiguration(key, base_url)
            for key, base_url in settings.configurations.items()
        ])

    async def add(self, configuration: APIConfiguration) -> None:
        async with self._lock:
            replaced = configuration.key in self._configurations
            self._configurations[configuration.key] = configuration
        logger.debug(
            f"{'Replaced' if replaced else 'Registered'} API configuration "
            f"'{configuration.key}' -> {configuration.base_url}",
            extra={"configuration_key": configuration.key},
        )

    async def register(self, key: str, base_url: httpx.URL | str) -> APIConfiguration:
        """Register base_url under key and return the stored entry."""
        configuration = APIConfiguration(key, base_url)
        await self.add(configuration)
        return configuration

    async def get(self, key: str) -> APIConfiguration | None:
        async with self._lock:
            return self._configurations.get(key)

    async def keys(self) -> list[str]:
        async with self._lock:
            return list(self._configurations)
