"""
Layer Dynamo - Cache Layer Interface

Defines the contract the host cache framework drives: keyed get/set of
CacheEntry objects.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .codec import CacheEntry


class CacheLayerInterface(ABC):
    """
    Abstract base class for cache layers.

    A miss is reported as None and is never an error.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[CacheEntry]:
        """
        Retrieve an entry from the layer.

        Args:
            key: Cache key

        Returns:
            The stored entry, or None on a miss
        """
        pass

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry) -> None:
        """
        Store an entry, overwriting any existing entry for key.

        Args:
            key: Cache key
            entry: Entry to store
        """
        pass

    @abstractmethod
    def get_stats(self) -> dict[str, Any]:
        """
        Get layer statistics.

        Returns:
            Dictionary with counters (hits, misses, sets, ...)
        """
        pass

    async def get_many(self, keys: list[str]) -> dict[str, CacheEntry]:
        """
        Retrieve multiple entries.

        Default implementation calls get() for each key.

        Args:
            keys: List of cache keys

        Returns:
            Dictionary mapping keys to entries (misses are omitted)
        """
        result = {}
        for key in keys:
            entry = await self.get(key)
            if entry is not None:
                result[key] = entry
        return result

    async def set_many(self, entries: dict[str, CacheEntry]) -> None:
        """
        Store multiple entries.

        Default implementation calls set() for each item.

        Args:
            entries: Dictionary mapping keys to entries
        """
        for key, entry in entries.items():
            await self.set(key, entry)
