"""Local caching for upstream API responses."""

from chefsito.cache.expiring import CACHE_PREFIX, CacheEntry, ExpiringCache
from chefsito.cache.recipes import RecipeCache
from chefsito.cache.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "CACHE_PREFIX",
    "CacheEntry",
    "ExpiringCache",
    "RecipeCache",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
