"""
Chefsito - Recipe Cache.

Caches recipe listings locally to cut recipe API calls. Entries live for
55 minutes by default, inside the API's one-hour freshness terms.
"""

import json
import logging
from datetime import datetime, timedelta
from typing import Callable

from chefsito.cache.expiring import ExpiringCache
from chefsito.cache.store import KeyValueStore
from chefsito.models.recipe import Recipe

logger = logging.getLogger(__name__)

POPULAR_RECIPES_KEY = "cache_popular_recipes"
CATEGORY_RECIPES_PREFIX = "cache_category_"
DEFAULT_TTL = timedelta(minutes=55)


def popular_key(tag: str | None = None) -> str:
    return f"{POPULAR_RECIPES_KEY}_{tag}" if tag else POPULAR_RECIPES_KEY


def category_key(tag: str) -> str:
    return f"{CATEGORY_RECIPES_PREFIX}{tag}"


class RecipeCache:
    """Typed recipe-list cache over an ExpiringCache."""

    def __init__(
        self,
        store: KeyValueStore,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.cache = ExpiringCache(store, ttl=ttl, clock=clock)

    def _read(self, key: str) -> list[Recipe] | None:
        raw = self.cache.get(key)
        if raw is None:
            return None
        try:
            recipes = [Recipe.model_validate(item) for item in json.loads(raw)]
        except Exception as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            return None
        logger.info(f"Using cached recipes for {key} ({len(recipes)} items)")
        return recipes

    def _write(self, key: str, recipes: list[Recipe]) -> None:
        payload = json.dumps([r.model_dump(mode="json") for r in recipes])
        self.cache.put(key, payload)
        logger.info(f"Cached {len(recipes)} recipes under {key}")

    # Popular recipes

    def get_popular(self, tag: str | None = None) -> list[Recipe] | None:
        return self._read(popular_key(tag))

    def put_popular(self, recipes: list[Recipe], tag: str | None = None) -> None:
        self._write(popular_key(tag), recipes)

    def clear_popular(self, tag: str | None = None) -> None:
        self.cache.invalidate(popular_key(tag))

    # Category recipes

    def get_category(self, tag: str) -> list[Recipe] | None:
        return self._read(category_key(tag))

    def put_category(self, tag: str, recipes: list[Recipe]) -> None:
        self._write(category_key(tag), recipes)

    def clear_category(self, tag: str) -> None:
        self.cache.invalidate(category_key(tag))

    # Management

    def clear_all(self) -> int:
        removed = self.cache.invalidate_all()
        logger.info(f"All recipe caches cleared ({removed} keys)")
        return removed

    def stats(self) -> dict[str, dict]:
        return self.cache.stats()
