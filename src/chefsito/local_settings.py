"""
Chefsito - Local User Settings.

Small per-device settings kept in the key/value store. Keys sit outside
the "cache_" prefix so clearing caches never resets them.
"""

import logging

from chefsito.cache.store import KeyValueStore

logger = logging.getLogger(__name__)

USE_METRIC_UNITS_KEY = "useMetricUnits"


class LocalSettings:
    """Measurement-unit preference and similar cosmetic settings."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def use_metric_units(self) -> bool:
        try:
            value = self.store.get(USE_METRIC_UNITS_KEY)
        except Exception as e:
            logger.warning(f"Could not read unit preference: {e}")
            return True
        return True if value is None else bool(value)

    def set_use_metric_units(self, use_metric: bool) -> None:
        try:
            self.store.set(USE_METRIC_UNITS_KEY, use_metric)
        except Exception as e:
            logger.warning(f"Could not save unit preference: {e}")

    def unit_system(self) -> str:
        return "metric" if self.use_metric_units() else "imperial"
