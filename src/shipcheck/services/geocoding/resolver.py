"""Pincode to coordinate resolution with an in-process cache."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ...config import settings
from ...errors import UpstreamUnavailable
from ...models.domain import Coordinate
from .base import CoordinateStrategy
from .providers import NominatimGeocoder, NominatimStrategy, PostalDirectoryStrategy

logger = logging.getLogger(__name__)

CACHE_SOURCE = "cache"
FALLBACK_SOURCE = "fallback"


@dataclass(frozen=True, slots=True)
class Resolution:
    coordinate: Coordinate
    source: str

    @property
    def is_cached(self) -> bool:
        return self.source == CACHE_SOURCE


class CoordinateResolver:
    """Resolve pincodes through cache, then each strategy in order, then a fixed point.

    Every outcome, the fallback included, is cached for the life of the
    process so a pincode never triggers network calls twice. Entries are
    deterministic per pincode, so concurrent writes for the same key are
    harmless.
    """

    def __init__(
        self,
        strategies: Sequence[CoordinateStrategy],
        fallback: Coordinate | None = None,
        seed: Mapping[str, Coordinate] | None = None,
    ) -> None:
        self.strategies = list(strategies)
        self.fallback = fallback or Coordinate.from_values(settings.fallback_latitude, settings.fallback_longitude)
        self._cache: dict[str, Coordinate] = dict(seed or {})
        self._lock = threading.Lock()

    def cached(self, pincode: str) -> Optional[Coordinate]:
        with self._lock:
            return self._cache.get(pincode)

    def resolve(self, pincode: str) -> Coordinate:
        return self.lookup(pincode).coordinate

    def lookup(self, pincode: str) -> Resolution:
        hit = self.cached(pincode)
        if hit is not None:
            return Resolution(hit, CACHE_SOURCE)

        for strategy in self.strategies:
            try:
                coordinate = strategy.locate(pincode)
            except UpstreamUnavailable as exc:
                logger.warning(f"{strategy.source} lookup failed for {pincode}: {exc}")
                continue
            if coordinate is not None:
                logger.info(f"Resolved {pincode} via {strategy.source}: {coordinate.latitude}, {coordinate.longitude}")
                self._store(pincode, coordinate)
                return Resolution(coordinate, strategy.source)

        logger.warning(f"Could not geocode {pincode}; using fallback coordinate")
        self._store(pincode, self.fallback)
        return Resolution(self.fallback, FALLBACK_SOURCE)

    def _store(self, pincode: str, coordinate: Coordinate) -> None:
        with self._lock:
            self._cache[pincode] = coordinate


def default_strategies() -> list[CoordinateStrategy]:
    geocoder = NominatimGeocoder()
    return [NominatimStrategy(geocoder), PostalDirectoryStrategy(geocoder=geocoder)]
