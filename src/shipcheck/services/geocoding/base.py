"""Base classes for coordinate lookup strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...models.domain import Coordinate


class CoordinateStrategy(ABC):
    """Contract for one step of the pincode-to-coordinate chain."""

    #: Provenance label reported when this strategy produced the coordinate.
    source: str = "unknown"

    @abstractmethod
    def locate(self, pincode: str) -> Optional[Coordinate]:
        """Return a coordinate for ``pincode`` or ``None`` when not found.

        Implementations may raise ``UpstreamUnavailable``; the resolver treats
        that the same as ``None``.
        """
        raise NotImplementedError
