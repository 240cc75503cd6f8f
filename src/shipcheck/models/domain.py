"""Domain models for credentials, coordinates and courier quotes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

COORDINATE_PRECISION = Decimal("0.000001")


def format_degrees(value: float | str | Decimal) -> str:
    """Render a latitude/longitude as a fixed six-decimal string."""

    return str(Decimal(str(value)).quantize(COORDINATE_PRECISION, rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class Credential:
    """Bearer token issued by the upstream auth endpoint."""

    token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return self.expires_at > now


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair kept as six-decimal strings."""

    latitude: str
    longitude: str

    @classmethod
    def from_values(cls, latitude: float | str | Decimal, longitude: float | str | Decimal) -> "Coordinate":
        return cls(latitude=format_degrees(latitude), longitude=format_degrees(longitude))

    def as_dict(self) -> dict[str, str]:
        return {"lat": self.latitude, "lng": self.longitude}


@dataclass(slots=True)
class CourierQuote:
    """One courier's price/time offer, normalized from any upstream shape."""

    courier_name: str
    courier_id: Optional[Union[int, str]]
    price: Optional[float]
    etd_hours: Optional[float] = None
    etd: Optional[str] = None
    distance: Optional[float] = None
    rto_rate: Optional[float] = None


@dataclass(frozen=True, slots=True)
class DeliveryEstimate:
    """Coarse delivery-speed classification derived from ETA hours."""

    label: str
    text: str
    tier: str
    is_hyperlocal: bool


@dataclass(frozen=True, slots=True)
class NoCourier:
    """Selection outcome when no usable quote exists."""


@dataclass(frozen=True, slots=True)
class Selected:
    """Selection outcome carrying the chosen quote and its classification."""

    quote: CourierQuote
    estimate: DeliveryEstimate
    etd_hours: float
    qualifying_count: int


SelectionOutcome = Union[NoCourier, Selected]
