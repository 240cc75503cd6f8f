"""Geocoding providers: Nominatim free-text search and the India Post directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ...config import settings
from ...errors import UpstreamUnavailable
from ...models.domain import Coordinate
from .base import CoordinateStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PostalArea:
    district: str
    state: str


class _JsonHttpProvider:
    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self.user_agent = user_agent or settings.geocoder_user_agent
        self._transport = transport

    def _get_json(self, url: str, params: dict | None = None):
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self.timeout),
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailable(
                f"{url} returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnavailable(f"{url} request failed: {exc}") from exc


class NominatimGeocoder(_JsonHttpProvider):
    """Free-text search against a Nominatim-compatible ``/search`` endpoint."""

    def __init__(self, base_url: str | None = None, **kwargs) -> None:
        super().__init__(base_url or settings.geocoder_base_url, **kwargs)

    def search(self, query: str) -> Optional[Coordinate]:
        results = self._get_json(
            f"{self.base_url}/search",
            params={"q": query, "format": "json", "limit": 1},
        )
        if not isinstance(results, list) or not results:
            return None
        first = results[0]
        try:
            return Coordinate.from_values(first["lat"], first["lon"])
        except (KeyError, TypeError, ArithmeticError) as exc:
            logger.warning(f"Discarding malformed geocoder hit for '{query}': {exc}")
            return None


class PostalDirectory(_JsonHttpProvider):
    """India Post pincode directory (``/pincode/<code>``)."""

    def __init__(self, base_url: str | None = None, **kwargs) -> None:
        super().__init__(base_url or settings.postal_directory_base_url, **kwargs)

    def area_for(self, pincode: str) -> Optional[PostalArea]:
        payload = self._get_json(f"{self.base_url}/pincode/{pincode}")
        # The API answers with a one-element list wrapping the lookup result.
        if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
            return None
        entry = payload[0]
        if entry.get("Status") != "Success":
            return None
        offices = entry.get("PostOffice") or []
        if not offices or not isinstance(offices[0], dict):
            return None
        district = offices[0].get("District")
        state = offices[0].get("State")
        if not district or not state:
            return None
        return PostalArea(district=district, state=state)


class NominatimStrategy(CoordinateStrategy):
    source = "nominatim"

    def __init__(self, geocoder: NominatimGeocoder | None = None) -> None:
        self.geocoder = geocoder or NominatimGeocoder()

    def locate(self, pincode: str) -> Optional[Coordinate]:
        return self.geocoder.search(f"{pincode}, India")


class PostalDirectoryStrategy(CoordinateStrategy):
    """Narrow the free-text query with the district and state of the pincode."""

    source = "postal_directory"

    def __init__(
        self,
        directory: PostalDirectory | None = None,
        geocoder: NominatimGeocoder | None = None,
    ) -> None:
        self.directory = directory or PostalDirectory()
        self.geocoder = geocoder or NominatimGeocoder()

    def locate(self, pincode: str) -> Optional[Coordinate]:
        area = self.directory.area_for(pincode)
        if area is None:
            return None
        return self.geocoder.search(f"{pincode}, {area.district}, {area.state}, India")
