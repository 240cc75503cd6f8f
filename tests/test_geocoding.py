from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from shipcheck.errors import UpstreamUnavailable
from shipcheck.models.domain import Coordinate
from shipcheck.services.geocoding.base import CoordinateStrategy
from shipcheck.services.geocoding.providers import (
    NominatimGeocoder,
    NominatimStrategy,
    PostalDirectory,
    PostalDirectoryStrategy,
)
from shipcheck.services.geocoding.resolver import CoordinateResolver

FALLBACK = Coordinate.from_values("28.6139", "77.2090")


class FakeGeoServices:
    """Stands in for both Nominatim and the India Post directory."""

    def __init__(self, nominatim_hits=None, post_offices=None, fail_nominatim=False):
        self.nominatim_hits = nominatim_hits or {}
        self.post_offices = post_offices or {}
        self.fail_nominatim = fail_nominatim
        self.queries = []
        self.directory_calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/search":
            query = request.url.params["q"]
            self.queries.append(query)
            if self.fail_nominatim:
                return httpx.Response(503)
            return httpx.Response(200, json=self.nominatim_hits.get(query, []))
        code = request.url.path.rsplit("/", 1)[-1]
        self.directory_calls.append(code)
        offices = self.post_offices.get(code)
        if offices is None:
            return httpx.Response(200, json=[{"Status": "Error", "PostOffice": None}])
        return httpx.Response(200, json=[{"Status": "Success", "PostOffice": offices}])


def _resolver(services: FakeGeoServices) -> CoordinateResolver:
    transport = httpx.MockTransport(services)
    geocoder = NominatimGeocoder(base_url="https://geo.test", transport=transport)
    directory = PostalDirectory(base_url="https://post.test", transport=transport)
    return CoordinateResolver(
        [NominatimStrategy(geocoder), PostalDirectoryStrategy(directory, geocoder)],
        fallback=FALLBACK,
    )


def test_primary_geocoder_hit_is_cached_and_identical():
    services = FakeGeoServices(
        nominatim_hits={"560001, India": [{"lat": "12.9716", "lon": "77.5946"}]}
    )
    resolver = _resolver(services)

    first = resolver.lookup("560001")
    second = resolver.lookup("560001")

    assert first.coordinate == Coordinate("12.971600", "77.594600")
    assert first.source == "nominatim"
    assert second.source == "cache"
    assert second.is_cached
    assert second.coordinate == first.coordinate
    assert services.queries == ["560001, India"]


def test_secondary_path_uses_district_and_state():
    services = FakeGeoServices(
        nominatim_hits={
            "400001, Mumbai, Maharashtra, India": [{"lat": "18.93829", "lon": "72.83551"}],
        },
        post_offices={"400001": [{"District": "Mumbai", "State": "Maharashtra"}]},
    )
    resolver = _resolver(services)

    resolution = resolver.lookup("400001")

    assert resolution.source == "postal_directory"
    assert resolution.coordinate == Coordinate("18.938290", "72.835510")
    assert services.queries == ["400001, India", "400001, Mumbai, Maharashtra, India"]


def test_fallback_is_cached_after_every_provider_fails():
    services = FakeGeoServices(fail_nominatim=True)
    resolver = _resolver(services)

    first = resolver.lookup("999999")
    network_calls = len(services.queries) + len(services.directory_calls)
    second = resolver.lookup("999999")

    assert first.source == "fallback"
    assert first.coordinate == FALLBACK
    assert second.source == "cache"
    assert len(services.queries) + len(services.directory_calls) == network_calls


def test_seeded_coordinates_skip_network():
    services = FakeGeoServices()
    seed = {"110001": Coordinate.from_values("28.6139", "77.2090")}
    transport = httpx.MockTransport(services)
    resolver = CoordinateResolver(
        [NominatimStrategy(NominatimGeocoder(base_url="https://geo.test", transport=transport))],
        seed=seed,
    )

    assert resolver.resolve("110001") == Coordinate("28.613900", "77.209000")
    assert services.queries == []


def test_strategy_errors_fall_through_to_next_strategy():
    class Broken(CoordinateStrategy):
        source = "broken"

        def locate(self, pincode):
            raise UpstreamUnavailable("down")

    class Fixed(CoordinateStrategy):
        source = "fixed"

        def locate(self, pincode):
            return Coordinate.from_values(1, 2)

    resolution = CoordinateResolver([Broken(), Fixed()], fallback=FALLBACK).lookup("123456")

    assert resolution.source == "fixed"
    assert resolution.coordinate == Coordinate("1.000000", "2.000000")


def test_malformed_geocoder_hit_is_ignored():
    services = FakeGeoServices(nominatim_hits={"560001, India": [{"display_name": "nowhere"}]})
    geocoder = NominatimGeocoder(base_url="https://geo.test", transport=httpx.MockTransport(services))

    assert geocoder.search("560001, India") is None


@pytest.fixture
def fresh_resolver():
    from shipcheck.api import dependencies

    dependencies.get_resolver.cache_clear()
    yield dependencies.get_resolver
    dependencies.get_resolver.cache_clear()


def test_default_resolver_is_seeded_with_known_pincodes(fresh_resolver):
    resolver = fresh_resolver()

    assert resolver is fresh_resolver()
    assert resolver.cached("110001") == Coordinate("28.613900", "77.209000")
    assert resolver.lookup("110077").source == "cache"
    assert [strategy.source for strategy in resolver.strategies] == ["nominatim", "postal_directory"]


def test_concurrent_lookups_for_one_pincode_agree():
    services = FakeGeoServices(
        nominatim_hits={"560001, India": [{"lat": "12.9716", "lon": "77.5946"}]}
    )
    resolver = _resolver(services)

    with ThreadPoolExecutor(max_workers=8) as executor:
        resolutions = list(executor.map(lambda _: resolver.lookup("560001"), range(32)))

    assert {resolution.coordinate for resolution in resolutions} == {Coordinate("12.971600", "77.594600")}
    assert {resolution.source for resolution in resolutions} <= {"nominatim", "cache"}
    assert resolver.cached("560001") == Coordinate("12.971600", "77.594600")
