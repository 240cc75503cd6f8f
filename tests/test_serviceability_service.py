from datetime import datetime, timedelta, timezone

import pytest

from shipcheck.config import Settings
from shipcheck.errors import AuthenticationError, ValidationError
from shipcheck.models.domain import Coordinate, Credential
from shipcheck.schemas.serviceability import ServiceabilityRequest
from shipcheck.services.serviceability import service as serviceability_service


class FakeSession:
    def __init__(self, fail=False):
        self.fail = fail
        self.acquired = 0
        self.invalidated = 0
        self.invalidated_tokens = []

    def acquire(self):
        self.acquired += 1
        if self.fail:
            raise AuthenticationError("login failed")
        return Credential(token="tok", expires_at=datetime.now(timezone.utc) + timedelta(days=1))

    def invalidate(self, token=None):
        self.invalidated += 1
        self.invalidated_tokens.append(token)


class FakeResolver:
    def __init__(self):
        self.calls = []

    def resolve(self, pincode):
        self.calls.append(pincode)
        return Coordinate.from_values("28.6139", "77.2090")


class FakeClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def check_serviceability(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


def _companies(*entries):
    return {"status": 200, "data": {"available_courier_companies": list(entries)}}


def _run(request, client, session=None, resolver=None, config=None):
    return serviceability_service.check_serviceability(
        request,
        session=session or FakeSession(),
        resolver=resolver or FakeResolver(),
        client=client,
        config=config or Settings(),
    )


@pytest.mark.parametrize("pincode", ["11000", "1100011", "11000a", "", " 110001", "١١٠٠٠١", 110001, None])
def test_malformed_pincode_rejected_before_network(pincode):
    session, resolver, client = FakeSession(), FakeResolver(), FakeClient()

    with pytest.raises(ValidationError):
        _run(ServiceabilityRequest(pincode=pincode), client, session, resolver)

    assert session.acquired == 0
    assert resolver.calls == []
    assert client.calls == []


def test_pincode_outside_allow_list_is_soft_failure():
    session, client = FakeSession(), FakeClient()
    config = Settings(serviceable_pincodes=("110001",), support_phone="9999999999")

    result = _run(ServiceabilityRequest(pincode="560001"), client, session, config=config)

    assert result.success is False
    assert "9999999999" in result.message
    assert session.acquired == 0
    assert client.calls == []


def test_quick_courier_selected_end_to_end():
    client = FakeClient(_companies({"courier_name": "Borzo", "courier_company_id": 12, "freight_charge": 60, "etd_hours": 4}))

    result = _run(ServiceabilityRequest(pincode="110001"), client)

    assert result.success is True
    assert result.delivery_time == "2-4 hours"
    assert result.delivery_charge == 60
    assert result.service_type == "quick"
    assert result.is_hyperlocal is True
    assert result.courier_id == 12
    assert result.total_couriers_available == 1
    assert result.hyperlocal_couriers_available == 1


def test_query_carries_pickup_delivery_and_shipment_attributes():
    client = FakeClient(_companies({"courier_name": "Borzo", "freight_charge": 60, "etd_hours": 4}))
    config = Settings(pickup_pincode="110077", pickup_latitude="28.4595", pickup_longitude="77.0266")

    _run(ServiceabilityRequest(pincode="110001", weight=2.0, cod=True), client, config=config)

    (call,) = client.calls
    assert call["pickup_postcode"] == "110077"
    assert call["delivery_postcode"] == "110001"
    assert call["pickup"] == Coordinate("28.459500", "77.026600")
    assert call["delivery"] == Coordinate("28.613900", "77.209000")
    assert call["weight"] == 2.0
    assert call["cod"] is True
    assert call["token"] == "tok"


def test_coordinate_override_skips_resolver():
    resolver = FakeResolver()
    client = FakeClient(_companies({"courier_name": "Borzo", "freight_charge": 60, "etd_hours": 4}))

    _run(ServiceabilityRequest(pincode="110001", lat=28.5, lng=77.1), client, resolver=resolver)

    assert resolver.calls == []
    assert client.calls[0]["delivery"] == Coordinate("28.500000", "77.100000")
    assert client.calls[0]["weight"] == 0.5


def test_missing_price_uses_default_charge():
    client = FakeClient(_companies({"courier_name": "BlueDart", "courier_company_id": 3, "etd_hours": 30}))

    result = _run(ServiceabilityRequest(pincode="110001"), client)

    assert result.delivery_charge == 49
    assert result.service_type == "standard"
    assert result.hyperlocal_couriers_available == 0


def test_upstream_failure_is_not_serviceable():
    result = _run(ServiceabilityRequest(pincode="110001"), FakeClient(response=None))

    assert result.success is False
    assert result.message == serviceability_service.NOT_AVAILABLE_MESSAGE
    assert result.courier_name is None


def test_empty_courier_list_is_no_courier():
    result = _run(ServiceabilityRequest(pincode="110001"), FakeClient(_companies()))

    assert result.success is False
    assert result.message == serviceability_service.NO_COURIER_MESSAGE


def test_unrecognized_payload_is_no_courier():
    result = _run(ServiceabilityRequest(pincode="110001"), FakeClient({"status": 500, "message": "boom"}))

    assert result.success is False
    assert result.message == serviceability_service.NO_COURIER_MESSAGE


def test_rejected_credential_invalidates_session():
    session = FakeSession()
    client = FakeClient(error=AuthenticationError("rejected"))

    with pytest.raises(AuthenticationError):
        _run(ServiceabilityRequest(pincode="110001"), client, session)

    assert session.invalidated == 1
    assert session.invalidated_tokens == ["tok"]


def test_login_failure_propagates_without_query():
    session, client = FakeSession(fail=True), FakeClient()

    with pytest.raises(AuthenticationError):
        _run(ServiceabilityRequest(pincode="110001"), client, session)

    assert client.calls == []


def test_lookup_coordinates_reports_provenance():
    from shipcheck.services.geocoding.resolver import CoordinateResolver

    resolver = CoordinateResolver([], fallback=Coordinate.from_values(1, 2))

    first = serviceability_service.lookup_coordinates("123456", resolver)
    second = serviceability_service.lookup_coordinates("123456", resolver)

    assert (first.source, first.is_cached) == ("fallback", False)
    assert (second.source, second.is_cached) == ("cache", True)
    assert second.coordinates.lat == "1.000000"

    with pytest.raises(ValidationError):
        serviceability_service.lookup_coordinates("12345", resolver)
