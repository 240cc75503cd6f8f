"""Serviceability pipeline: credential, coordinates, upstream query, selection."""

from __future__ import annotations

import logging
import re

from ...config import Settings, settings as default_settings
from ...errors import AuthenticationError, ValidationError
from ...models.domain import Coordinate, NoCourier
from ...schemas.serviceability import CoordinateResponse, CoordinatesModel, ServiceabilityRequest, ServiceabilityResponse
from ..geocoding.resolver import CoordinateResolver
from ..shiprocket.client import ShiprocketClient
from ..shiprocket.session import CredentialSession
from .normalizer import normalize
from .selector import select_courier

logger = logging.getLogger(__name__)

PINCODE_PATTERN = re.compile(r"^\d{6}$", re.ASCII)

NOT_AVAILABLE_MESSAGE = "Delivery not available for this pincode"
NO_COURIER_MESSAGE = "No courier available for delivery to this pincode"


def validate_pincode(pincode: object) -> str:
    if not isinstance(pincode, str) or not PINCODE_PATTERN.fullmatch(pincode):
        raise ValidationError("Invalid pincode format. Please enter a 6-digit pincode.")
    return pincode


def pickup_coordinate(config: Settings) -> Coordinate:
    return Coordinate.from_values(config.pickup_latitude, config.pickup_longitude)


def check_serviceability(
    request: ServiceabilityRequest,
    *,
    session: CredentialSession,
    resolver: CoordinateResolver,
    client: ShiprocketClient,
    config: Settings | None = None,
) -> ServiceabilityResponse:
    config = config or default_settings
    pincode = validate_pincode(request.pincode)

    if config.serviceable_pincodes and pincode not in config.serviceable_pincodes:
        logger.info(f"Pincode {pincode} is outside the serviceable allow-list")
        return ServiceabilityResponse.failure(
            f"We don't deliver here. To place order, message us on {config.support_phone}"
        )

    credential = session.acquire()

    if request.lat is not None and request.lng is not None:
        delivery = Coordinate.from_values(request.lat, request.lng)
    else:
        delivery = resolver.resolve(pincode)

    try:
        raw = client.check_serviceability(
            pickup=pickup_coordinate(config),
            delivery=delivery,
            pickup_postcode=config.pickup_pincode,
            delivery_postcode=pincode,
            weight=request.weight or config.default_weight_kg,
            cod=request.cod,
            token=credential.token,
        )
    except AuthenticationError:
        session.invalidate(credential.token)
        raise

    if raw is None:
        return ServiceabilityResponse.failure(NOT_AVAILABLE_MESSAGE)

    quotes = normalize(raw)
    logger.info(f"Found {len(quotes)} available couriers for {pincode}")

    outcome = select_courier(quotes, config.hyperlocal_courier_keywords, config.quick_delivery_max_hours)
    if isinstance(outcome, NoCourier):
        return ServiceabilityResponse.failure(NO_COURIER_MESSAGE)

    quote = outcome.quote
    logger.info(
        f"Selected courier {quote.courier_name} (ETD: {outcome.etd_hours}h, "
        f"{outcome.qualifying_count} hyperlocal/quick of {len(quotes)})"
    )
    return ServiceabilityResponse(
        success=True,
        delivery_time=outcome.estimate.label,
        delivery_charge=quote.price if quote.price else config.default_delivery_charge,
        courier_name=quote.courier_name,
        courier_id=quote.courier_id,
        etd=outcome.estimate.text,
        is_hyperlocal=outcome.estimate.is_hyperlocal,
        service_type=outcome.estimate.tier,
        etd_hours=outcome.etd_hours,
        total_couriers_available=len(quotes),
        hyperlocal_couriers_available=outcome.qualifying_count,
    )


def lookup_coordinates(pincode: str, resolver: CoordinateResolver) -> CoordinateResponse:
    pincode = validate_pincode(pincode)
    resolution = resolver.lookup(pincode)
    return CoordinateResponse(
        pincode=pincode,
        coordinates=CoordinatesModel(**resolution.coordinate.as_dict()),
        source=resolution.source,
        is_cached=resolution.is_cached,
    )
