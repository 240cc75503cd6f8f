"""Delivery serviceability and coordinate lookup endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...config import Settings
from ...errors import AuthenticationError, ValidationError
from ...schemas.serviceability import CoordinateResponse, ServiceabilityRequest, ServiceabilityResponse
from ...services.geocoding.resolver import CoordinateResolver
from ...services.serviceability.service import check_serviceability, lookup_coordinates
from ...services.shiprocket.client import ShiprocketClient
from ...services.shiprocket.session import CredentialSession
from ..dependencies import get_client, get_resolver, get_session, get_settings

router = APIRouter(tags=["delivery"])
logger = logging.getLogger(__name__)


@router.post(
    "/check-delivery",
    response_model=ServiceabilityResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def check_delivery(
    payload: ServiceabilityRequest,
    session: CredentialSession = Depends(get_session),
    resolver: CoordinateResolver = Depends(get_resolver),
    client: ShiprocketClient = Depends(get_client),
    config: Settings = Depends(get_settings),
) -> ServiceabilityResponse:
    try:
        return check_serviceability(payload, session=session, resolver=resolver, client=client, config=config)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed. Please try again.",
        ) from exc
    except Exception as exc:
        logger.exception(f"Delivery check error: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check delivery availability. Please try again later.",
        ) from exc


@router.get("/get-coordinates/{pincode}", response_model=CoordinateResponse, status_code=status.HTTP_200_OK)
def get_coordinates(pincode: str, resolver: CoordinateResolver = Depends(get_resolver)) -> CoordinateResponse:
    try:
        return lookup_coordinates(pincode, resolver)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
