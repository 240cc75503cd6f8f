"""Quick-order creation and shipment tracking pass-through endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import AuthenticationError, UpstreamUnavailable
from ...schemas.orders import QuickOrderRequest, QuickOrderResponse, TrackingResponse
from ...services.shiprocket.client import ShiprocketClient
from ...services.shiprocket.session import CredentialSession
from ..dependencies import get_client, get_session

router = APIRouter(tags=["orders"])
logger = logging.getLogger(__name__)


def _auth_failed(session: CredentialSession, token: str | None, exc: AuthenticationError) -> HTTPException:
    session.invalidate(token)
    logger.warning(f"Shiprocket authentication failed: {exc}")
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication failed. Please try again.",
    )


@router.post("/create-quick-order", response_model=QuickOrderResponse, status_code=status.HTTP_200_OK)
def create_quick_order(
    payload: QuickOrderRequest,
    session: CredentialSession = Depends(get_session),
    client: ShiprocketClient = Depends(get_client),
) -> QuickOrderResponse:
    order = payload.order_data
    if order.courier_id is None or order.courier_id == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="courier_id is required. Please check serviceability first.",
        )
    token = None
    try:
        token = session.token()
        data = client.create_quick_order(order, token)
    except AuthenticationError as exc:
        raise _auth_failed(session, token, exc) from exc
    except UpstreamUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to create quick order: {exc}",
        ) from exc

    body = data if isinstance(data, dict) else {"response": data}
    return QuickOrderResponse(
        order_id=body.get("order_id"),
        shipment_id=body.get("shipment_id"),
        awb_code=body.get("awb_code"),
        courier_name=body.get("courier_name"),
        data=body,
    )


@router.get("/track-order/{shipment_id}", response_model=TrackingResponse, status_code=status.HTTP_200_OK)
def track_order(
    shipment_id: str,
    session: CredentialSession = Depends(get_session),
    client: ShiprocketClient = Depends(get_client),
) -> TrackingResponse:
    token = None
    try:
        token = session.token()
        tracking = client.track_shipment(shipment_id, token)
    except AuthenticationError as exc:
        raise _auth_failed(session, token, exc) from exc
    except UpstreamUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to track order: {exc}",
        ) from exc
    return TrackingResponse(tracking_data=tracking)
