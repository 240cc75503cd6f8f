"""Health endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from ...config import Settings
from ..dependencies import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(config: Settings = Depends(get_settings)) -> dict:
    """Liveness probe that never calls upstream services."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "pickup_location": {
            "pincode": config.pickup_pincode,
            "lat": config.pickup_latitude,
            "lng": config.pickup_longitude,
        },
        "serviceable_pincodes": len(config.serviceable_pincodes),
    }
