"""Serviceability request/response schemas."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

_QUOTE_FIELDS = (
    "delivery_time",
    "delivery_charge",
    "courier_name",
    "courier_id",
    "etd",
    "is_hyperlocal",
    "service_type",
    "etd_hours",
    "total_couriers_available",
    "hyperlocal_couriers_available",
)


class ServiceabilityRequest(BaseModel):
    pincode: Optional[Union[str, int]] = Field(default=None, description="Six-digit delivery pincode.")
    lat: Optional[float] = Field(default=None, ge=-90, le=90, description="Explicit delivery latitude; used with lng.")
    lng: Optional[float] = Field(default=None, ge=-180, le=180, description="Explicit delivery longitude; used with lat.")
    weight: Optional[float] = Field(default=None, gt=0, description="Shipment weight in kg.")
    cod: bool = Field(default=False, description="Cash on delivery.")


class ServiceabilityResponse(BaseModel):
    """Either a complete success carrying one selected courier or a bare failure."""

    success: bool
    message: Optional[str] = None
    delivery_time: Optional[str] = None
    delivery_charge: Optional[float] = None
    courier_name: Optional[str] = None
    courier_id: Optional[Union[int, str]] = None
    etd: Optional[str] = None
    is_hyperlocal: Optional[bool] = None
    service_type: Optional[str] = None
    etd_hours: Optional[float] = None
    total_couriers_available: Optional[int] = None
    hyperlocal_couriers_available: Optional[int] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "ServiceabilityResponse":
        if self.success:
            missing = [name for name in _QUOTE_FIELDS if name != "courier_id" and getattr(self, name) is None]
            if missing:
                raise ValueError(f"Successful result is missing fields: {', '.join(missing)}")
        else:
            present = [name for name in _QUOTE_FIELDS if getattr(self, name) is not None]
            if present:
                raise ValueError(f"Failed result must not carry quote fields: {', '.join(present)}")
            if not self.message:
                raise ValueError("Failed result requires a message.")
        return self

    @classmethod
    def failure(cls, message: str) -> "ServiceabilityResponse":
        return cls(success=False, message=message)


class CoordinatesModel(BaseModel):
    lat: str
    lng: str


class CoordinateResponse(BaseModel):
    success: bool = True
    pincode: str
    coordinates: CoordinatesModel
    source: str
    is_cached: bool
