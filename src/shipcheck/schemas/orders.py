"""Quick-order and tracking request/response schemas."""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class OrderItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    sku: str
    units: int = Field(..., ge=1)
    selling_price: float = Field(..., ge=0)


class QuickOrderData(BaseModel):
    """Order fields accepted from the checkout; shipping falls back to billing."""

    model_config = ConfigDict(extra="ignore")

    order_id: str
    courier_id: Optional[Union[int, str]] = Field(
        default=None,
        description="Courier selected by a prior serviceability check.",
    )
    order_date: Optional[str] = None
    pickup_location: Optional[str] = None
    channel_id: Optional[str] = None
    comment: Optional[str] = None

    customer_name: str
    last_name: Optional[str] = None
    billing_address: str
    billing_address_2: Optional[str] = None
    billing_city: str
    billing_pincode: str
    billing_state: str
    billing_country: Optional[str] = None
    billing_email: Optional[str] = None
    billing_phone: str

    shipping_is_billing: Optional[bool] = None
    shipping_customer_name: Optional[str] = None
    shipping_last_name: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_address_2: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_pincode: Optional[str] = None
    shipping_country: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_email: Optional[str] = None
    shipping_phone: Optional[str] = None

    order_items: List[OrderItem]
    payment_method: Optional[str] = None
    shipping_charges: Optional[float] = None
    giftwrap_charges: Optional[float] = None
    transaction_charges: Optional[float] = None
    total_discount: Optional[float] = None
    sub_total: float
    length: Optional[float] = None
    breadth: Optional[float] = None
    height: Optional[float] = None
    weight: Optional[float] = None


class QuickOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_data: QuickOrderData = Field(..., alias="orderData")


class QuickOrderResponse(BaseModel):
    success: bool = True
    order_id: Optional[Any] = None
    shipment_id: Optional[Any] = None
    awb_code: Optional[Any] = None
    courier_name: Optional[str] = None
    data: dict


class TrackingResponse(BaseModel):
    success: bool = True
    tracking_data: Any
