"""HTTP client for the Shiprocket courier endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from ...config import settings
from ...errors import AuthenticationError, UpstreamUnavailable
from ...models.domain import Coordinate
from ...schemas.orders import QuickOrderData

logger = logging.getLogger(__name__)


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}


def build_quick_order_payload(order: QuickOrderData) -> dict[str, Any]:
    """Translate checkout order data into the quick-ship request body."""

    billing_country = order.billing_country or "India"
    return {
        "order_id": order.order_id,
        "order_date": order.order_date or date.today().isoformat(),
        "pickup_location": order.pickup_location or "Primary",
        "channel_id": order.channel_id or "",
        "comment": order.comment or "Hyperlocal Quick Delivery",
        "billing_customer_name": order.customer_name,
        "billing_last_name": order.last_name or "",
        "billing_address": order.billing_address,
        "billing_address_2": order.billing_address_2 or "",
        "billing_city": order.billing_city,
        "billing_pincode": order.billing_pincode,
        "billing_state": order.billing_state,
        "billing_country": billing_country,
        "billing_email": order.billing_email,
        "billing_phone": order.billing_phone,
        "shipping_is_billing": order.shipping_is_billing is not False,
        "shipping_customer_name": order.shipping_customer_name or order.customer_name,
        "shipping_last_name": order.shipping_last_name or order.last_name or "",
        "shipping_address": order.shipping_address or order.billing_address,
        "shipping_address_2": order.shipping_address_2 or order.billing_address_2 or "",
        "shipping_city": order.shipping_city or order.billing_city,
        "shipping_pincode": order.shipping_pincode or order.billing_pincode,
        "shipping_country": order.shipping_country or billing_country,
        "shipping_state": order.shipping_state or order.billing_state,
        "shipping_email": order.shipping_email or order.billing_email,
        "shipping_phone": order.shipping_phone or order.billing_phone,
        "order_items": [item.model_dump() for item in order.order_items],
        "payment_method": order.payment_method or "Prepaid",
        "shipping_charges": order.shipping_charges or 0,
        "giftwrap_charges": order.giftwrap_charges or 0,
        "transaction_charges": order.transaction_charges or 0,
        "total_discount": order.total_discount or 0,
        "sub_total": order.sub_total,
        "length": order.length or 10,
        "breadth": order.breadth or 10,
        "height": order.height or 10,
        "weight": order.weight or settings.default_weight_kg,
        "courier_id": order.courier_id,
    }


class ShiprocketClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.shiprocket_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.shiprocket_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def check_serviceability(
        self,
        *,
        pickup: Coordinate,
        delivery: Coordinate,
        pickup_postcode: str,
        delivery_postcode: str,
        weight: float,
        cod: bool,
        token: str,
    ) -> dict | None:
        """Fetch raw courier quotes for a pickup/delivery pair.

        Both postcodes and coordinates are sent; the hyperlocal flag is always
        on. Failures are logged and reported as ``None`` ("not serviceable"),
        except a rejected credential which raises ``AuthenticationError``.
        """
        params = {
            "pickup_postcode": pickup_postcode,
            "delivery_postcode": delivery_postcode,
            "weight": weight,
            "cod": 1 if cod else 0,
            "is_new_hyperlocal": 1,
            "lat_from": pickup.latitude,
            "long_from": pickup.longitude,
            "lat_to": delivery.latitude,
            "long_to": delivery.longitude,
        }
        url = f"{self.base_url}/courier/serviceability/"
        logger.info(f"Checking serviceability {pickup_postcode} -> {delivery_postcode}")
        logger.debug(
            f"Pickup: {pickup.latitude}, {pickup.longitude}; delivery: {delivery.latitude}, {delivery.longitude}"
        )

        client = self._get_client()
        try:
            response = client.get(url, params=params, headers=_auth_headers(token))
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 401:
                logger.warning("Shiprocket rejected the bearer token during serviceability check")
                raise AuthenticationError("Shiprocket rejected the credential") from exc
            logger.error(
                f"Serviceability check failed with status {exc.response.status_code}: {exc.response.text}"
            )
            return None
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Serviceability check error: {exc}")
            return None
        finally:
            client.close()

        if not isinstance(data, dict):
            logger.warning(f"Unexpected serviceability payload type {type(data).__name__}")
            return None
        logger.info(f"Serviceability check successful for {delivery_postcode}")
        return data

    def create_quick_order(self, order: QuickOrderData, token: str) -> dict:
        url = f"{self.base_url}/orders/create/quick-ship"
        logger.info(f"Creating quick order {order.order_id} for courier_id {order.courier_id}")
        data = self._send("POST", url, token, json=build_quick_order_payload(order))
        logger.info(f"Quick order {order.order_id} created")
        return data

    def track_shipment(self, shipment_id: str, token: str) -> Any:
        url = f"{self.base_url}/courier/track/shipment/{shipment_id}"
        return self._send("GET", url, token)

    def _send(self, method: str, url: str, token: str, **kwargs: Any) -> Any:
        client = self._get_client()
        try:
            response = client.request(method, url, headers=_auth_headers(token), **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 401:
                raise AuthenticationError("Shiprocket rejected the credential") from exc
            logger.error(f"Shiprocket {method} {url} failed with status {status_code}: {exc.response.text}")
            raise UpstreamUnavailable(
                f"Shiprocket returned HTTP {status_code}", status_code=status_code
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Shiprocket {method} {url} failed: {exc}")
            raise UpstreamUnavailable(f"Shiprocket request failed: {exc}") from exc
        finally:
            client.close()
