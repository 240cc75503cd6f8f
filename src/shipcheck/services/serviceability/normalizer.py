"""Normalize the upstream serviceability payload variants into courier quotes."""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from ...models.domain import CourierQuote

logger = logging.getLogger(__name__)


class ResponseShape(str, Enum):
    WRAPPED_LIST = "wrapped_list"  # {status: true, data: [...]}
    WRAPPED_COMPANIES = "wrapped_companies"  # {status: 200, data: {available_courier_companies: [...]}}
    BARE_LIST = "bare_list"  # {data: [...]}
    BARE_COMPANIES = "bare_companies"  # {available_courier_companies: [...]}
    UNRECOGNIZED = "unrecognized"


def _first_present(entry: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = entry.get(key)
        if value is not None and value != "":
            return value
    return None


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = value if isinstance(value, float) else float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def classify_response(raw: Any) -> ResponseShape:
    if not isinstance(raw, dict):
        return ResponseShape.UNRECOGNIZED

    data = raw.get("data")
    # `True == 1` in Python, so the boolean status must be checked by identity.
    if raw.get("status") is True and isinstance(data, list):
        return ResponseShape.WRAPPED_LIST
    if (
        raw.get("status") == 200
        and isinstance(data, dict)
        and isinstance(data.get("available_courier_companies"), list)
    ):
        return ResponseShape.WRAPPED_COMPANIES
    if isinstance(data, list):
        return ResponseShape.BARE_LIST
    if isinstance(raw.get("available_courier_companies"), list):
        return ResponseShape.BARE_COMPANIES
    return ResponseShape.UNRECOGNIZED


def _from_rate_entry(entry: Mapping[str, Any]) -> CourierQuote:
    return CourierQuote(
        courier_name=_as_text(entry.get("courier_name")) or "",
        courier_id=_first_present(entry, "courier_company_id", "courier_id"),
        price=_as_number(_first_present(entry, "rates", "freight_charge", "rate")),
        etd_hours=_as_number(entry.get("etd_hours")),
        etd=_as_text(entry.get("etd")),
        distance=_as_number(entry.get("distance")),
        rto_rate=_as_number(entry.get("rto_rates")),
    )


def _from_company_entry(entry: Mapping[str, Any]) -> CourierQuote:
    return CourierQuote(
        courier_name=_as_text(entry.get("courier_name")) or "",
        courier_id=entry.get("courier_company_id"),
        price=_as_number(_first_present(entry, "freight_charge", "rate")),
        etd_hours=_as_number(entry.get("etd_hours")),
        etd=_as_text(entry.get("etd")),
        distance=_as_number(entry.get("distance")),
        rto_rate=_as_number(_first_present(entry, "rto_charges", "rto_rates")),
    )


def _convert(entries: Iterable[Any], converter) -> list[CourierQuote]:
    return [converter(entry) for entry in entries if isinstance(entry, Mapping)]


def normalize(raw: Any) -> list[CourierQuote]:
    """Return the courier quotes in upstream order; empty for unknown payloads."""

    shape = classify_response(raw)
    match shape:
        case ResponseShape.WRAPPED_LIST | ResponseShape.BARE_LIST:
            quotes = _convert(raw["data"], _from_rate_entry)
        case ResponseShape.WRAPPED_COMPANIES:
            quotes = _convert(raw["data"]["available_courier_companies"], _from_company_entry)
        case ResponseShape.BARE_COMPANIES:
            quotes = _convert(raw["available_courier_companies"], _from_company_entry)
        case ResponseShape.UNRECOGNIZED:
            logger.warning("Unrecognized serviceability payload; treating as no couriers")
            quotes = []
    logger.debug(f"Normalized {len(quotes)} quotes from {shape.value} payload")
    return quotes
