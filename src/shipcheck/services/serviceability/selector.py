"""Courier selection and delivery-speed tier classification."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ...models.domain import CourierQuote, DeliveryEstimate, NoCourier, Selected, SelectionOutcome

UNKNOWN_ETD_HOURS = 999
DEFAULT_ETD_HOURS = 48


def classify_eta(hours: float, etd_text: Optional[str] = None) -> DeliveryEstimate:
    """Map ETA hours to a label, display text, tier and hyperlocal flag."""

    if hours <= 4:
        return DeliveryEstimate("2-4 hours", "Same Day (2-4 hours)", "quick", True)
    if hours <= 8:
        return DeliveryEstimate("4-8 hours", "Same Day (4-8 hours)", "quick", True)
    if hours <= 12:
        return DeliveryEstimate("Same Day", "Same Day Delivery", "express", True)
    if hours <= 24:
        return DeliveryEstimate("Next Day", "Next Day Delivery", "fast", False)
    days = math.ceil(hours / 24)
    return DeliveryEstimate(f"{days} days", etd_text or f"Delivery in {days} days", "standard", False)


def is_qualifying(quote: CourierQuote, keywords: Sequence[str], quick_hours: float = 12) -> bool:
    name = quote.courier_name.lower()
    if any(keyword in name for keyword in keywords):
        return True
    hours = quote.etd_hours if quote.etd_hours else UNKNOWN_ETD_HOURS
    return hours <= quick_hours


def select_courier(
    quotes: Sequence[CourierQuote],
    keywords: Sequence[str],
    quick_hours: float = 12,
) -> SelectionOutcome:
    if not quotes:
        return NoCourier()

    qualifying = [quote for quote in quotes if is_qualifying(quote, keywords, quick_hours)]
    # Upstream lists couriers best-first, so order is kept in both branches.
    chosen = qualifying[0] if qualifying else quotes[0]
    hours = chosen.etd_hours if chosen.etd_hours else DEFAULT_ETD_HOURS
    return Selected(
        quote=chosen,
        estimate=classify_eta(hours, chosen.etd),
        etd_hours=hours,
        qualifying_count=len(qualifying),
    )
