"""Route group exports."""

from . import delivery, health, orders

__all__ = ["delivery", "orders", "health"]
