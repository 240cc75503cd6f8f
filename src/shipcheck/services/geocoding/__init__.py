"""Pincode geocoding."""

from .base import CoordinateStrategy
from .resolver import CoordinateResolver, Resolution

__all__ = ["CoordinateStrategy", "CoordinateResolver", "Resolution"]
