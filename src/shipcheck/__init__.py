"""Delivery serviceability facade over the Shiprocket courier API."""

__version__ = "0.1.0"
