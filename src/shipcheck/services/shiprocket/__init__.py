"""Shiprocket external API access."""

from .client import ShiprocketClient
from .session import CredentialSession

__all__ = ["ShiprocketClient", "CredentialSession"]
