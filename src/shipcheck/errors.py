"""Error taxonomy for the serviceability engine."""

from __future__ import annotations


class ShipcheckError(Exception):
    """Base class for errors raised by the service."""


class ValidationError(ShipcheckError, ValueError):
    """Input rejected before any network call (e.g. malformed pincode)."""


class AuthenticationError(ShipcheckError):
    """The upstream credential could not be obtained or was rejected."""


class UpstreamUnavailable(ShipcheckError):
    """An outbound call failed (timeout, network error or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
