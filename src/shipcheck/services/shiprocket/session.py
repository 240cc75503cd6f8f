"""Credential lifecycle for the Shiprocket external API."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx

from ...config import settings
from ...errors import AuthenticationError
from ...models.domain import Credential

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CredentialSession:
    """Obtains, caches and re-issues the upstream bearer token.

    The cached credential is swapped as one immutable value under a lock, so a
    concurrent reader sees either the old pair or the new one, never a mix.
    Expiry is checked lazily on every ``acquire``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        email: str | None = None,
        password: str | None = None,
        ttl: timedelta | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.base_url = (base_url or settings.shiprocket_base_url).rstrip("/")
        self.email = email if email is not None else settings.shiprocket_email
        self.password = password if password is not None else settings.shiprocket_password
        self.ttl = ttl or timedelta(days=settings.token_ttl_days)
        self.timeout = timeout if timeout is not None else settings.shiprocket_timeout_seconds
        self._transport = transport
        self._clock = clock
        self._credential: Credential | None = None
        self._lock = threading.Lock()

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def acquire(self) -> Credential:
        with self._lock:
            current = self._credential
            if current is not None and current.is_valid(self._clock()):
                return current
            credential = self._login()
            self._credential = credential
            return credential

    def token(self) -> str:
        return self.acquire().token

    def invalidate(self, token: str | None = None) -> None:
        """Drop the cached credential.

        With ``token`` given, only a credential still holding that token is
        dropped, so a late rejection of an old token keeps a newer one.
        """
        with self._lock:
            current = self._credential
            if current is None or (token is not None and current.token != token):
                return
            logger.info("Discarding cached Shiprocket credential")
            self._credential = None

    def _login(self) -> Credential:
        url = f"{self.base_url}/auth/login"
        try:
            with httpx.Client(timeout=httpx.Timeout(self.timeout), transport=self._transport) as client:
                response = client.post(url, json={"email": self.email, "password": self.password})
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Shiprocket login failed with status {exc.response.status_code}: {exc.response.text}")
            raise AuthenticationError("Failed to authenticate with Shiprocket") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Shiprocket login failed: {exc}")
            raise AuthenticationError("Failed to authenticate with Shiprocket") from exc

        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            logger.error("Shiprocket login response did not include a token")
            raise AuthenticationError("Failed to authenticate with Shiprocket")

        logger.info("Shiprocket login successful")
        return Credential(token=token, expires_at=self._clock() + self.ttl)
