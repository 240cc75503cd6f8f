"""Process-wide collaborators handed to the routes through FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..config import Settings, settings
from ..data.known_pincodes import known_coordinates
from ..services.geocoding.resolver import CoordinateResolver, default_strategies
from ..services.shiprocket.client import ShiprocketClient
from ..services.shiprocket.session import CredentialSession


def get_settings() -> Settings:
    return settings


@lru_cache()
def get_session() -> CredentialSession:
    return CredentialSession()


@lru_cache()
def get_resolver() -> CoordinateResolver:
    seed = known_coordinates() if settings.seed_known_coordinates else None
    return CoordinateResolver(default_strategies(), seed=seed)


@lru_cache()
def get_client() -> ShiprocketClient:
    return ShiprocketClient()
