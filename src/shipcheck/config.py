"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SHIPCHECK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Shipcheck Delivery Serviceability API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")

    # Shiprocket upstream
    shiprocket_base_url: str = Field(
        default="https://apiv2.shiprocket.in/v1/external",
        description="Base URL of the Shiprocket external API.",
    )
    shiprocket_email: Optional[str] = Field(default=None, description="API user email used for login.")
    shiprocket_password: Optional[str] = Field(default=None, description="API user password used for login.")
    shiprocket_timeout_seconds: float = Field(default=15.0, gt=0.0)
    token_ttl_days: int = Field(default=9, ge=1, description="Lifetime assumed for an issued token.")

    # Warehouse / pickup point
    pickup_pincode: str = Field(default="110077", pattern=r"^\d{6}$")
    pickup_latitude: str = "28.4595"
    pickup_longitude: str = "77.0266"

    # Shipment defaults
    default_weight_kg: float = Field(default=0.5, gt=0.0)
    default_delivery_charge: float = Field(default=49.0, ge=0.0)
    quick_delivery_max_hours: float = Field(default=12.0, ge=0.0)
    hyperlocal_courier_keywords: tuple[str, ...] = Field(
        default=(
            "quick",
            "shadowfax",
            "dunzo",
            "borzo",
            "ola",
            "flash",
            "loadshare",
            "rapido",
            "wefast",
            "porter",
            "delhivery",
            "ecom",
        ),
        description="Courier name fragments treated as hyperlocal/quick providers.",
    )
    serviceable_pincodes: tuple[str, ...] = Field(
        default=(),
        description="Allow-list of delivery pincodes. Empty means every pincode is checked upstream.",
    )
    support_phone: str = Field(default="1234567890", description="Contact number shown for unserved pincodes.")

    # Geocoding
    geocoder_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Nominatim-compatible search API.",
    )
    postal_directory_base_url: str = Field(
        default="https://api.postalpincode.in",
        description="India Post pincode directory API.",
    )
    geocoder_user_agent: str = "shipcheck/1.0 (delivery serviceability)"
    geocoder_timeout_seconds: float = Field(default=5.0, gt=0.0)
    fallback_latitude: str = "28.6139"
    fallback_longitude: str = "77.2090"
    seed_known_coordinates: bool = Field(
        default=True,
        description="Pre-populate the coordinate cache with the bundled Delhi pincode table.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("*",),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator(
        "frontend_allowed_origins",
        "hyperlocal_courier_keywords",
        "serviceable_pincodes",
        mode="before",
    )
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        # Return empty tuple if value is None or empty
        return tuple()

    @field_validator("hyperlocal_courier_keywords", mode="after")
    @classmethod
    def _lowercase_keywords(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(item.lower() for item in value)


settings = Settings()
