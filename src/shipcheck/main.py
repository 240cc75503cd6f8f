"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import delivery, health, orders
from .config import settings


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.app_name, root_path="")
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "upstream": settings.shiprocket_base_url,
            "pickup_pincode": settings.pickup_pincode,
            "check_delivery": f"{settings.api_prefix}/check-delivery",
            "coordinates": f"{settings.api_prefix}/get-coordinates/{{pincode}}",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(delivery.router, prefix=settings.api_prefix)
    app.include_router(orders.router, prefix=settings.api_prefix)
    return app


app = create_app()
