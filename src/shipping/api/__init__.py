"""Shipping domain API package."""

from shipping.api.routes import cargo_router, handling_router, location_router

__all__ = ["cargo_router", "location_router", "handling_router"]
