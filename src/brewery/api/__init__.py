"""Brewery HTTP API package."""

from brewery.api.errors import register_exception_handlers
from brewery.api.routes import beer_router, customer_router, order_router, shipment_router

__all__ = [
    "beer_router",
    "customer_router",
    "order_router",
    "shipment_router",
    "register_exception_handlers",
]
