"""Storefront: demonstration e-commerce backend.

This package provides an in-memory shop service with a product catalog,
per-user shopping carts, checkout, order history and a tiered product
recommendation engine, served over a FastAPI application.

Modules:
    api: FastAPI application, routes, logging and metrics
    commerce: catalog, cart/order/search ledgers and the shop service
    recommender: three-tier recommendation engine
"""

__version__ = "0.1.0"
