"""FastAPI application module for Storefront.

This module contains the FastAPI application, route handlers, and API
endpoints for the shop service. It provides RESTful interfaces for the
catalog, carts, checkout, order history, search and recommendations.
"""
