"""FastAPI dependencies giving route handlers the application's services."""

from fastapi import Request

from storefront.api.metrics import MetricsService
from storefront.commerce.service import ShopService


def get_shop(request: Request) -> ShopService:
    """Return the shop service owned by the running application."""
    return request.app.state.shop


def get_metrics(request: Request) -> MetricsService:
    return request.app.state.metrics
