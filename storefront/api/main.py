"""FastAPI application main module.

This module builds the FastAPI application for the Storefront service: it
seeds the catalog, creates the shop service, wires the routers, error
handlers and middleware, and exposes the health and metrics endpoints.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.api.config import Settings, get_settings
from storefront.api.logging_config import RequestLoggingMiddleware, setup_logging
from storefront.api.metrics import MetricsService
from storefront.api.routes import cart, products, recommend
from storefront.commerce.catalog import build_catalog
from storefront.commerce.service import ShopService
from storefront.exceptions import StorefrontException

logger = logging.getLogger(__name__)


async def storefront_exception_handler(
    request: Request, exc: StorefrontException
) -> JSONResponse:
    """Translate a core error into its status code and JSON error body."""
    logger.warning(
        "Request rejected",
        extra={
            "path": str(request.url.path),
            "error_kind": exc.kind,
            "error": exc.message,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    shop: Optional[ShopService] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. Loaded from the environment if None.
        shop: Shop service to serve. Built from ``settings.catalog_csv`` (or
            the sample products) if None.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    if shop is None:
        shop = ShopService(
            build_catalog(settings.catalog_csv),
            default_limit=settings.default_limit,
        )

    app = FastAPI(
        title=settings.project_name,
        description=(
            "E-commerce API with product catalog, shopping cart, orders, "
            "search and recommendations"
        ),
        version=__version__,
    )
    app.state.settings = settings
    app.state.shop = shop
    app.state.metrics = MetricsService()

    app.add_exception_handler(StorefrontException, storefront_exception_handler)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products.router, prefix=settings.api_prefix)
    app.include_router(cart.router, prefix=settings.api_prefix)
    app.include_router(recommend.router, prefix=settings.api_prefix)

    @app.get("/health", tags=["health"])
    def health() -> Dict[str, str]:
        """Health check endpoint.

        Example:
            >>> response = client.get("/health")
            >>> assert response.json()["status"] == "healthy"
        """
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.project_name,
            "version": __version__,
        }

    @app.get("/metrics", tags=["health"])
    def get_metrics(request: Request) -> Dict[str, Any]:
        """Recommendation call counts per strategy and latency figures."""
        return request.app.state.metrics.get_metrics()

    return app


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.json_logs)
    logger.info(
        "Starting Storefront API",
        extra={"host": settings.host, "port": settings.port},
    )
    uvicorn.run(
        "storefront.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
