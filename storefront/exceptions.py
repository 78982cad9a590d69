"""Custom exceptions for Storefront.

Defines the discriminated error kinds raised by the shop core. Each carries
the HTTP status code the API layer answers with.
"""

from typing import Any, Dict, Optional


class StorefrontException(Exception):
    """Base exception for Storefront errors."""

    kind = "StorefrontError"

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Render the error as the API error body."""
        return {
            "error": self.kind,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(StorefrontException):
    """Raised on malformed or missing input.

    Covers a missing user id, an unknown product id, an empty search query,
    a non-positive quantity and checkout of a missing or empty cart.
    """

    kind = "ValidationError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class NotFoundError(StorefrontException):
    """Raised when a referenced cart or product does not exist."""

    kind = "NotFound"

    def __init__(self, resource: str, identifier: str):
        message = f"{resource} '{identifier}' not found"
        super().__init__(
            message=message,
            status_code=404,
            details={"resource": resource.lower(), "id": identifier},
        )


class InsufficientStockError(StorefrontException):
    """Raised when the requested quantity exceeds current catalog stock."""

    kind = "InsufficientStock"

    def __init__(self, product_id: str, requested: int, available: int):
        message = (
            f"Insufficient stock for product '{product_id}': "
            f"requested {requested}, available {available}"
        )
        super().__init__(
            message=message,
            status_code=400,
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )


class CatalogLoadError(StorefrontException):
    """Raised when a catalog file cannot be loaded at startup."""

    kind = "CatalogLoadError"

    def __init__(self, path: str, reason: str):
        message = f"Failed to load catalog from '{path}': {reason}"
        super().__init__(
            message=message,
            status_code=500,
            details={"path": path, "reason": reason},
        )
