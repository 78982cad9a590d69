"""Catalog endpoints for the Storefront API.

This module provides read-only endpoints over the product catalog: the full
listing, the top-rated products, a single product, and text search.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_shop
from storefront.api.schemas import ErrorResponse
from storefront.commerce.models import Product
from storefront.commerce.service import ShopService

router = APIRouter(tags=["products"])


@router.get("/products", response_model=List[Product])
def list_products(shop: ShopService = Depends(get_shop)) -> List[Product]:
    """Get all products in catalog order."""
    return shop.list_products()


# Declared before /products/{product_id} so "top" is not taken as an ID
@router.get("/products/top", response_model=List[Product])
def top_products(
    limit: Optional[str] = None,
    shop: ShopService = Depends(get_shop),
) -> List[Product]:
    """Get the top-rated products.

    Args:
        limit: Number of products to return (default: 5). Zero, negative or
            non-numeric values fall back to the default.

    Returns:
        Products sorted by rating, highest first, ties by product ID.
    """
    return shop.top_products(limit)


@router.get(
    "/products/{product_id}",
    response_model=Product,
    responses={404: {"model": ErrorResponse}},
)
def get_product(product_id: str, shop: ShopService = Depends(get_shop)) -> Product:
    """Get a single product by ID."""
    return shop.get_product(product_id)


@router.get(
    "/search",
    response_model=List[Product],
    tags=["search"],
    responses={400: {"model": ErrorResponse}},
)
def search_products(
    q: Optional[str] = None,
    user_id: Optional[str] = None,
    shop: ShopService = Depends(get_shop),
) -> List[Product]:
    """Search products by name, description or category.

    Matching is case-sensitive. When ``user_id`` is given the query is saved
    to the user's search history and later feeds their recommendations.

    Example:
        GET /api/v1/search?q=iPhone&user_id=u1
    """
    return shop.search_products(q, user_id)
