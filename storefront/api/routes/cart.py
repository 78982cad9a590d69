"""Cart and checkout endpoints for the Storefront API."""

from typing import List, Optional

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_shop
from storefront.api.schemas import CartItemRequest, ErrorResponse
from storefront.commerce.models import Cart, Order
from storefront.commerce.service import ShopService

router = APIRouter(tags=["cart"])


@router.post(
    "/cart/add",
    response_model=Cart,
    responses={400: {"model": ErrorResponse}},
)
def add_to_cart(
    item: CartItemRequest,
    user_id: Optional[str] = None,
    shop: ShopService = Depends(get_shop),
) -> Cart:
    """Add a product to the user's cart, creating the cart if needed.

    Example:
        POST /api/v1/cart/add?user_id=u1  {"product_id": "1", "quantity": 2}
    """
    return shop.add_to_cart(user_id, item.product_id, item.quantity)


@router.delete(
    "/cart/remove",
    response_model=Cart,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def remove_from_cart(
    item: CartItemRequest,
    user_id: Optional[str] = None,
    shop: ShopService = Depends(get_shop),
) -> Cart:
    """Remove a quantity of a product from the user's cart."""
    return shop.remove_from_cart(user_id, item.product_id, item.quantity)


@router.get(
    "/cart/{user_id}",
    response_model=Cart,
    responses={404: {"model": ErrorResponse}},
)
def get_cart(user_id: str, shop: ShopService = Depends(get_shop)) -> Cart:
    return shop.get_cart(user_id)


@router.post(
    "/checkout",
    response_model=Order,
    tags=["orders"],
    responses={400: {"model": ErrorResponse}},
)
def checkout(
    user_id: Optional[str] = None,
    shop: ShopService = Depends(get_shop),
) -> Order:
    """Turn the user's cart into a completed order and empty the cart."""
    return shop.checkout(user_id)


@router.get("/orders/{user_id}", response_model=List[Order], tags=["orders"])
def order_history(user_id: str, shop: ShopService = Depends(get_shop)) -> List[Order]:
    """Get the user's orders, oldest first. Empty when there are none."""
    return shop.order_history(user_id)
