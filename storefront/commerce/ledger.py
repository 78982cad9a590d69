"""In-memory ledgers for carts, orders and search history.

The cart ledger serializes every read-modify-write on a user's cart behind a
per-user lock, so add, remove and checkout never interleave for one user.
Orders and search entries are append-only.
"""

import logging
import threading
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional

from storefront.commerce.catalog import Catalog
from storefront.commerce.models import (
    Cart,
    CartLineItem,
    Order,
    SearchEntry,
    utc_now,
)
from storefront.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)

# Configure module logger
logger = logging.getLogger(__name__)


def _require_positive_quantity(quantity: int) -> None:
    if quantity < 1:
        raise ValidationError(
            "quantity must be at least 1", details={"quantity": quantity}
        )


class OrderLedger:
    """Append-only store of completed orders."""

    def __init__(self):
        self._lock = threading.Lock()
        self._orders: List[Order] = []

    def append(self, order: Order) -> None:
        with self._lock:
            self._orders.append(order)

    def for_user(self, user_id: str) -> List[Order]:
        """Return the user's orders, oldest first."""
        with self._lock:
            return [order for order in self._orders if order.user_id == user_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)


class SearchLog:
    """Append-only per-user history of search queries."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, List[SearchEntry]] = defaultdict(list)

    def record(self, user_id: str, query: str) -> SearchEntry:
        entry = SearchEntry(user_id=user_id, query=query)
        with self._lock:
            self._entries[user_id].append(entry)
        logger.debug("Recorded search", extra={"user_id": user_id, "query": query})
        return entry

    def for_user(self, user_id: str) -> List[SearchEntry]:
        """Return the user's searches in recorded order."""
        with self._lock:
            return list(self._entries.get(user_id, []))


class CartLedger:
    """Per-user shopping carts.

    Each user owns at most one cart. The cart is created lazily on the first
    add and keeps its ID across checkouts. Callers always receive copies, so
    the stored carts are only ever changed under the owning user's lock.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._carts: Dict[str, Cart] = {}
        self._user_carts: Dict[str, str] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    def _cart_for(self, user_id: str) -> Optional[Cart]:
        cart_id = self._user_carts.get(user_id)
        if cart_id is None:
            return None
        return self._carts.get(cart_id)

    def compute_total(self, cart: Cart) -> Decimal:
        """Sum current catalog price times quantity over the cart's items.

        Lines whose product no longer resolves contribute nothing.
        """
        total = Decimal("0")
        for item in cart.items:
            product = self.catalog.get(item.product_id)
            if product is not None:
                total += product.price * item.quantity
        return total

    def _touch(self, cart: Cart) -> None:
        cart.total = self.compute_total(cart)
        cart.updated = utc_now()

    def add_item(self, user_id: str, product_id: str, quantity: int) -> Cart:
        """Add ``quantity`` units of a product to the user's cart.

        Stock is checked against the requested quantity only, not against the
        quantity already in the cart.

        Raises:
            ValidationError: If the quantity is below 1 or the product is unknown.
            InsufficientStockError: If catalog stock is below ``quantity``.
        """
        _require_positive_quantity(quantity)

        product = self.catalog.get(product_id)
        if product is None:
            raise ValidationError(
                f"Unknown product '{product_id}'", details={"product_id": product_id}
            )
        if product.stock < quantity:
            raise InsufficientStockError(product_id, quantity, product.stock)

        with self._lock_for(user_id):
            cart = self._cart_for(user_id)
            if cart is None:
                cart = Cart(user_id=user_id)
                self._carts[cart.id] = cart
                self._user_carts[user_id] = cart.id
                logger.info(
                    "Created cart", extra={"user_id": user_id, "cart_id": cart.id}
                )

            item = cart.find_item(product_id)
            if item is not None:
                item.quantity += quantity
            else:
                cart.items.append(
                    CartLineItem(product_id=product_id, quantity=quantity)
                )
            self._touch(cart)

            logger.info(
                "Added item to cart",
                extra={
                    "user_id": user_id,
                    "product_id": product_id,
                    "quantity": quantity,
                    "cart_total": str(cart.total),
                },
            )
            return cart.model_copy(deep=True)

    def remove_item(self, user_id: str, product_id: str, quantity: int) -> Cart:
        """Remove up to ``quantity`` units of a product from the user's cart.

        Removing at least the line's quantity deletes the line. A product that
        is not in the cart leaves the items untouched.

        Raises:
            ValidationError: If the quantity is below 1.
            NotFoundError: If the user has no cart.
        """
        _require_positive_quantity(quantity)

        with self._lock_for(user_id):
            cart = self._cart_for(user_id)
            if cart is None:
                raise NotFoundError("Cart", user_id)

            item = cart.find_item(product_id)
            if item is None:
                logger.debug(
                    "Product not in cart, nothing removed",
                    extra={"user_id": user_id, "product_id": product_id},
                )
            elif quantity >= item.quantity:
                cart.items.remove(item)
            else:
                item.quantity -= quantity
            self._touch(cart)

            logger.info(
                "Removed item from cart",
                extra={
                    "user_id": user_id,
                    "product_id": product_id,
                    "quantity": quantity,
                    "cart_total": str(cart.total),
                },
            )
            return cart.model_copy(deep=True)

    def get_cart(self, user_id: str) -> Cart:
        with self._lock_for(user_id):
            cart = self._cart_for(user_id)
            if cart is None:
                raise NotFoundError("Cart", user_id)
            return cart.model_copy(deep=True)

    def checkout(self, user_id: str, orders: OrderLedger) -> Order:
        """Freeze the user's cart into a completed order and empty the cart.

        The snapshot and the reset happen under the user's lock, so no other
        cart mutation for this user can land in between. Stock is left as is.

        Raises:
            ValidationError: If the user has no cart or the cart is empty.
        """
        with self._lock_for(user_id):
            cart = self._cart_for(user_id)
            if cart is None:
                raise ValidationError("Cart not found", details={"user_id": user_id})
            if cart.is_empty:
                raise ValidationError("Cart is empty", details={"user_id": user_id})

            now = utc_now()
            order = Order(
                user_id=user_id,
                items=tuple(item.model_copy() for item in cart.items),
                total=cart.total,
                created=now,
                completed=now,
            )
            orders.append(order)

            cart.items = []
            cart.total = Decimal("0")
            cart.updated = now

        logger.info(
            "Checked out cart",
            extra={
                "user_id": user_id,
                "order_id": order.id,
                "num_items": len(order.items),
                "order_total": str(order.total),
            },
        )
        return order
