"""Shop service.

The single object that owns the catalog, the cart/order/search ledgers and
the recommendation engine. The API layer is injected with one instance and
calls nothing else.
"""

import logging
from typing import List, Optional, Union

from storefront.commerce.catalog import Catalog
from storefront.commerce.ledger import CartLedger, OrderLedger, SearchLog
from storefront.commerce.models import Cart, Order, Product
from storefront.exceptions import NotFoundError, ValidationError
from storefront.recommender.engine import (
    DEFAULT_LIMIT,
    RecommendationEngine,
    RecommendationResult,
)

# Configure module logger
logger = logging.getLogger(__name__)


def _require_user(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise ValidationError("user_id is required")
    return user_id


class ShopService:
    """In-memory shop: catalog, carts, orders, search history, recommendations."""

    def __init__(self, catalog: Catalog, default_limit: int = DEFAULT_LIMIT):
        self.catalog = catalog
        self.carts = CartLedger(catalog)
        self.orders = OrderLedger()
        self.searches = SearchLog()
        self.engine = RecommendationEngine(catalog, default_limit=default_limit)

        logger.info(
            "Initialized ShopService",
            extra={"num_products": len(catalog), "default_limit": default_limit},
        )

    # ---- catalog ----

    def list_products(self) -> List[Product]:
        return self.catalog.all()

    def get_product(self, product_id: str) -> Product:
        product = self.catalog.get(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def top_products(self, limit: Optional[Union[int, str]] = None) -> List[Product]:
        return self.engine.popular(limit)

    def search_products(
        self, query: Optional[str], user_id: Optional[str] = None
    ) -> List[Product]:
        """Search the catalog by name, description and category.

        Matching is case-sensitive containment. When ``user_id`` is given the
        query is recorded in the user's search history first.

        Raises:
            ValidationError: If the query is empty.
        """
        if not query:
            raise ValidationError("Search query is required")

        if user_id:
            self.searches.record(user_id, query)

        results = [
            product
            for product in self.catalog
            if query in product.name
            or query in product.description
            or query in product.category
        ]
        logger.info(
            "Search completed",
            extra={"query": query, "user_id": user_id, "num_results": len(results)},
        )
        return results

    # ---- carts and orders ----

    def add_to_cart(
        self, user_id: Optional[str], product_id: str, quantity: int
    ) -> Cart:
        return self.carts.add_item(_require_user(user_id), product_id, quantity)

    def remove_from_cart(
        self, user_id: Optional[str], product_id: str, quantity: int
    ) -> Cart:
        return self.carts.remove_item(_require_user(user_id), product_id, quantity)

    def get_cart(self, user_id: str) -> Cart:
        return self.carts.get_cart(user_id)

    def checkout(self, user_id: Optional[str]) -> Order:
        return self.carts.checkout(_require_user(user_id), self.orders)

    def order_history(self, user_id: str) -> List[Order]:
        return self.orders.for_user(user_id)

    # ---- recommendations ----

    def recommendations(
        self, user_id: str, limit: Optional[Union[int, str]] = None
    ) -> RecommendationResult:
        return self.engine.recommend(
            user_id=user_id,
            orders=self.orders.for_user(user_id),
            searches=self.searches.for_user(user_id),
            limit=limit,
        )
