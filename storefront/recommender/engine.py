"""Three-tier recommendation engine.

Recommendations come from exactly one of three strategies, tried in order:

1. ``orders``: products in the categories of everything the user has ordered
2. ``search``: products whose name or description contains a past query
3. ``popular``: the catalog ranked by rating, highest first

The first strategy that yields at least one product answers the request.
The engine only reads the catalog and the ledgers.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from storefront.commerce.catalog import Catalog
from storefront.commerce.models import Order, Product, SearchEntry

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

STRATEGY_ORDERS = "orders"
STRATEGY_SEARCH = "search"
STRATEGY_POPULAR = "popular"


@dataclass
class RecommendationResult:
    """Products recommended for a user and the strategy that produced them."""

    user_id: str
    products: List[Product] = field(default_factory=list)
    strategy: str = STRATEGY_POPULAR
    latency_ms: float = 0.0


def normalize_limit(
    limit: Optional[Union[int, str]], default: int = DEFAULT_LIMIT
) -> int:
    """Return ``limit`` as an int.

    Missing, unparseable and non-positive values map to ``default``, so a
    query string like ``?limit=many`` is answered rather than rejected.
    """
    if limit is None:
        return default
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return value


def rank_by_rating(products: Iterable[Product], limit: int) -> List[Product]:
    """Return up to ``limit`` products, highest rating first.

    Ties are broken by product ID so the ordering is deterministic.
    """
    ranked = sorted(products, key=lambda p: p.id)
    ranked.sort(key=lambda p: p.rating, reverse=True)
    return ranked[:limit]


def recommend_from_orders(
    catalog: Catalog, orders: List[Order], limit: int
) -> List[Product]:
    """Recommend products sharing a category with anything the user ordered."""
    category_counts: Counter = Counter()
    for order in orders:
        for item in order.items:
            product = catalog.get(item.product_id)
            if product is not None:
                category_counts[product.category] += 1

    if not category_counts:
        return []

    recommendations = []
    for product in catalog:
        if len(recommendations) >= limit:
            break
        if category_counts[product.category] > 0:
            recommendations.append(product)
    return recommendations


def recommend_from_searches(
    catalog: Catalog, searches: List[SearchEntry], limit: int
) -> List[Product]:
    """Recommend products whose name or description contains a past query.

    Queries are scanned in recorded order. Unlike a plain append of every
    match, a product matched by several queries appears only once.
    """
    recommendations: List[Product] = []
    seen = set()
    for search in searches:
        for product in catalog:
            if len(recommendations) >= limit:
                return recommendations
            if product.id in seen:
                continue
            if search.query in product.name or search.query in product.description:
                recommendations.append(product)
                seen.add(product.id)
    return recommendations


class RecommendationEngine:
    """Produces recommendations from a catalog and a user's history."""

    def __init__(self, catalog: Catalog, default_limit: int = DEFAULT_LIMIT):
        self.catalog = catalog
        self.default_limit = default_limit

    def popular(self, limit: Optional[Union[int, str]] = None) -> List[Product]:
        """Return the top-rated products."""
        return rank_by_rating(self.catalog, normalize_limit(limit, self.default_limit))

    def recommend(
        self,
        user_id: str,
        orders: List[Order],
        searches: List[SearchEntry],
        limit: Optional[Union[int, str]] = None,
    ) -> RecommendationResult:
        """Get recommendations for a user.

        Args:
            user_id: User the recommendations are for.
            orders: The user's orders, oldest first.
            searches: The user's searches in recorded order.
            limit: Maximum number of products; missing, unparseable or
                non-positive values fall back to the default.

        Returns:
            RecommendationResult with at most ``limit`` products and the
            strategy that produced them.
        """
        start_time = time.time()
        limit = normalize_limit(limit, self.default_limit)

        products: List[Product] = []
        strategy = STRATEGY_POPULAR
        if orders:
            products = recommend_from_orders(self.catalog, orders, limit)
            strategy = STRATEGY_ORDERS
        if not products and searches:
            products = recommend_from_searches(self.catalog, searches, limit)
            strategy = STRATEGY_SEARCH
        if not products:
            products = rank_by_rating(self.catalog, limit)
            strategy = STRATEGY_POPULAR

        latency_ms = (time.time() - start_time) * 1000

        logger.info(
            "Recommendations generated",
            extra={
                "user_id": user_id,
                "strategy": strategy,
                "limit": limit,
                "num_recommendations": len(products),
                "latency_ms": round(latency_ms, 2),
            },
        )

        return RecommendationResult(
            user_id=user_id,
            products=products,
            strategy=strategy,
            latency_ms=latency_ms,
        )
