"""Recommendation endpoints for the Storefront API.

This module provides the endpoint that returns product recommendations based
on a user's order history, search history, or product popularity.
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_metrics, get_shop
from storefront.api.metrics import MetricsService
from storefront.api.schemas import RecommendationResponse
from storefront.commerce.models import Product
from storefront.commerce.service import ShopService

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"],
)


@router.get(
    "/{user_id}",
    response_model=Union[RecommendationResponse, List[Product]],
)
def get_recommendations(
    user_id: str,
    limit: Optional[str] = None,
    explain: bool = False,
    shop: ShopService = Depends(get_shop),
    metrics: MetricsService = Depends(get_metrics),
) -> Union[RecommendationResponse, List[Product]]:
    """Get product recommendations for a user.

    Tries the user's order history first, then their search history, then
    falls back to the top-rated products. Only one strategy contributes.

    Args:
        user_id: User ID for which to generate recommendations.
        limit: Number of recommendations to return (default: 5). Zero,
            negative or non-numeric values fall back to the default.
        explain: If True, wrap the products in a response naming the
            strategy that produced them.

    Returns:
        List of recommended products, or a RecommendationResponse when
        ``explain`` is set.

    Example:
        GET /api/v1/recommendations/u1?limit=3
    """
    logger.info(f"Generating recommendations for user {user_id}, limit={limit}")

    result = shop.recommendations(user_id, limit)
    metrics.record_recommendation(result.strategy, result.latency_ms)

    if explain:
        return RecommendationResponse(
            user_id=result.user_id,
            strategy=result.strategy,
            recommendations=result.products,
        )
    return result.products
