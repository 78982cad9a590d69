"""Request and response models for the Storefront API."""

from typing import List

from pydantic import BaseModel, Field

from storefront.commerce.models import Product


class CartItemRequest(BaseModel):
    """Body of add-to-cart and remove-from-cart requests.

    Quantity bounds are enforced by the cart ledger, not here, so a bad
    quantity is reported as a ValidationError like every other cart rule.
    """

    product_id: str = Field(..., description="Product ID", examples=["1"])
    quantity: int = Field(default=1, description="Quantity", examples=[2])


class RecommendationResponse(BaseModel):
    """Explained recommendation response.

    Attributes:
        user_id: The user ID for which recommendations were generated.
        strategy: Which tier produced them: orders, search or popular.
        recommendations: Recommended products, best first.
    """

    user_id: str = Field(..., description="User ID for recommendations")
    strategy: str = Field(..., description="Strategy that produced the results")
    recommendations: List[Product] = Field(
        ..., description="List of recommended products"
    )


class ErrorResponse(BaseModel):
    """Body returned for every rejected operation."""

    error: str = Field(..., examples=["ValidationError"])
    message: str
    details: dict = Field(default_factory=dict)
