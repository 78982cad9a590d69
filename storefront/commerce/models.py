"""Domain models for the shop core.

Pydantic models shared by the ledgers, the recommendation engine and the API
layer. Money is held as ``Decimal`` and rendered as a JSON number.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

ORDER_STATUS_COMPLETED = "completed"


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Return a fresh random identifier."""
    return str(uuid.uuid4())


class Product(BaseModel):
    """A purchasable catalog product. Immutable after seeding."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Product ID", examples=["1"])
    name: str = Field(..., description="Product name", examples=["iPhone 15 Pro"])
    description: str = Field(default="", description="Product description")
    price: Money = Field(..., ge=0, description="Unit price", examples=[999.99])
    category: str = Field(default="", description="Category label")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    rating: float = Field(default=0.0, description="Average rating, 0-5")
    image_url: str = Field(default="", description="Image reference")


class CartLineItem(BaseModel):
    """A (product, quantity) pair inside a cart or an order snapshot."""

    product_id: str = Field(..., description="Product ID", examples=["1"])
    quantity: int = Field(..., ge=1, description="Quantity", examples=[2])


class Cart(BaseModel):
    """A user's shopping cart.

    The total is derived from the line items and current catalog prices; it
    is recomputed on every mutation and never trusted on its own.
    """

    id: str = Field(default_factory=new_id, description="Cart ID")
    user_id: str = Field(..., description="Owning user ID")
    items: List[CartLineItem] = Field(default_factory=list)
    total: Money = Field(default=Decimal("0"), description="Cart total")
    updated: datetime = Field(default_factory=utc_now)

    def find_item(self, product_id: str) -> Optional[CartLineItem]:
        """Return the line item for ``product_id``, or None."""
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items


class Order(BaseModel):
    """A completed order: a frozen snapshot of a cart at checkout time."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, description="Order ID")
    user_id: str = Field(..., description="Owning user ID")
    items: Tuple[CartLineItem, ...] = Field(default_factory=tuple)
    total: Money = Field(..., description="Order total")
    status: str = Field(default=ORDER_STATUS_COMPLETED)
    created: datetime = Field(default_factory=utc_now)
    completed: datetime = Field(default_factory=utc_now)


class SearchEntry(BaseModel):
    """A single recorded search query."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    user_id: str
    query: str
    timestamp: datetime = Field(default_factory=utc_now)
