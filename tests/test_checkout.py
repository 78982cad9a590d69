"""Tests for checkout and order history."""

from decimal import Decimal

import pydantic
import pytest

from storefront.commerce.catalog import Catalog, sample_products
from storefront.commerce.service import ShopService
from storefront.exceptions import ValidationError


@pytest.fixture
def shop():
    """Fixture providing a shop over the sample catalog."""
    return ShopService(Catalog(sample_products()))


def test_checkout_snapshots_cart_into_completed_order(shop):
    shop.add_to_cart("u1", "1", 2)
    shop.add_to_cart("u1", "3", 1)
    before = shop.get_cart("u1")

    order = shop.checkout("u1")

    assert order.user_id == "u1"
    assert order.status == "completed"
    assert [(i.product_id, i.quantity) for i in order.items] == [
        (i.product_id, i.quantity) for i in before.items
    ]
    assert order.total == before.total == Decimal("2249.97")
    assert order.created == order.completed


def test_checkout_empties_cart_but_keeps_its_id(shop):
    cart = shop.add_to_cart("u1", "1", 2)

    shop.checkout("u1")

    after = shop.get_cart("u1")
    assert after.id == cart.id
    assert after.items == []
    assert after.total == Decimal("0")


def test_documented_checkout_example(shop):
    shop.add_to_cart("u1", "1", 2)
    shop.add_to_cart("u1", "1", 1)
    shop.remove_from_cart("u1", "1", 1)

    order = shop.checkout("u1")

    assert len(order.items) == 1
    assert order.items[0].product_id == "1"
    assert order.items[0].quantity == 2
    assert order.total == Decimal("1999.98")
    assert shop.get_cart("u1").items == []


def test_checkout_without_cart_raises_and_creates_no_order(shop):
    with pytest.raises(ValidationError, match="Cart not found"):
        shop.checkout("u1")

    assert shop.order_history("u1") == []


def test_checkout_empty_cart_raises_and_creates_no_order(shop):
    shop.add_to_cart("u1", "1", 1)
    shop.checkout("u1")

    with pytest.raises(ValidationError, match="Cart is empty"):
        shop.checkout("u1")

    assert len(shop.order_history("u1")) == 1


@pytest.mark.parametrize("user_id", [None, "", "   "])
def test_checkout_requires_user_id(shop, user_id):
    with pytest.raises(ValidationError, match="user_id is required"):
        shop.checkout(user_id)


def test_checkout_does_not_touch_stock(shop):
    shop.add_to_cart("u1", "2", 30)
    shop.checkout("u1")

    assert shop.get_product("2").stock == 30
    # Full stock is still available for the next add
    shop.add_to_cart("u2", "2", 30)


def test_order_is_immutable(shop):
    shop.add_to_cart("u1", "1", 1)
    order = shop.checkout("u1")

    with pytest.raises(pydantic.ValidationError):
        order.total = Decimal("0")
    assert isinstance(order.items, tuple)


def test_order_is_not_affected_by_later_cart_changes(shop):
    shop.add_to_cart("u1", "1", 1)
    order = shop.checkout("u1")
    shop.add_to_cart("u1", "1", 5)

    stored = shop.order_history("u1")[0]
    assert stored.id == order.id
    assert stored.items[0].quantity == 1


def test_order_history_is_per_user_and_oldest_first(shop):
    shop.add_to_cart("u1", "1", 1)
    first = shop.checkout("u1")
    shop.add_to_cart("u2", "2", 1)
    shop.checkout("u2")
    shop.add_to_cart("u1", "3", 1)
    second = shop.checkout("u1")

    history = shop.order_history("u1")

    assert [o.id for o in history] == [first.id, second.id]


def test_order_history_for_unknown_user_is_empty(shop):
    assert shop.order_history("nobody") == []
