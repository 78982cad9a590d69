"""Tests for the FastAPI application endpoints.

This module contains integration tests for the Storefront API endpoints,
including health checks, catalog, cart, checkout, orders and
recommendations.
"""

import pytest
from fastapi.testclient import TestClient

from storefront.api.config import Settings
from storefront.api.main import create_app
from storefront.commerce.catalog import Catalog, sample_products
from storefront.commerce.service import ShopService

API = "/api/v1"


@pytest.fixture
def client():
    """Fixture providing a client for a fresh app over the sample catalog."""
    shop = ShopService(Catalog(sample_products()))
    app = create_app(settings=Settings(), shop=shop)
    return TestClient(app)


def add(client, user_id, product_id, quantity):
    return client.post(
        f"{API}/cart/add",
        params={"user_id": user_id},
        json={"product_id": product_id, "quantity": quantity},
    )


def remove(client, user_id, product_id, quantity):
    return client.request(
        "DELETE",
        f"{API}/cart/remove",
        params={"user_id": user_id},
        json={"product_id": product_id, "quantity": quantity},
    )


def test_health_endpoint(client):
    """Test that /health reports a healthy service."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"
    assert "timestamp" in data


def test_openapi_lists_shop_routes(client):
    response = client.get("/openapi.json")

    assert response.status_code == 200
    paths = response.json()["paths"]
    for path in (
        "/api/v1/products",
        "/api/v1/products/top",
        "/api/v1/products/{product_id}",
        "/api/v1/cart/add",
        "/api/v1/cart/remove",
        "/api/v1/checkout",
        "/api/v1/recommendations/{user_id}",
        "/api/v1/search",
    ):
        assert path in paths


def test_request_id_header(client):
    response = client.get("/health")

    assert response.headers.get("X-Request-ID")


def test_list_products(client):
    response = client.get(f"{API}/products")

    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data] == ["1", "2", "3", "4", "5"]
    assert data[0]["price"] == 999.99


def test_get_product(client):
    response = client.get(f"{API}/products/2")

    assert response.status_code == 200
    assert response.json()["name"] == "MacBook Pro M3"


def test_top_products_sorted_by_rating(client):
    response = client.get(f"{API}/products/top", params={"limit": 3})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["2", "5", "3"]


def test_top_products_default_limit(client):
    response = client.get(f"{API}/products/top")

    assert len(response.json()) == 5


def test_search(client):
    response = client.get(f"{API}/search", params={"q": "iPhone", "user_id": "u1"})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["1"]


def test_search_without_matches_returns_empty_list(client):
    response = client.get(f"{API}/search", params={"q": "Toaster"})

    assert response.status_code == 200
    assert response.json() == []


def test_add_to_cart(client):
    response = add(client, "u1", "1", 2)

    assert response.status_code == 200
    cart = response.json()
    assert cart["user_id"] == "u1"
    assert cart["items"] == [{"product_id": "1", "quantity": 2}]
    assert cart["total"] == 1999.98


def test_remove_from_cart(client):
    add(client, "u1", "1", 3)

    response = remove(client, "u1", "1", 1)

    assert response.status_code == 200
    assert response.json()["items"] == [{"product_id": "1", "quantity": 2}]
    assert response.json()["total"] == 1999.98


def test_get_cart(client):
    created = add(client, "u1", "3", 1).json()

    response = client.get(f"{API}/cart/u1")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]
    assert response.json()["total"] == 249.99


def test_checkout_and_order_history(client):
    add(client, "u1", "1", 2)

    response = client.post(f"{API}/checkout", params={"user_id": "u1"})

    assert response.status_code == 200
    order = response.json()
    assert order["status"] == "completed"
    assert order["total"] == 1999.98
    assert order["items"] == [{"product_id": "1", "quantity": 2}]

    history = client.get(f"{API}/orders/u1").json()
    assert [o["id"] for o in history] == [order["id"]]

    cart = client.get(f"{API}/cart/u1").json()
    assert cart["items"] == []
    assert cart["total"] == 0


def test_order_history_empty(client):
    response = client.get(f"{API}/orders/nobody")

    assert response.status_code == 200
    assert response.json() == []


def test_recommendations_popular_for_new_user(client):
    response = client.get(f"{API}/recommendations/new-user", params={"limit": 2})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["2", "5"]


def test_recommendations_explain(client):
    client.get(f"{API}/search", params={"q": "iPad", "user_id": "u1"})

    response = client.get(
        f"{API}/recommendations/u1", params={"explain": "true", "limit": 3}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "u1"
    assert data["strategy"] == "search"
    assert [p["id"] for p in data["recommendations"]] == ["4"]


def test_recommendations_non_positive_limit_uses_default(client):
    response = client.get(f"{API}/recommendations/u1", params={"limit": 0})

    assert response.status_code == 200
    assert len(response.json()) == 5


def test_metrics_count_recommendations_by_strategy(client):
    client.get(f"{API}/recommendations/u1")
    client.get(f"{API}/search", params={"q": "iPad", "user_id": "u2"})
    client.get(f"{API}/recommendations/u2")

    response = client.get("/metrics")

    assert response.status_code == 200
    data = response.json()
    assert data["recommendation_count"] == 2
    assert data["strategy_counts"]["popular"] == 1
    assert data["strategy_counts"]["search"] == 1
    assert data["strategy_counts"]["orders"] == 0


def test_apps_do_not_share_state():
    first = TestClient(create_app(Settings(), ShopService(Catalog(sample_products()))))
    second = TestClient(create_app(Settings(), ShopService(Catalog(sample_products()))))

    add(first, "u1", "1", 1)

    assert second.get(f"{API}/cart/u1").status_code == 404


def test_create_app_seeds_from_settings_catalog(tmp_path):
    csv_path = tmp_path / "catalog.csv"
    csv_path.write_text("id,name,price,category,stock,rating\nx1,Kettle,25.00,Home,4,4.0\n")

    client = TestClient(create_app(Settings(catalog_csv=str(csv_path))))

    response = client.get(f"{API}/products")
    assert [p["id"] for p in response.json()] == ["x1"]
