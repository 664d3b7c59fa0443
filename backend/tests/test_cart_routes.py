"""
Tests for the cart and catalog HTTP endpoints.

Collaborators are swapped out through FastAPI dependency overrides; no
database connection is opened.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from threadcart.api.deps import (
    get_cart_service,
    get_catalog_service,
    get_current_user,
    get_db,
    get_product_lookup
)
from threadcart.core.security import create_access_token
from threadcart.main import app
from threadcart.models.cart import Cart
from factories import make_item, make_product

USER_ID = "665f1c2e9b1d8a0012345678"


@pytest.fixture
def client(cart_service, mock_products):
    app.dependency_overrides[get_cart_service] = lambda: cart_service
    app.dependency_overrides[get_product_lookup] = lambda: mock_products
    app.dependency_overrides[get_current_user] = lambda: {"_id": USER_ID}
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(cart_service):
    """Client with the real auth dependency and a mocked users collection."""
    mock_db = MagicMock()
    mock_db.users.find_one = AsyncMock(return_value=None)
    app.dependency_overrides[get_cart_service] = lambda: cart_service
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app), mock_db
    app.dependency_overrides.clear()


def _add_body(**overrides):
    body = {
        "productId": "prod_tee",
        "quantity": 2,
        "size": "M",
        "color": "black",
        "giftWrapping": True,
    }
    body.update(overrides)
    return body


class TestAddToCart:
    """Test POST /api/cart/add-to-cart."""

    def test_add_to_cart(self, client):
        response = client.post("/api/cart/add-to-cart", json=_add_body())

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Item added to cart"
        assert data["cart"]["userId"] == USER_ID
        item = data["cart"]["items"][0]
        assert item["productId"] == "prod_tee"
        assert item["unitPrice"] == 500.0
        assert item["lineTotal"] == 1060.0
        assert data["cart"]["totalPrice"] == 1060.0

    def test_client_total_is_ignored(self, client):
        response = client.post("/api/cart/add-to-cart", json=_add_body(totalPrice=1, giftWrapping=False))

        assert response.json()["cart"]["totalPrice"] == 1000.0

    @pytest.mark.parametrize("missing", ["productId", "quantity", "size", "color"])
    def test_missing_fields(self, client, missing):
        body = _add_body()
        del body[missing]

        response = client.post("/api/cart/add-to-cart", json=body)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_zero_quantity(self, client):
        response = client.post("/api/cart/add-to-cart", json=_add_body(quantity=0))
        assert response.status_code == 400

    def test_unknown_size(self, client):
        response = client.post("/api/cart/add-to-cart", json=_add_body(size="XXXL"))
        assert response.status_code == 400

    def test_product_not_found(self, client, mock_products):
        mock_products.find_by_id.return_value = None

        response = client.post("/api/cart/add-to-cart", json=_add_body())

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_unauthenticated(self, anonymous_client):
        client, _ = anonymous_client

        response = client.post("/api/cart/add-to-cart", json=_add_body())

        assert response.status_code == 401
        assert "error" in response.json()

    def test_invalid_token(self, anonymous_client):
        client, _ = anonymous_client

        response = client.post(
            "/api/cart/add-to-cart",
            json=_add_body(),
            headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401

    def test_valid_token(self, anonymous_client):
        client, mock_db = anonymous_client
        mock_db.users.find_one.return_value = {"_id": USER_ID, "email": "buyer@example.com"}
        token = create_access_token(USER_ID)

        response = client.post(
            "/api/cart/add-to-cart",
            json=_add_body(),
            headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["cart"]["userId"] == USER_ID


class TestGetCart:
    """Test GET /api/cart/cart/{user_id}."""

    def test_cart_with_bundle_offer(self, client, mock_carts, mock_products):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[
            make_item(product_id="tee1", unit_price=500.0),
            make_item(product_id="tee2", unit_price=600.0),
            make_item(product_id="tee3", unit_price=700.0),
            make_item(product_id="hoodie", unit_price=200.0),
        ])
        mock_products.find_many_by_ids.return_value = {
            "tee1": make_product("tee1"),
            "tee2": make_product("tee2"),
            "tee3": make_product("tee3"),
            "hoodie": make_product("hoodie", category="Hoodies"),
        }

        response = client.get(f"/api/cart/cart/{USER_ID}")

        assert response.status_code == 200
        data = response.json()
        assert data["cart"]["totalPrice"] == 2000.0
        offer = data["offerDetails"]
        assert offer["applied"] is True
        assert offer["totalPrice"] == 1499.0
        assert offer["savings"] == 501.0
        assert offer["qualifyingItems"] == 3
        assert offer["itemsNeeded"] == 0

    def test_cart_not_found(self, client):
        response = client.get(f"/api/cart/cart/{USER_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": "Cart not found for this user"}


class TestSyncCart:
    """Test POST /api/cart/sync-cart."""

    def test_sync_normalizes_color(self, client):
        body = {
            "userId": USER_ID,
            "items": [{
                "productId": "prod_tee",
                "quantity": 1,
                "size": "L",
                "color": ["red", "blue"],
                "price": 450.0,
                "name": "Guest Tee",
            }]
        }

        response = client.post("/api/cart/sync-cart", json=body)

        assert response.status_code == 200
        item = response.json()["cart"]["items"][0]
        assert item["color"] == "red"
        assert item["unitPrice"] == 450.0

    def test_sync_bad_shape(self, client):
        response = client.post("/api/cart/sync-cart", json={"userId": USER_ID, "items": "nope"})
        assert response.status_code == 400

    def test_sync_other_users_cart(self, client):
        response = client.post("/api/cart/sync-cart", json={"userId": "someone-else", "items": []})
        assert response.status_code == 401


class TestRemoveItem:
    """Test DELETE /api/cart/cart/remove-item/{user_id}/{product_id}."""

    def test_remove_item(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[
            make_item(product_id="A", quantity=2, unit_price=10.0),
            make_item(product_id="B", quantity=1, unit_price=5.0),
        ])

        response = client.delete(f"/api/cart/cart/remove-item/{USER_ID}/A")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Item removed from cart"
        assert [item["productId"] for item in data["cart"]["items"]] == ["B"]
        assert data["cart"]["totalPrice"] == 5.0

    def test_remove_with_variant_filter(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[
            make_item(product_id="A", size="M"),
            make_item(product_id="A", size="L"),
        ])

        response = client.delete(f"/api/cart/cart/remove-item/{USER_ID}/A", params={"size": "L"})

        assert [item["size"] for item in response.json()["cart"]["items"]] == ["M"]

    def test_variant_filter_is_normalized(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[
            make_item(product_id="A", size="M", color="white"),
            make_item(product_id="A", size="M", color="black"),
        ])

        response = client.delete(
            f"/api/cart/cart/remove-item/{USER_ID}/A",
            params={"size": " M ", "color": " black"}
        )

        assert response.status_code == 200
        assert [item["color"] for item in response.json()["cart"]["items"]] == ["white"]

    def test_remove_missing_item(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[make_item(product_id="A")])

        response = client.delete(f"/api/cart/cart/remove-item/{USER_ID}/B")

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found in cart"}
        mock_carts.save.assert_not_awaited()


class TestUpdateItem:
    """Test POST /api/cart/cart/update-item."""

    def test_update_item(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[make_item(product_id="A")])

        response = client.post(
            "/api/cart/cart/update-item",
            json={"userId": USER_ID, "productId": "A", "quantity": 3}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Cart updated successfully", "quantity": 3}

    def test_update_missing_item(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID)

        response = client.post(
            "/api/cart/cart/update-item",
            json={"userId": USER_ID, "productId": "A", "quantity": 3}
        )

        assert response.status_code == 404


class TestClearCart:

    def test_clear_cart(self, client, mock_carts):
        mock_carts.find_by_user.return_value = Cart(user_id=USER_ID, items=[make_item(product_id="A")])

        response = client.delete("/api/cart/cart/clear")

        assert response.status_code == 200
        assert response.json()["cart"]["items"] == []
        assert response.json()["cart"]["totalPrice"] == 0.0

    def test_clear_without_cart(self, client, mock_carts):
        response = client.delete("/api/cart/cart/clear")

        assert response.status_code == 404
        assert response.json() == {"error": "Cart not found for this user"}
        mock_carts.save.assert_not_awaited()


class TestProducts:
    """Test the read-only catalog endpoints."""

    def test_get_product(self, client, mock_products):
        mock_products.find_by_id.return_value = make_product("prod_tee", price=599.0)

        response = client.get("/api/product/getproduct/prod_tee")

        assert response.status_code == 200
        assert response.json()["price"] == 599.0

    def test_get_missing_product(self, client, mock_products):
        mock_products.find_by_id.return_value = None

        response = client.get("/api/product/getproduct/prod_missing")

        assert response.status_code == 404

    def test_list_products_by_category(self, client, mock_products):
        mock_products.list_products.return_value = [make_product("tee1"), make_product("tee2")]

        response = client.get("/api/product/getproducts", params={"category": "Tshirt"})

        assert response.status_code == 200
        assert response.json()["count"] == 2
        assert mock_products.list_products.await_args.kwargs["category"] == "Tshirt"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


@pytest.fixture
def admin_client(catalog_service):
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_current_user] = lambda: {"_id": USER_ID, "role": "admin"}
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestProductWrites:
    """Test the admin catalog endpoints."""

    def _product_body(self, **overrides):
        body = {
            "name": "Classic Crew Tee",
            "description": "Soft cotton",
            "category": "Oversize-Tshirt",
            "gender": "Unisex",
            "price": 599.0,
            "stock": 40,
            "size": ["M", "L"],
            "color": ["black"],
            "images": ["tee.jpg"],
        }
        body.update(overrides)
        return body

    def test_add_product(self, admin_client):
        response = admin_client.post("/api/product/addproduct", json=self._product_body())

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Product added successfully"
        assert data["product"]["_id"] == "new_product"
        assert data["product"]["details"]["material"] == "Premium Soft Cotton"

    def test_add_product_validation(self, admin_client):
        response = admin_client.post("/api/product/addproduct", json=self._product_body(price=-1, size=["XXXL"]))
        assert response.status_code == 400

    def test_add_product_requires_admin(self, client):
        response = client.post("/api/product/addproduct", json=self._product_body())
        assert response.status_code == 403

    def test_update_product(self, admin_client, mock_catalog):
        mock_catalog.update.return_value = make_product("prod_tee", price=450.0)

        response = admin_client.put("/api/product/updateproduct/prod_tee", json={"price": 450.0})

        assert response.status_code == 200
        assert response.json()["product"]["price"] == 450.0
        assert mock_catalog.update.await_args.args[1] == {"price": 450.0}

    def test_update_missing_product(self, admin_client, mock_catalog):
        mock_catalog.update.return_value = None

        response = admin_client.put("/api/product/updateproduct/prod_tee", json={"price": 450.0})

        assert response.status_code == 404

    def test_update_product_details_incomplete(self, admin_client):
        response = admin_client.put("/api/product/update-product-details/prod_tee", json={"neck": "V Neck"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Missing required fields")

    def test_delete_product(self, admin_client):
        response = admin_client.delete("/api/product/deleteproduct/prod_tee")

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}

    def test_delete_missing_product(self, admin_client, mock_catalog):
        mock_catalog.delete.return_value = False

        response = admin_client.delete("/api/product/deleteproduct/prod_tee")

        assert response.status_code == 404


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
