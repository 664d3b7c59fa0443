"""
Shared fixtures for service and route tests.
"""
import os

# Settings require a signing key at import time
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from unittest.mock import AsyncMock, MagicMock

from threadcart.models.cart import Cart
from threadcart.repositories.carts import CartStore
from threadcart.repositories.orders import OrderStore
from threadcart.repositories.products import ProductCatalog, ProductLookup
from threadcart.services.cart_service import CartService
from threadcart.services.catalog_service import CatalogService
from threadcart.services.order_service import OrderService
from threadcart.services.pricing import PricingPolicy
from factories import make_product


@pytest.fixture
def policy():
    return PricingPolicy(gift_wrapping_cost=30.0, bundle_category="Tshirt", bundle_size=3, bundle_price=1299.0)


@pytest.fixture
def empty_cart():
    return Cart(user_id="user123")


@pytest.fixture
def mock_carts():
    """Cart Store double: no stored cart, save echoes the cart back."""
    carts = MagicMock(spec=CartStore)
    carts.find_by_user = AsyncMock(return_value=None)
    carts.save = AsyncMock(side_effect=lambda cart: cart)
    return carts


@pytest.fixture
def mock_products():
    products = MagicMock(spec=ProductLookup)
    products.find_by_id = AsyncMock(return_value=make_product())
    products.find_many_by_ids = AsyncMock(return_value={})
    products.list_products = AsyncMock(return_value=[])
    return products


@pytest.fixture
def cart_service(mock_carts, mock_products, policy):
    return CartService(carts=mock_carts, products=mock_products, policy=policy)


@pytest.fixture
def mock_orders():
    """Order Store double: insert assigns an id, nothing stored yet."""
    def _insert(order):
        order.id = "665f1c2e9b1d8a00000000aa"
        return order

    orders = MagicMock(spec=OrderStore)
    orders.insert = AsyncMock(side_effect=_insert)
    orders.find_by_id = AsyncMock(return_value=None)
    orders.list_orders = AsyncMock(return_value=[])
    orders.update_status = AsyncMock(return_value=None)
    orders.delete = AsyncMock(return_value=None)
    return orders


@pytest.fixture
def order_service(mock_orders, mock_products, policy):
    return OrderService(orders=mock_orders, products=mock_products, policy=policy)


@pytest.fixture
def mock_catalog():
    catalog = MagicMock(spec=ProductCatalog)
    catalog.insert = AsyncMock(side_effect=lambda product: product.model_copy(update={"id": "new_product"}))
    catalog.find_by_id = AsyncMock(return_value=make_product())
    catalog.update = AsyncMock(return_value=make_product())
    catalog.delete = AsyncMock(return_value=True)
    return catalog


@pytest.fixture
def catalog_service(mock_catalog):
    return CatalogService(mock_catalog)
