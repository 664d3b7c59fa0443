from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from motor.motor_asyncio import AsyncIOMotorDatabase
from threadcart.core.database import get_database
from threadcart.core.exceptions import ForbiddenError, InternalError, UnauthenticatedError
from threadcart.core.security import decode_access_token
from threadcart.models.user import UserRole
from threadcart.repositories.carts import CartStore
from threadcart.repositories.orders import OrderStore
from threadcart.repositories.products import ProductCatalog, ProductLookup
from threadcart.repositories.users import UserStore
from threadcart.services.cart_service import CartService
from threadcart.services.catalog_service import CatalogService
from threadcart.services.order_service import OrderService
from threadcart.services.pricing import PricingPolicy
from threadcart.utils.helpers import parse_object_id

# Security scheme; missing credentials are reported by get_current_user
security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    db = get_database()
    if db is None:
        raise InternalError("Database is not connected")
    return db


def get_pricing_policy() -> PricingPolicy:
    return PricingPolicy.from_settings()


async def get_cart_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> CartStore:
    return CartStore(db)


async def get_product_lookup(db: AsyncIOMotorDatabase = Depends(get_db)) -> ProductLookup:
    return ProductLookup(db)


async def get_cart_service(
    carts: CartStore = Depends(get_cart_store),
    products: ProductLookup = Depends(get_product_lookup),
    policy: PricingPolicy = Depends(get_pricing_policy)
) -> CartService:
    """Dependency wiring the cart service to its collaborators."""
    return CartService(carts=carts, products=products, policy=policy)


async def get_product_catalog(db: AsyncIOMotorDatabase = Depends(get_db)) -> ProductCatalog:
    return ProductCatalog(db)


async def get_catalog_service(catalog: ProductCatalog = Depends(get_product_catalog)) -> CatalogService:
    return CatalogService(catalog)


async def get_order_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> OrderStore:
    return OrderStore(db)


async def get_order_service(
    orders: OrderStore = Depends(get_order_store),
    products: ProductLookup = Depends(get_product_lookup),
    policy: PricingPolicy = Depends(get_pricing_policy)
) -> OrderService:
    return OrderService(orders=orders, products=products, policy=policy)


async def get_user_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> UserStore:
    return UserStore(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> dict:
    """
    Dependency to get the current authenticated user.

    Validates the JWT token and returns the user document from the database.

    Raises:
        UnauthenticatedError: If the token is missing or invalid, or the user does not exist
    """
    if not credentials:
        raise UnauthenticatedError("User not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthenticatedError("Unauthorized")

    # Older tokens carry the user id under "id"
    user_id = payload.get("sub") or payload.get("id")
    if not user_id:
        raise UnauthenticatedError("Unauthorized")

    object_id = parse_object_id(user_id)
    user = await db.users.find_one({"_id": object_id if object_id is not None else user_id})

    if user is None:
        raise UnauthenticatedError("User not authenticated")

    return user


async def get_current_admin(
    current_user: dict = Depends(get_current_user)
) -> dict:
    """
    Dependency to ensure the current user is an admin.

    Raises:
        ForbiddenError: If the user is not an admin
    """
    if current_user.get("role") != UserRole.ADMIN.value:
        raise ForbiddenError("Only admins can access this endpoint")

    return current_user
