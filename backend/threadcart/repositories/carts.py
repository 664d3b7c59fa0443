"""
Cart Store: one cart document per user in the ``carts`` collection.

Derived fields are computed by the cart service before ``save``; the store
only persists what it is given.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from threadcart.core.exceptions import InternalError
from threadcart.models.cart import Cart
from threadcart.utils.helpers import format_document, get_current_timestamp, object_id_to_str

logger = logging.getLogger(__name__)


class CartStore:
    """Upsert-on-save access to user carts."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.carts

    async def ensure_indexes(self):
        """Enforce one cart per user."""
        await self.collection.create_index([("user_id", ASCENDING)], unique=True)

    async def find_by_user(self, user_id: str) -> Optional[Cart]:
        try:
            document = await self.collection.find_one({"user_id": user_id})
        except PyMongoError as e:
            logger.error(f"Failed to load cart for user {user_id}: {str(e)}")
            raise InternalError("Failed to load cart", context={"user_id": user_id})

        if not document:
            return None
        return Cart.model_validate(format_document(document))

    async def save(self, cart: Cart) -> Cart:
        """Replace the user's cart document, creating it if absent."""
        cart.updated_at = get_current_timestamp()
        document = cart.model_dump(exclude={"id"})

        try:
            result = await self.collection.replace_one(
                {"user_id": cart.user_id},
                document,
                upsert=True
            )
        except PyMongoError as e:
            logger.error(f"Failed to save cart for user {cart.user_id}: {str(e)}")
            raise InternalError("Failed to save cart", context={"user_id": cart.user_id})

        if result.upserted_id is not None:
            cart.id = object_id_to_str(result.upserted_id)
            logger.info(f"Created cart for user {cart.user_id}")
        return cart
