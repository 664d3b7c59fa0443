"""
Order persistence in the ``orders`` collection.
"""
import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from threadcart.core.exceptions import InternalError, InvalidArgumentError
from threadcart.models.order import Order
from threadcart.utils.helpers import (
    format_document,
    get_current_timestamp,
    object_id_to_str,
    parse_object_id
)

logger = logging.getLogger(__name__)


def _order_object_id(order_id: str):
    object_id = parse_object_id(order_id)
    if object_id is None:
        raise InvalidArgumentError("Invalid order ID")
    return object_id


class OrderStore:

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.orders

    async def ensure_indexes(self):
        await self.collection.create_index([("user_id", ASCENDING), ("order_date", DESCENDING)])

    async def insert(self, order: Order) -> Order:
        document = order.model_dump(exclude={"id"})

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to create order for user {order.user_id}: {str(e)}")
            raise InternalError("Failed to create order", context={"user_id": order.user_id})

        order.id = object_id_to_str(result.inserted_id)
        return order

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Raises:
            InvalidArgumentError: If the id is not a valid ObjectId
        """
        object_id = _order_object_id(order_id)

        try:
            document = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to load order {order_id}: {str(e)}")
            raise InternalError("Failed to load order", context={"order_id": order_id})

        if not document:
            return None
        return Order.model_validate(format_document(document))

    async def list_orders(
        self,
        user_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[Order]:
        """Newest first; all users when ``user_id`` is None."""
        query = {"user_id": user_id} if user_id else {}

        try:
            cursor = self.collection.find(query).sort("order_date", DESCENDING).skip(skip).limit(limit)
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"Failed to list orders: {str(e)}")
            raise InternalError("Failed to list orders")

        return [Order.model_validate(format_document(document)) for document in documents]

    async def update_status(self, order_id: str, status: str) -> Optional[Order]:
        object_id = _order_object_id(order_id)

        try:
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": {"status": status, "updated_at": get_current_timestamp()}},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            logger.error(f"Failed to update order {order_id}: {str(e)}")
            raise InternalError("Failed to update order", context={"order_id": order_id})

        if not document:
            return None
        return Order.model_validate(format_document(document))

    async def delete(self, order_id: str) -> Optional[Order]:
        """Delete an order and return what was removed, or None if it did not exist."""
        object_id = _order_object_id(order_id)

        try:
            document = await self.collection.find_one_and_delete({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete order {order_id}: {str(e)}")
            raise InternalError("Failed to delete order", context={"order_id": order_id})

        if not document:
            return None
        return Order.model_validate(format_document(document))
