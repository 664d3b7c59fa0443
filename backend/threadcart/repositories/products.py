"""
Access to the ``products`` collection.

ProductLookup is the read side the cart service depends on; ProductCatalog
adds the writes behind the catalog admin routes.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from threadcart.core.exceptions import InternalError, InvalidArgumentError
from threadcart.models.product import Product
from threadcart.utils.helpers import (
    format_document,
    get_current_timestamp,
    object_id_to_str,
    parse_object_id
)

logger = logging.getLogger(__name__)


class ProductLookup:
    """Resolve product ids to catalog records."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.products

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Fetch one product.

        Raises:
            InvalidArgumentError: If the id is not a valid ObjectId
        """
        object_id = parse_object_id(product_id)
        if object_id is None:
            raise InvalidArgumentError("Invalid product ID")

        try:
            document = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to load product {product_id}: {str(e)}")
            raise InternalError("Failed to load product", context={"product_id": product_id})

        if not document:
            return None
        return Product.model_validate(format_document(document))

    async def find_many_by_ids(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """Fetch several products at once, keyed by id. Unknown or malformed ids are skipped."""
        object_ids = [oid for oid in (parse_object_id(pid) for pid in set(product_ids)) if oid is not None]
        if not object_ids:
            return {}

        try:
            documents = await self.collection.find({"_id": {"$in": object_ids}}).to_list(length=len(object_ids))
        except PyMongoError as e:
            logger.error(f"Failed to load products: {str(e)}")
            raise InternalError("Failed to load products")

        products = [Product.model_validate(format_document(document)) for document in documents]
        return {product.id: product for product in products}

    async def list_products(
        self,
        category: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[Product]:
        query = {}
        if category:
            query["category"] = category

        try:
            documents = await self.collection.find(query).skip(skip).limit(limit).to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"Failed to list products: {str(e)}")
            raise InternalError("Failed to list products")

        return [Product.model_validate(format_document(document)) for document in documents]


class ProductCatalog(ProductLookup):
    """Product Lookup plus the catalog write operations used by the admin routes."""

    async def insert(self, product: Product) -> Product:
        document = product.model_dump(exclude={"id"})

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to insert product {product.name}: {str(e)}")
            raise InternalError("Failed to add product")

        product.id = object_id_to_str(result.inserted_id)
        logger.info(f"Added product {product.id} ({product.name})")
        return product

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        """
        Set ``fields`` on a product and return the updated record.

        Returns None if the product does not exist.

        Raises:
            InvalidArgumentError: If the id is not a valid ObjectId
        """
        object_id = parse_object_id(product_id)
        if object_id is None:
            raise InvalidArgumentError("Invalid product ID")

        update_data = dict(fields)
        update_data["updated_at"] = get_current_timestamp()

        try:
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            logger.error(f"Failed to update product {product_id}: {str(e)}")
            raise InternalError("Failed to update product", context={"product_id": product_id})

        if not document:
            return None
        return Product.model_validate(format_document(document))

    async def delete(self, product_id: str) -> bool:
        """Delete a product. Returns False if it did not exist."""
        object_id = parse_object_id(product_id)
        if object_id is None:
            raise InvalidArgumentError("Invalid product ID")

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete product {product_id}: {str(e)}")
            raise InternalError("Failed to delete product", context={"product_id": product_id})

        return result.deleted_count > 0
