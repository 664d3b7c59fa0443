"""
Catalog maintenance rules.

New products get the care and fabric details of their category unless the
request supplies its own; detail edits are merged over the stored map and
must leave every required field filled in.
"""
import logging
from typing import Any, Dict, Optional

from threadcart.core.exceptions import InvalidArgumentError, NotFoundError
from threadcart.models.product import Product
from threadcart.repositories.products import ProductCatalog
from threadcart.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

_TSHIRT_DETAILS = {
    "material": "Platinum Soft Cotton",
    "careInstructions": "Machine wash cold, tumble dry low",
    "origin": "Made in India",
    "shippingInfo": "Express shipping available 3 - 5 business days",
    "fabric": "Platinum Soft Cotton",
    "pattern": "Solid with Graphic Print",
    "neck": "Round Neck",
    "sleeve": "Half Sleeve",
    "styleCode": "OS-1",
    "occasion": "Casual, Sports",
    "knitType": "Platinum Soft Cotton",
    "suitableFor": "Western Wear, Sports",
    "fabricCare": "Gentle Machine Wash, Do not bleach",
    "netQuantity": "1",
}

CATEGORY_DETAILS: Dict[str, Dict[str, str]] = {
    "Hoodies": {
        "material": "Cotton Fleece Blend",
        "careInstructions": "Regular Machine Wash",
        "origin": "Made in India",
        "shippingInfo": "Ships within 3-5 business days.",
        "fabric": "Cotton Fleece Blend",
        "pattern": "Graphic Print",
        "neck": "Hooded Neck",
        "sleeve": "Full Sleeve",
        "styleCode": "Red",
        "occasion": "Casual",
        "pockets": "Kangaroo pocket",
        "hooded": "Yes",
        "reversible": "No",
        "knitType": "Fleece cotton blend",
        "suitableFor": "Western Wear",
        "secondaryColor": "Red",
        "fabricCare": "Regular Machine Wash",
        "netQuantity": "1",
    },
    "Tshirt": _TSHIRT_DETAILS,
    "Couple-Tshirt": _TSHIRT_DETAILS,
    "Oversize-Tshirt": {
        **_TSHIRT_DETAILS,
        "material": "Premium Soft Cotton",
        "fabric": "Premium Soft Cotton",
        "knitType": "Premium Soft Cotton",
        "suitableFor": "Western Wear, Sports, Casual Outings",
    },
}

REQUIRED_DETAIL_FIELDS = [
    "material",
    "careInstructions",
    "origin",
    "shippingInfo",
    "fabric",
    "pattern",
    "neck",
    "sleeve",
    "styleCode",
    "occasion",
    "knitType",
    "suitableFor",
    "fabricCare",
    "netQuantity",
]


def default_details(category: str) -> Dict[str, str]:
    """Details preset for a category; empty for categories without one."""
    return dict(CATEGORY_DETAILS.get(category, {}))


def merge_details(existing: Dict[str, str], updates: Dict[str, str]) -> Dict[str, str]:
    """
    Overlay ``updates`` on the stored details.

    Raises:
        InvalidArgumentError: If a required field ends up empty
    """
    merged = {**existing, **updates}
    missing = [field for field in REQUIRED_DETAIL_FIELDS if not merged.get(field)]
    if missing:
        raise InvalidArgumentError(f"Missing required fields: {', '.join(missing)}")
    return merged


def build_product(request: ProductCreate) -> Product:
    data = request.model_dump(exclude={"details"})
    details = default_details(data["category"])
    details.update(request.details or {})
    return Product(**data, details=details)


class CatalogService:
    """Add, edit and remove catalog products."""

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    async def add_product(self, request: ProductCreate) -> Product:
        return await self.catalog.insert(build_product(request))

    async def update_product(self, product_id: str, request: ProductUpdate) -> Product:
        """Apply the fields present in the request; absent fields are left alone."""
        fields: Dict[str, Any] = request.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            raise InvalidArgumentError("No fields to update")

        product = await self.catalog.update(product_id, fields)
        if product is None:
            raise NotFoundError("Product not found")
        logger.info(f"Updated product {product_id}: {', '.join(sorted(fields))}")
        return product

    async def update_product_details(self, product_id: str, updates: Dict[str, str]) -> Product:
        product: Optional[Product] = await self.catalog.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        details = merge_details(product.details, updates)
        updated = await self.catalog.update(product_id, {"details": details})
        if updated is None:
            raise NotFoundError("Product not found")
        return updated

    async def delete_product(self, product_id: str):
        if not await self.catalog.delete(product_id):
            raise NotFoundError("Product not found")
        logger.info(f"Deleted product {product_id}")
