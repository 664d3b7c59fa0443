from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CartItem(BaseModel):
    """
    Line item in a shopping cart.

    unit_price, name and images are snapshots taken when the item was first
    added; later catalog edits do not reach items already in a cart.
    """
    product_id: str
    quantity: int = Field(ge=1)
    size: str
    color: str = ""
    gift_wrapping: bool = False
    unit_price: float = Field(ge=0)
    name: str
    images: List[str] = Field(default_factory=list)
    line_total: float = 0.0
    added_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        alias_generator = to_camel


class Cart(BaseModel):
    """Shopping cart model for MongoDB. One document per user."""
    id: Optional[str] = Field(None, alias="_id")
    user_id: str
    items: List[CartItem] = Field(default_factory=list)
    total_price: float = 0.0  # derived, recomputed on every mutation
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        alias_generator = to_camel
        json_schema_extra = {
            "example": {
                "userId": "665f1c2e9b1d8a0012345678",
                "items": [
                    {
                        "productId": "665f1c2e9b1d8a00abcdef01",
                        "quantity": 2,
                        "size": "M",
                        "color": "black",
                        "giftWrapping": False,
                        "unitPrice": 599.0,
                        "name": "Classic Crew Tee",
                        "images": ["https://example.com/tee-black.jpg"],
                        "lineTotal": 1198.0
                    }
                ],
                "totalPrice": 1198.0
            }
        }


class OfferDetails(BaseModel):
    """Bundle offer evaluation attached to a cart view. Never persisted."""
    category: str
    bundle_size: int
    bundle_price: float
    qualifying_items: int
    items_needed: int
    applied: bool = False
    savings: float = 0.0
    total_price: float

    class Config:
        populate_by_name = True
        alias_generator = to_camel
