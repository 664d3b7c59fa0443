from typing import Any, List, Union
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from threadcart.models.cart import Cart, OfferDetails
from threadcart.models.product import Size
from threadcart.utils.helpers import normalize_color


class AddToCartRequest(BaseModel):
    """Schema for adding a product to cart."""
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    size: Size
    color: str
    gift_wrapping: bool = False

    class Config:
        populate_by_name = True
        alias_generator = to_camel
        json_schema_extra = {
            "example": {
                "productId": "665f1c2e9b1d8a00abcdef01",
                "quantity": 2,
                "size": "M",
                "color": "black",
                "giftWrapping": False
            }
        }


class SyncCartItem(BaseModel):
    """
    One line item from a client-side (guest or offline) cart.

    Price, name and images are taken as the client sent them.
    """
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    size: Size
    color: Union[str, List[Any], None] = ""
    gift_wrapping: bool = False
    price: float = Field(ge=0)
    name: str
    images: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        alias_generator = to_camel

    @field_validator("color", mode="after")
    @classmethod
    def _single_color(cls, v) -> str:
        return normalize_color(v)


class SyncCartRequest(BaseModel):
    """Schema for reconciling a client cart with the stored one."""
    user_id: str = Field(min_length=1)
    items: List[SyncCartItem]

    class Config:
        populate_by_name = True
        alias_generator = to_camel
        json_schema_extra = {
            "example": {
                "userId": "665f1c2e9b1d8a0012345678",
                "items": [
                    {
                        "productId": "665f1c2e9b1d8a00abcdef01",
                        "quantity": 1,
                        "size": "L",
                        "color": ["red", "blue"],
                        "giftWrapping": True,
                        "price": 599.0,
                        "name": "Classic Crew Tee",
                        "images": []
                    }
                ]
            }
        }


class UpdateCartItemRequest(BaseModel):
    """Schema for setting a cart item's quantity."""
    user_id: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)

    class Config:
        populate_by_name = True
        alias_generator = to_camel


class CartMessageResponse(BaseModel):
    """Response for cart mutations."""
    message: str
    cart: Cart


class CartViewResponse(BaseModel):
    """Cart with the bundle offer evaluated for this read."""
    cart: Cart
    offer_details: OfferDetails

    class Config:
        populate_by_name = True
        alias_generator = to_camel


class UpdateCartItemResponse(BaseModel):
    message: str
    quantity: int
