from typing import Any, List, Union
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from threadcart.models.order import (
    ContactInformation,
    Order,
    OrderStatus,
    PaymentInformation,
    ShippingInformation
)
from threadcart.models.product import Size
from threadcart.utils.helpers import normalize_color


class _CamelRequest(BaseModel):
    class Config:
        populate_by_name = True
        alias_generator = to_camel


class OrderItemCreate(_CamelRequest):
    """Schema for one product in order creation. Prices come from the catalog."""
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    size: Size
    color: Union[str, List[Any], None] = ""
    gift_wrapping: bool = False

    @field_validator("color", mode="after")
    @classmethod
    def _single_color(cls, value):
        return normalize_color(value)


class OrderSummaryCreate(_CamelRequest):
    items: List[OrderItemCreate] = Field(min_length=1)
    shipping: float = Field(default=0.0, ge=0)
    taxes: float = Field(default=0.0, ge=0)


class OrderCreate(_CamelRequest):
    """Schema for creating an order."""
    contact_information: ContactInformation
    shipping_information: ShippingInformation
    payment_information: PaymentInformation
    order_summary: OrderSummaryCreate

    class Config:
        json_schema_extra = {
            "example": {
                "contactInformation": {"email": "asha@example.com", "phone": "9876543210"},
                "shippingInformation": {
                    "firstName": "Asha",
                    "lastName": "Rao",
                    "address": "12 MG Road",
                    "city": "Bengaluru",
                    "state": "KA",
                    "postalCode": "560001",
                    "country": "India"
                },
                "paymentInformation": {"method": "Razorpay"},
                "orderSummary": {
                    "items": [
                        {"productId": "665f1c2e9b1d8a00abcdef01", "quantity": 2, "size": "M", "color": "black"}
                    ],
                    "shipping": 50.0,
                    "taxes": 0.0
                }
            }
        }


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class OrderMessageResponse(BaseModel):
    message: str
    order: Order


class OrderListResponse(BaseModel):
    orders: List[Order]
    count: int
