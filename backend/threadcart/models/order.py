from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


class OrderStatus(str, Enum):
    """Order status enumeration."""
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    CASH_ON_DELIVERY = "on"
    RAZORPAY = "Razorpay"


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True


class ContactInformation(_CamelModel):
    email: EmailStr
    phone: str = Field(min_length=1)


class ShippingInformation(_CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    company: str = "none"
    address: str = Field(min_length=1)
    apartment: str = ""
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class PaymentInformation(_CamelModel):
    method: PaymentMethod


class OrderItem(_CamelModel):
    """
    Product snapshot taken when the order is placed.

    ``price`` is the catalog unit price at that moment; ``line_total``
    includes gift wrapping.
    """
    product_id: str
    product_name: str
    product_image: List[str] = Field(default_factory=list)
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    size: str
    color: str = ""
    gift_wrapping: bool = False
    line_total: float = 0.0


class OrderSummary(_CamelModel):
    items: List[OrderItem]
    subtotal: float = 0.0
    shipping: float = Field(default=0.0, ge=0)
    taxes: float = Field(default=0.0, ge=0)
    total: float = 0.0


class Order(_CamelModel):
    """Order model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    user_id: str
    user_email: str = ""
    contact_information: ContactInformation
    shipping_information: ShippingInformation
    payment_information: PaymentInformation
    order_summary: OrderSummary
    status: OrderStatus = OrderStatus.PENDING.value
    order_date: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
