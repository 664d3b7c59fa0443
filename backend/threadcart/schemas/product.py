from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from threadcart.models.product import Category, Gender, Product, Size


class ProductListResponse(BaseModel):
    """Schema for a page of catalog products."""
    products: List[Product]
    count: int


class ProductCreate(BaseModel):
    """Schema for adding a product to the catalog."""
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: Category = Category.HOODIES.value
    gender: Gender
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    size: List[Size]
    color: List[str]
    images: List[str]
    tags: List[str] = Field(default_factory=list)
    details: Optional[Dict[str, str]] = None

    class Config:
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "name": "Classic Crew Tee",
                "description": "Platinum soft cotton, round neck",
                "category": "Tshirt",
                "gender": "Unisex",
                "price": 599.0,
                "stock": 40,
                "size": ["S", "M", "L", "XL"],
                "color": ["black", "white"],
                "images": ["https://example.com/tee-black.jpg"],
                "tags": ["summer"]
            }
        }


class ProductUpdate(BaseModel):
    """Schema for editing a product. Only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[Category] = None
    gender: Optional[Gender] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    size: Optional[List[Size]] = None
    color: Optional[List[str]] = None
    images: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    class Config:
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True


class ProductMessageResponse(BaseModel):
    message: str
    product: Product
