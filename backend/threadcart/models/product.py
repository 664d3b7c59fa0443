from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Size(str, Enum):
    """Garment sizes offered in the catalog."""
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


class Category(str, Enum):
    HOODIES = "Hoodies"
    TSHIRT = "Tshirt"
    OVERSIZE_TSHIRT = "Oversize-Tshirt"
    COUPLE_TSHIRT = "Couple-Tshirt"
    POLO_TSHIRT = "Polo-Tshirt"
    PLAIN_TSHIRT = "Plain-Tshirt"


class Gender(str, Enum):
    UNISEX = "Unisex"
    MALE = "Male"
    FEMALE = "Female"


class Product(BaseModel):
    """Product model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    description: str = ""
    category: str = Category.HOODIES.value
    gender: Optional[str] = None
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    size: List[str] = Field(default_factory=list)
    color: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    details: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        alias_generator = to_camel
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
