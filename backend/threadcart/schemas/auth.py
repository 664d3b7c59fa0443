from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel

from threadcart.models.user import UserRole


class RegisterRequest(BaseModel):
    """Register request schema."""
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)

    class Config:
        populate_by_name = True
        alias_generator = to_camel
        json_schema_extra = {
            "example": {
                "firstName": "Asha",
                "lastName": "Rao",
                "email": "asha@example.com",
                "password": "strongpassword123"
            }
        }


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterResponse(BaseModel):
    message: str
    token: str


class LoginResponse(BaseModel):
    id: str
    role: UserRole
    message: str
    token: str
    token_type: str = "bearer"
