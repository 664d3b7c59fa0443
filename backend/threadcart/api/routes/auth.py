import logging
from fastapi import APIRouter, Depends, status

from threadcart.api.deps import get_user_store
from threadcart.core.exceptions import InvalidArgumentError
from threadcart.core.security import create_access_token, get_password_hash, verify_password
from threadcart.models.user import User
from threadcart.repositories.users import UserStore
from threadcart.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    users: UserStore = Depends(get_user_store)
):
    """
    Register a new customer account.

    Returns a JWT access token so the client can sync its guest cart
    straight away. Admin accounts are not created through this endpoint.
    """
    if await users.find_by_email(request.email) is not None:
        raise InvalidArgumentError("User already exists")

    user = await users.insert(User(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password_hash=get_password_hash(request.password)
    ))
    logger.info(f"Registered user {user.id}")

    return RegisterResponse(
        message="User registered successfully",
        token=create_access_token(user.id)
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    users: UserStore = Depends(get_user_store)
):
    """
    Login with email and password.

    Returns a JWT access token on success.
    """
    user = await users.find_by_email(request.email)

    # Same message for unknown email and wrong password
    if user is None or not verify_password(request.password, user.password_hash):
        raise InvalidArgumentError("Invalid email or password")

    return LoginResponse(
        id=user.id,
        role=user.role,
        message="Login successful",
        token=create_access_token(user.id)
    )
