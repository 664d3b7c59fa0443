from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from threadcart.api.deps import get_cart_service, get_current_user
from threadcart.core.exceptions import UnauthenticatedError
from threadcart.schemas.cart import (
    AddToCartRequest,
    SyncCartRequest,
    UpdateCartItemRequest,
    CartMessageResponse,
    CartViewResponse,
    UpdateCartItemResponse
)
from threadcart.services.cart_service import CartService

router = APIRouter()


@router.post("/add-to-cart", response_model=CartMessageResponse, status_code=status.HTTP_200_OK)
async def add_to_cart(
    request: AddToCartRequest,
    current_user: dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """
    Add a product to the authenticated user's cart.

    If the same product, size and color is already in the cart, the
    quantities are summed and the gift wrapping choice is replaced.
    """
    user_id = str(current_user["_id"])

    cart = await service.add_item(
        user_id=user_id,
        product_id=request.product_id,
        quantity=request.quantity,
        size=request.size.value,
        color=request.color,
        gift_wrapping=request.gift_wrapping
    )

    return CartMessageResponse(message="Item added to cart", cart=cart)


@router.get("/cart/{user_id}", response_model=CartViewResponse)
async def get_cart_items(
    user_id: str,
    service: CartService = Depends(get_cart_service)
):
    """
    Get a user's cart with the bundle offer evaluated.

    The offer is computed for this response only; stored items keep their
    own prices.
    """
    return await service.get_cart_with_offer(user_id)


@router.post("/sync-cart", response_model=CartMessageResponse)
async def sync_cart(
    request: SyncCartRequest,
    current_user: dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """
    Merge a client-side cart (guest or offline) into the stored cart after login.
    """
    if request.user_id != str(current_user["_id"]):
        raise UnauthenticatedError("Cannot sync another user's cart")

    cart = await service.sync_cart(request.user_id, request.items)
    return CartMessageResponse(message="Cart synced successfully", cart=cart)


@router.delete("/cart/remove-item/{user_id}/{product_id}", response_model=CartMessageResponse)
async def remove_item_from_cart(
    user_id: str,
    product_id: str,
    size: Optional[str] = Query(None),
    color: Optional[str] = Query(None),
    service: CartService = Depends(get_cart_service)
):
    """
    Remove an item from a cart.

    Matches on product id; pass size and color to target one variant.
    """
    cart = await service.remove_item(user_id, product_id, size=size, color=color)
    return CartMessageResponse(message="Item removed from cart", cart=cart)


@router.post("/cart/update-item", response_model=UpdateCartItemResponse)
async def update_cart_item(
    request: UpdateCartItemRequest,
    service: CartService = Depends(get_cart_service)
):
    """Set the quantity of an item already in the cart."""
    item = await service.update_item_quantity(
        user_id=request.user_id,
        product_id=request.product_id,
        quantity=request.quantity
    )
    return UpdateCartItemResponse(message="Cart updated successfully", quantity=item.quantity)


@router.delete("/cart/clear", response_model=CartMessageResponse)
async def clear_cart(
    current_user: dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Clear all items from the authenticated user's cart."""
    cart = await service.clear_cart(str(current_user["_id"]))
    return CartMessageResponse(message="Cart cleared", cart=cart)
