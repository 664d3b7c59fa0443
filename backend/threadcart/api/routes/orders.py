from fastapi import APIRouter, Depends, Query, status

from threadcart.api.deps import get_current_admin, get_current_user, get_order_service
from threadcart.models.order import Order
from threadcart.schemas.order import (
    OrderCreate,
    OrderListResponse,
    OrderMessageResponse,
    UpdateOrderStatusRequest
)
from threadcart.services.order_service import OrderService

router = APIRouter()


@router.post("/create-order", response_model=OrderMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: OrderCreate,
    current_user: dict = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order.

    This will:
    1. Resolve every product and snapshot its current price
    2. Compute subtotal and total from the snapshots
    3. Create the order in database with status Pending

    Payment is settled by the external provider before this call.
    """
    order = await service.create_order(current_user, request)
    return OrderMessageResponse(message="Order created successfully", order=order)


@router.get("/orders", response_model=OrderListResponse)
async def get_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    current_user: dict = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Get orders, newest first. Admins get every order, other users their own.
    """
    orders = await service.list_orders(current_user, skip=skip, limit=limit)
    return OrderListResponse(orders=orders, count=len(orders))


@router.get("/order/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    current_user: dict = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Get a specific order by ID.
    """
    return await service.get_order(order_id, current_user)


@router.patch("/update-status/{order_id}", response_model=OrderMessageResponse)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    admin: dict = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Move an order to its next status.

    Allowed: Pending -> Confirmed/Cancelled, Confirmed -> Shipped/Cancelled,
    Shipped -> Delivered. Delivered and Cancelled are final.
    """
    order = await service.update_order_status(order_id, request.status)
    return OrderMessageResponse(message="Order status updated successfully", order=order)


@router.delete("/delete-order/{order_id}", response_model=OrderMessageResponse)
async def delete_order(
    order_id: str,
    admin: dict = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service)
):
    order = await service.delete_order(order_id)
    return OrderMessageResponse(message="Order deleted successfully", order=order)
