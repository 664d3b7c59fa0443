"""
Order service for placing orders and managing their status.
"""
import logging
from typing import List, Optional, Tuple

from threadcart.core.exceptions import ForbiddenError, InvalidArgumentError, NotFoundError
from threadcart.models.order import Order, OrderItem, OrderStatus, OrderSummary
from threadcart.models.user import UserRole
from threadcart.repositories.orders import OrderStore
from threadcart.repositories.products import ProductLookup
from threadcart.schemas.order import OrderCreate
from threadcart.services.pricing import DEFAULT_POLICY, PricingPolicy, line_amount

logger = logging.getLogger(__name__)


def _is_admin(user: dict) -> bool:
    return user.get("role") == UserRole.ADMIN.value


class OrderService:
    """Order placement and lifecycle against the Order Store and Product Lookup."""

    # Valid status transitions
    STATUS_TRANSITIONS = {
        OrderStatus.PENDING.value: [OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value],
        OrderStatus.CONFIRMED.value: [OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value],
        OrderStatus.SHIPPED.value: [OrderStatus.DELIVERED.value],
        OrderStatus.DELIVERED.value: [],  # Final state
        OrderStatus.CANCELLED.value: [],  # Final state
    }

    def __init__(
        self,
        orders: OrderStore,
        products: ProductLookup,
        policy: PricingPolicy = DEFAULT_POLICY
    ):
        self.orders = orders
        self.products = products
        self.policy = policy

    @staticmethod
    def validate_status_transition(current_status: str, new_status: str) -> Tuple[bool, Optional[str]]:
        """
        Validate if status transition is allowed.
        Returns (is_valid, error_message)
        """
        if current_status not in OrderService.STATUS_TRANSITIONS:
            return False, f"Invalid current status: {current_status}"

        valid_next_statuses = OrderService.STATUS_TRANSITIONS[current_status]

        if new_status not in valid_next_statuses:
            if not valid_next_statuses:
                return False, f"Order is in final state '{current_status}' and cannot be modified"
            return False, (
                f"Cannot transition from '{current_status}' to '{new_status}'. "
                f"Valid transitions: {', '.join(valid_next_statuses)}"
            )

        return True, None

    async def create_order(self, user: dict, request: OrderCreate) -> Order:
        """
        Place an order for the authenticated user.

        Each line snapshots the product's current catalog name, images and
        price. subtotal is the sum of line totals (gift wrapping included);
        total adds the flat shipping and taxes from the request.

        Raises:
            NotFoundError: If any product id does not resolve
            InvalidArgumentError: If a size or color is not offered for a product
        """
        requested = request.order_summary.items
        product_ids = list(dict.fromkeys(item.product_id for item in requested))
        products = await self.products.find_many_by_ids(product_ids)

        missing = [product_id for product_id in product_ids if product_id not in products]
        if missing:
            raise NotFoundError(
                f"Products not found: {', '.join(missing)}",
                context={"missing_ids": missing}
            )

        items: List[OrderItem] = []
        for item in requested:
            product = products[item.product_id]
            size = item.size.value
            if product.size and size not in product.size:
                raise InvalidArgumentError(f"Size {size} is not available for {product.name}")
            if product.color and not item.color:
                raise InvalidArgumentError("Color is required")

            items.append(OrderItem(
                product_id=item.product_id,
                product_name=product.name,
                product_image=list(product.images),
                price=product.price,
                quantity=item.quantity,
                size=size,
                color=item.color,
                gift_wrapping=item.gift_wrapping,
                line_total=line_amount(product.price, item.quantity, item.gift_wrapping, self.policy),
            ))

        subtotal = round(sum(item.line_total for item in items), 2)
        shipping = request.order_summary.shipping
        taxes = request.order_summary.taxes

        order = Order(
            user_id=str(user["_id"]),
            user_email=user.get("email", ""),
            contact_information=request.contact_information,
            shipping_information=request.shipping_information,
            payment_information=request.payment_information,
            order_summary=OrderSummary(
                items=items,
                subtotal=subtotal,
                shipping=shipping,
                taxes=taxes,
                total=round(subtotal + shipping + taxes, 2),
            ),
        )
        order = await self.orders.insert(order)

        logger.info(f"Order {order.id} created for user {order.user_id}, total {order.order_summary.total}")
        return order

    async def list_orders(self, user: dict, skip: int = 0, limit: int = 50) -> List[Order]:
        """Admins see every order; everyone else sees their own."""
        user_id = None if _is_admin(user) else str(user["_id"])
        return await self.orders.list_orders(user_id=user_id, skip=skip, limit=limit)

    async def get_order(self, order_id: str, user: dict) -> Order:
        order = await self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")

        if not _is_admin(user) and order.user_id != str(user["_id"]):
            raise ForbiddenError("You can only view your own orders")
        return order

    async def update_order_status(self, order_id: str, new_status: OrderStatus) -> Order:
        order = await self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")

        new_value = OrderStatus(new_status).value
        is_valid, error_msg = self.validate_status_transition(order.status, new_value)
        if not is_valid:
            raise InvalidArgumentError(error_msg)

        updated = await self.orders.update_status(order_id, new_value)
        if updated is None:
            raise NotFoundError("Order not found")

        logger.info(f"Order {order_id} status {order.status} -> {new_value}")
        return updated

    async def delete_order(self, order_id: str) -> Order:
        order = await self.orders.delete(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        logger.info(f"Deleted order {order_id}")
        return order
