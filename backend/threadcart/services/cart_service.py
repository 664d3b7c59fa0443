"""
Cart aggregator.

The module-level functions merge, remove and update line items on an
in-memory Cart and leave ``total_price`` recomputed; they never touch the
database. CartService wraps them with the two collaborator calls (Product
Lookup and Cart Store) that every HTTP handler needs.
"""
import logging
from typing import Dict, List, Optional

from threadcart.core.exceptions import InvalidArgumentError, NotFoundError
from threadcart.models.cart import Cart, CartItem, OfferDetails
from threadcart.models.product import Product
from threadcart.repositories.carts import CartStore
from threadcart.repositories.products import ProductLookup
from threadcart.schemas.cart import SyncCartItem
from threadcart.services.pricing import (
    DEFAULT_POLICY,
    PricingPolicy,
    compute_bundle_offer,
    line_total,
    recalculate,
)
from threadcart.utils.helpers import normalize_color

logger = logging.getLogger(__name__)


def find_item_index(
    cart: Cart,
    product_id: str,
    size: Optional[str] = None,
    color: Optional[str] = None
) -> int:
    """
    Index of the first item for ``product_id``, or -1.

    ``size`` and ``color`` narrow the match only when given, so a full merge
    key selects exactly one item and a bare product id selects the first.
    """
    for index, item in enumerate(cart.items):
        if item.product_id != product_id:
            continue
        if size is not None and item.size != size:
            continue
        if color is not None and item.color != color:
            continue
        return index
    return -1


def _merge_into(cart: Cart, incoming: CartItem, policy: PricingPolicy) -> CartItem:
    index = find_item_index(cart, incoming.product_id, incoming.size, incoming.color)
    if index >= 0:
        existing = cart.items[index]
        existing.quantity += incoming.quantity
        existing.gift_wrapping = incoming.gift_wrapping  # last write wins
        existing.line_total = line_total(existing, policy)
        return existing

    incoming.line_total = line_total(incoming, policy)
    cart.items.append(incoming)
    return incoming


def add_or_merge_item(
    cart: Cart,
    product: Product,
    quantity: int,
    size: str,
    color: str,
    gift_wrapping: bool = False,
    policy: PricingPolicy = DEFAULT_POLICY
) -> CartItem:
    """
    Add ``quantity`` of a resolved product to the cart.

    Items sharing (product id, size, color) merge: quantities sum and the
    gift wrapping flag is overwritten. A new item snapshots price, name and
    images from ``product``.

    Raises:
        InvalidArgumentError: If quantity < 1, size is missing, or color is
            missing for a product that has color variants
    """
    if quantity is None or quantity < 1:
        raise InvalidArgumentError("Quantity must be at least 1")
    if not size:
        raise InvalidArgumentError("Size is required")
    color = normalize_color(color)
    if not color and product.color:
        raise InvalidArgumentError("Color is required")

    item = _merge_into(
        cart,
        CartItem(
            product_id=product.id,
            quantity=quantity,
            size=size,
            color=color,
            gift_wrapping=gift_wrapping,
            unit_price=product.price,
            name=product.name,
            images=list(product.images),
        ),
        policy
    )
    recalculate(cart, policy)
    return item


def sync_local_items(
    cart: Cart,
    incoming_items: List[SyncCartItem],
    policy: PricingPolicy = DEFAULT_POLICY
) -> Cart:
    """
    Merge a client-side cart into the stored cart.

    Same merge rule as add_or_merge_item. Price, name and images on new items
    come from the client payload, not from the catalog.
    """
    for incoming in incoming_items:
        if incoming.quantity < 1:
            raise InvalidArgumentError("Quantity must be at least 1")
        _merge_into(
            cart,
            CartItem(
                product_id=incoming.product_id,
                quantity=incoming.quantity,
                size=str(getattr(incoming.size, "value", incoming.size)),
                color=normalize_color(incoming.color),
                gift_wrapping=incoming.gift_wrapping,
                unit_price=incoming.price,
                name=incoming.name,
                images=list(incoming.images),
            ),
            policy
        )
    return recalculate(cart, policy)


def remove_item(
    cart: Cart,
    product_id: str,
    size: Optional[str] = None,
    color: Optional[str] = None,
    policy: PricingPolicy = DEFAULT_POLICY
) -> CartItem:
    """
    Remove the first matching item (see find_item_index).

    Raises:
        NotFoundError: If no item matches; the cart is left unchanged
    """
    index = find_item_index(cart, product_id, size, color)
    if index == -1:
        raise NotFoundError("Product not found in cart")

    removed = cart.items.pop(index)
    recalculate(cart, policy)
    return removed


def update_item_quantity(
    cart: Cart,
    product_id: str,
    quantity: int,
    policy: PricingPolicy = DEFAULT_POLICY
) -> CartItem:
    """
    Set the quantity of the first item for ``product_id``.

    Replaces the quantity rather than adding to it. Line and cart totals are
    recomputed.

    Raises:
        InvalidArgumentError: If quantity < 1
        NotFoundError: If the product is not in the cart
    """
    if quantity is None or quantity < 1:
        raise InvalidArgumentError("Quantity must be at least 1")

    index = find_item_index(cart, product_id)
    if index == -1:
        raise NotFoundError("Product not found in cart")

    item = cart.items[index]
    item.quantity = quantity
    recalculate(cart, policy)
    return item


def clear_items(cart: Cart) -> Cart:
    cart.items = []
    cart.total_price = 0.0
    return cart


class CartService:
    """Cart operations against the injected Product Lookup and Cart Store."""

    def __init__(
        self,
        carts: CartStore,
        products: ProductLookup,
        policy: PricingPolicy = DEFAULT_POLICY
    ):
        self.carts = carts
        self.products = products
        self.policy = policy

    async def get_or_create_cart(self, user_id: str) -> Cart:
        """Load the user's cart, or a new unsaved one."""
        cart = await self.carts.find_by_user(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
        return cart

    async def get_existing_cart(self, user_id: str) -> Cart:
        cart = await self.carts.find_by_user(user_id)
        if cart is None:
            raise NotFoundError("Cart not found for this user")
        return cart

    async def add_item(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        size: str,
        color: str,
        gift_wrapping: bool = False
    ) -> Cart:
        """Resolve the product, merge it into the user's cart and persist."""
        product = await self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        cart = await self.get_or_create_cart(user_id)
        item = add_or_merge_item(
            cart, product, quantity, size, color,
            gift_wrapping=gift_wrapping,
            policy=self.policy
        )
        cart = await self.carts.save(cart)

        logger.info(
            f"User {user_id} added {quantity} x {product_id} ({size}/{color}); "
            f"line quantity now {item.quantity}, cart total {cart.total_price}"
        )
        return cart

    async def sync_cart(self, user_id: str, items: List[SyncCartItem]) -> Cart:
        cart = await self.get_or_create_cart(user_id)
        sync_local_items(cart, items, policy=self.policy)
        cart = await self.carts.save(cart)
        logger.info(f"Synced {len(items)} client items into cart of user {user_id}")
        return cart

    async def get_cart_with_offer(self, user_id: str) -> Dict:
        """
        Cart view with the bundle offer evaluated.

        Totals are recomputed from the stored line items rather than read
        back from the document. Categories come from the current catalog.
        """
        cart = await self.get_existing_cart(user_id)
        recalculate(cart, self.policy)

        products = await self.products.find_many_by_ids(item.product_id for item in cart.items)
        categories = {product_id: product.category for product_id, product in products.items()}
        offer: OfferDetails = compute_bundle_offer(cart.items, categories, self.policy)

        return {"cart": cart, "offer_details": offer}

    async def remove_item(
        self,
        user_id: str,
        product_id: str,
        size: Optional[str] = None,
        color: Optional[str] = None
    ) -> Cart:
        cart = await self.carts.find_by_user(user_id)
        if cart is None:
            raise NotFoundError("Cart not found")

        # Filters are compared against stored values, which are normalized on write
        if size is not None:
            size = size.strip()
        if color is not None:
            color = normalize_color(color)

        remove_item(cart, product_id, size=size, color=color, policy=self.policy)
        cart = await self.carts.save(cart)
        logger.info(f"Removed {product_id} from cart of user {user_id}")
        return cart

    async def update_item_quantity(self, user_id: str, product_id: str, quantity: int) -> CartItem:
        cart = await self.carts.find_by_user(user_id)
        if cart is None:
            raise NotFoundError("Cart not found")

        item = update_item_quantity(cart, product_id, quantity, policy=self.policy)
        await self.carts.save(cart)
        logger.info(f"Set quantity of {product_id} to {quantity} in cart of user {user_id}")
        return item

    async def clear_cart(self, user_id: str) -> Cart:
        """
        Empty the cart; the document itself is kept.

        Raises:
            NotFoundError: If the user has no cart; nothing is written
        """
        cart = await self.get_existing_cart(user_id)
        clear_items(cart)
        cart = await self.carts.save(cart)
        logger.info(f"Cleared cart of user {user_id}")
        return cart
