"""
Cart pricing rules.

Pure functions over cart items: line totals, the cart total written at the
end of every mutation, and the bundle offer evaluated on the cart read path.
"""
from typing import Dict, Iterable, List

from pydantic import BaseModel

from threadcart.core.config import settings
from threadcart.models.cart import Cart, CartItem, OfferDetails


class PricingPolicy(BaseModel):
    """Flat fees and the bundle rule, supplied from settings at startup."""
    gift_wrapping_cost: float = 30.0
    bundle_category: str = "Tshirt"
    bundle_size: int = 3
    bundle_price: float = 1299.0

    class Config:
        frozen = True

    @classmethod
    def from_settings(cls) -> "PricingPolicy":
        return cls(
            gift_wrapping_cost=settings.GIFT_WRAPPING_COST,
            bundle_category=settings.BUNDLE_CATEGORY,
            bundle_size=settings.BUNDLE_SIZE,
            bundle_price=settings.BUNDLE_PRICE,
        )


DEFAULT_POLICY = PricingPolicy()


def _money(value: float) -> float:
    return round(value, 2)


def gift_wrapping_surcharge(item: CartItem, policy: PricingPolicy = DEFAULT_POLICY) -> float:
    return policy.gift_wrapping_cost if item.gift_wrapping else 0.0


def line_amount(
    unit_price: float,
    quantity: int,
    gift_wrapping: bool,
    policy: PricingPolicy = DEFAULT_POLICY
) -> float:
    """(unit price + gift wrapping surcharge) * quantity."""
    surcharge = policy.gift_wrapping_cost if gift_wrapping else 0.0
    return _money((unit_price + surcharge) * quantity)


def line_total(item: CartItem, policy: PricingPolicy = DEFAULT_POLICY) -> float:
    return line_amount(item.unit_price, item.quantity, item.gift_wrapping, policy)


def compute_cart_total(items: Iterable[CartItem]) -> float:
    """Sum of the stored line totals."""
    return _money(sum(item.line_total for item in items))


def recalculate(cart: Cart, policy: PricingPolicy = DEFAULT_POLICY) -> Cart:
    """
    Refresh every line total from its stored unit price, then the cart total.

    Uses the snapshot prices on the items only; the catalog is never
    consulted here. Safe to call repeatedly.
    """
    for item in cart.items:
        item.line_total = line_total(item, policy)
    cart.total_price = compute_cart_total(cart.items)
    return cart


def qualifies_for_bundle(
    item: CartItem,
    categories: Dict[str, str],
    policy: PricingPolicy = DEFAULT_POLICY
) -> bool:
    return item.quantity == 1 and categories.get(item.product_id) == policy.bundle_category


def compute_bundle_offer(
    items: List[CartItem],
    categories: Dict[str, str],
    policy: PricingPolicy = DEFAULT_POLICY
) -> OfferDetails:
    """
    Evaluate the bundle offer for a cart view.

    ``categories`` maps product id to catalog category. Exactly
    ``policy.bundle_size`` qualifying items (bundle category, quantity 1) are
    charged ``policy.bundle_price`` instead of their unit prices; gift
    wrapping on those items is still charged. Every other item prices
    normally. The stored items are not modified.
    """
    qualifying = [item for item in items if qualifies_for_bundle(item, categories, policy)]
    others = [item for item in items if not qualifies_for_bundle(item, categories, policy)]
    plain_total = _money(sum(line_total(item, policy) for item in items))

    offer = OfferDetails(
        category=policy.bundle_category,
        bundle_size=policy.bundle_size,
        bundle_price=policy.bundle_price,
        qualifying_items=len(qualifying),
        items_needed=max(0, policy.bundle_size - len(qualifying)),
        total_price=plain_total,
    )

    if len(qualifying) != policy.bundle_size:
        return offer

    # Applied whenever the count matches; savings go negative for cheap items
    individual = sum(item.unit_price for item in qualifying)
    savings = _money(individual - policy.bundle_price)

    bundle_total = policy.bundle_price + sum(gift_wrapping_surcharge(item, policy) for item in qualifying)
    offer.applied = True
    offer.savings = savings
    offer.total_price = _money(bundle_total + sum(line_total(item, policy) for item in others))
    return offer
