"""
Cart totals. Pure functions over a list of cart items (CartItem objects or
plain dicts straight from the backend).
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from common.numbers import CENTS, format_price, safe_number, to_money

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("50000")
SHIPPING_FEE = Decimal("500")

ZERO = Decimal("0.00")


def item_field(item, name):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def calculate_item_total(price, quantity):
    return safe_number(price) * safe_number(quantity)


def line_total(item):
    # explicit total wins unless it is missing or zero
    total = safe_number(item_field(item, "total"))
    if total == 0:
        total = calculate_item_total(item_field(item, "price"), item_field(item, "quantity"))
    return total


def shipping_for(subtotal):
    return ZERO if Decimal(subtotal) > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE


def get_cart_items_count(cart_items):
    """Number of distinct line items, not the sum of quantities."""
    if not isinstance(cart_items, (list, tuple)):
        return 0
    return len(cart_items)


def get_cart_total(cart_items):
    if not isinstance(cart_items, (list, tuple)):
        return ZERO
    return sum((to_money(line_total(item)) for item in cart_items), ZERO)


def get_cart_subtotal(cart_items):
    return get_cart_total(cart_items)


@dataclass(frozen=True)
class CartSummary:
    item_count: int
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    def as_dict(self, formatted=False):
        data = {
            "item_count": self.item_count,
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping": self.shipping,
            "total": self.total,
        }
        if formatted:
            for key in ("subtotal", "tax", "shipping", "total"):
                data[f"{key}_display"] = format_price(data[key])
        return data


def get_cart_summary(cart_items):
    subtotal = get_cart_subtotal(cart_items)
    tax = (subtotal * TAX_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)
    shipping = shipping_for(subtotal)
    total = subtotal + tax + shipping

    return CartSummary(
        item_count=get_cart_items_count(cart_items),
        subtotal=max(ZERO, subtotal),
        tax=max(ZERO, tax),
        shipping=max(ZERO, shipping),
        total=max(ZERO, total),
    )


def validate_cart_item(item):
    if not item:
        return False
    price = safe_number(item_field(item, "price"))
    quantity = safe_number(item_field(item, "quantity"))
    return bool(price >= 0 and quantity > 0 and item_field(item, "id") and item_field(item, "product_id"))
