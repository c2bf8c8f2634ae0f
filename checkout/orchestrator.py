"""
Checkout flow.

The customer must be signed in before the shipping and payment steps are
offered::

    login <-> register
      \\        /
     authenticated --submit--> order placed

A CheckoutFlow is rebuilt on every request from the CheckoutState kept in
the Django session; passwords are never part of that state.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlencode

from accounts.client import AuthClient
from accounts.serializers import MIN_PASSWORD_LENGTH
from cart.client import CartClient, clear_cart_after_checkout
from cart.summary import ZERO, item_field, shipping_for
from common import toasts
from common.exceptions import StorefrontError
from common.numbers import safe_number, to_money
from common.signals import broadcast, order_placed
from order.client import OrdersClient

from .serializers import PAYMENT_METHODS
from .validators import SHIPPING_FIELDS, clean_shipping_value, shipping_error, to_wire

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "cod"


class CheckoutMode(str, enum.Enum):
    LOGIN = "login"
    REGISTER = "register"
    AUTHENTICATED = "authenticated"


@dataclass
class CheckoutOutcome:
    ok: bool
    toast: Optional[toasts.Toast] = None
    redirect: Optional[str] = None
    field: Optional[str] = None
    data: Any = None


@dataclass
class CheckoutState:
    mode: CheckoutMode = CheckoutMode.LOGIN
    shipping_info: dict = field(default_factory=lambda: {name: "" for name in SHIPPING_FIELDS})
    payment_method: str = DEFAULT_PAYMENT_METHOD

    def as_dict(self):
        return {
            "mode": self.mode.value,
            "shipping_info": dict(self.shipping_info),
            "payment_method": self.payment_method,
        }

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        try:
            mode = CheckoutMode(data.get("mode"))
        except ValueError:
            mode = CheckoutMode.LOGIN
        shipping = {name: "" for name in SHIPPING_FIELDS}
        shipping.update({k: v for k, v in (data.get("shipping_info") or {}).items() if k in shipping})
        return cls(mode=mode, shipping_info=shipping, payment_method=data.get("payment_method") or DEFAULT_PAYMENT_METHOD)


def split_name(name):
    parts = (name or "").split(" ")
    return parts[0] if parts else "", " ".join(parts[1:])


def order_totals(cart):
    """(subtotal, shipping_fee, total) as charged at checkout; no tax is added here."""
    subtotal = ZERO
    for item in cart:
        quantity = int(safe_number(item_field(item, "quantity")))
        subtotal += to_money(item_field(item, "price")) * quantity
    shipping = shipping_for(subtotal)
    return subtotal, shipping, subtotal + shipping


class CheckoutFlow:

    def __init__(
        self,
        session,
        cart_client=None,
        auth_client=None,
        orders_client=None,
        state=None,
        clear_after_checkout=clear_cart_after_checkout,
    ):
        self.session = session
        self.cart_client = cart_client or CartClient(session)
        self.auth_client = auth_client or AuthClient(session)
        self.orders_client = orders_client or OrdersClient(session)
        self.state = state or CheckoutState()
        self.clear_after_checkout = clear_after_checkout
        self.cart = []

    @property
    def mode(self):
        return self.state.mode

    @property
    def is_authenticated(self):
        return self.state.mode is CheckoutMode.AUTHENTICATED

    # ---- lifecycle ----

    def start(self):
        user = self.auth_client.get_current_user()
        if user:
            self.state.mode = CheckoutMode.AUTHENTICATED
            self._prefill(user, overwrite=False)
        elif self.is_authenticated:
            # session expired since the last step
            self.state.mode = CheckoutMode.LOGIN

        self.refresh_cart()
        if not self.cart:
            return CheckoutOutcome(ok=False, redirect="/cart")
        return CheckoutOutcome(ok=True)

    def refresh_cart(self):
        self.cart = self.cart_client.list()
        return self.cart

    def switch_mode(self, mode):
        mode = CheckoutMode(mode)
        if self.is_authenticated or mode is CheckoutMode.AUTHENTICATED:
            return CheckoutOutcome(ok=False, toast=toasts.error("Checkout", "Sign in or create an account to continue"))
        self.state.mode = mode
        return CheckoutOutcome(ok=True)

    def _prefill(self, user, overwrite=True):
        first, last = split_name(user.get("name", ""))
        values = {
            "first_name": clean_shipping_value("first_name", first),
            "last_name": clean_shipping_value("last_name", last),
            "email": user.get("email") or "",
        }
        for name, value in values.items():
            if overwrite or not self.state.shipping_info.get(name):
                self.state.shipping_info[name] = value

    # ---- authentication ----

    def login(self, email, password):
        try:
            result = self.auth_client.login(email, password)
        except StorefrontError as exc:
            return CheckoutOutcome(ok=False, toast=toasts.error("Login Failed", exc.message or "Invalid credentials"))
        return self._authenticated(result["user"], f"Welcome back, {result['user'].get('name', '')}!")

    def register(self, name, email, password, confirm_password):
        if password != confirm_password:
            return CheckoutOutcome(ok=False, field="confirm_password", toast=toasts.error("Password Mismatch", "Passwords do not match"))
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return CheckoutOutcome(
                ok=False,
                field="password",
                toast=toasts.validation_error(f"Password must be at least {MIN_PASSWORD_LENGTH} characters"),
            )
        try:
            user = self.auth_client.register(email, password, name)
        except StorefrontError as exc:
            return CheckoutOutcome(ok=False, toast=toasts.error("Registration Failed", exc.message or "Registration failed"))
        return self._authenticated(user, f"Welcome, {user.get('name', '')}!")

    def _authenticated(self, user, greeting):
        self._prefill(user)
        self.state.mode = CheckoutMode.AUTHENTICATED
        # the backend is expected to move guest cart items onto the account
        self.refresh_cart()
        return CheckoutOutcome(ok=True, toast=toasts.auth_success(greeting))

    # ---- shipping & payment ----

    def update_shipping(self, values):
        for name, value in values.items():
            if name in self.state.shipping_info:
                self.state.shipping_info[name] = clean_shipping_value(name, value)
        return self.state.shipping_info

    def set_payment_method(self, method):
        option = PAYMENT_METHODS.get(method)
        if not option or not option["enabled"]:
            return CheckoutOutcome(ok=False, field="payment_method", toast=toasts.validation_error("Payment method is not available"))
        self.state.payment_method = method
        return CheckoutOutcome(ok=True)

    def validate(self):
        problem = shipping_error(self.state.shipping_info)
        if problem:
            name, message = problem
            return CheckoutOutcome(ok=False, field=name, toast=toasts.validation_error(message))
        return CheckoutOutcome(ok=True)

    def build_order_payload(self):
        subtotal, shipping, total = order_totals(self.cart)
        return {
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "price": item.price,
                    "color": item.color,
                }
                for item in self.cart
            ],
            "shipping_info": to_wire(self.state.shipping_info),
            "payment_method": self.state.payment_method,
            "subtotal": float(subtotal),
            "shipping_fee": float(shipping),
            "total": float(total),
            "is_guest": False,
        }

    # ---- submission ----

    def submit(self):
        if not self.is_authenticated:
            return CheckoutOutcome(ok=False, toast=toasts.auth_required("Please sign in or create an account to place your order"))

        checked = self.validate()
        if not checked.ok:
            return checked

        if not self.cart:
            return CheckoutOutcome(ok=False, redirect="/cart", toast=toasts.error("Order Failed", "Your cart is empty"))

        payload = self.build_order_payload()
        try:
            result = self.orders_client.create(payload)
        except StorefrontError as exc:
            logger.exception("Error placing order")
            return CheckoutOutcome(ok=False, toast=toasts.error("Order Failed", exc.message))

        if not result.get("success"):
            message = result.get("message") or "Order failed"
            logger.error("Error placing order: %s", message)
            return CheckoutOutcome(ok=False, toast=toasts.error("Order Failed", message))

        order = result.get("data") or {}
        if self.clear_after_checkout(self.cart_client.clear):
            self.refresh_cart()
            toast = toasts.order_placed(order.get("order_number"))
        else:
            toast = toasts.warning("Order Placed", "Order successful but cart may need manual refresh")

        broadcast(order_placed, sender=CheckoutFlow, session=self.session)
        query = urlencode({"orderId": order.get("id", ""), "orderNumber": order.get("order_number", "")})
        return CheckoutOutcome(ok=True, toast=toast, redirect=f"/order-success?{query}", data=order)

    def snapshot(self):
        subtotal, shipping, total = order_totals(self.cart)
        return {
            "mode": self.state.mode.value,
            "shipping_info": dict(self.state.shipping_info),
            "payment_method": self.state.payment_method,
            "payment_methods": PAYMENT_METHODS,
            "totals": {"subtotal": subtotal, "shipping_fee": shipping, "total": total},
        }
