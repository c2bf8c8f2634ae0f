import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from common.backend import BackendClient, decode_json, parse_envelope
from common.conf import storefront_setting
from common.exceptions import MalformedResponse, StorefrontError
from common.numbers import safe_number
from common.signals import broadcast, cart_cleared, cart_updated

from .items import CartItem

logger = logging.getLogger(__name__)

AUTH = "auth"
HTTP = "http"
MALFORMED = "malformed"


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    message: str = ""
    data: Any = None
    kind: Optional[str] = None

    def __bool__(self):
        return self.ok

    @classmethod
    def failure(cls, message, kind=HTTP):
        return cls(ok=False, message=message, kind=kind)


AUTH_REQUIRED = MutationResult.failure("Authentication required", AUTH)


def _safe_quantity(quantity):
    return int(max(1, safe_number(quantity)))


class CartClient:
    """Cart operations against the backend on behalf of one session."""

    def __init__(self, session, backend=None):
        self.session = session
        self.backend = backend or BackendClient()

    def list(self):
        token = self.session.get_token()
        if not token:
            return []
        try:
            response = self.backend.get("cart", token=token)
            envelope = parse_envelope(decode_json(response))
        except StorefrontError:
            logger.exception("Get cart error")
            return []
        if not envelope.success:
            return []
        return [CartItem.from_payload(raw) for raw in envelope.as_list() if isinstance(raw, dict)]

    def add(self, product_id, quantity=1, color=None):
        token = self.session.get_token()
        if not token:
            return AUTH_REQUIRED

        body = {"product_id": product_id, "quantity": _safe_quantity(quantity), "color": color}
        result = self._mutate("POST", "cart", token, json=body, fallback="Failed to add to cart")
        if result.ok and isinstance(result.data, dict):
            result = MutationResult(ok=True, message=result.message, data=CartItem.from_payload(result.data))
        return result

    def update_quantity(self, item_id, quantity):
        token = self.session.get_token()
        if not token:
            return AUTH_REQUIRED
        return self._mutate(
            "PUT",
            f"cart/{item_id}",
            token,
            json={"quantity": _safe_quantity(quantity)},
            fallback="Failed to update quantity",
        )

    def remove(self, item_id):
        token = self.session.get_token()
        if not token:
            return AUTH_REQUIRED
        return self._mutate("DELETE", f"cart/{item_id}", token, fallback="Failed to remove item")

    def clear(self):
        token = self.session.get_token()
        if not token:
            logger.error("No authentication token found")
            return AUTH_REQUIRED

        logger.info("Attempting to clear cart with token: %s...", token[:10])
        try:
            response = self.backend.delete("cart/clear", token=token)
            logger.info("Clear cart response status: %s", response.status_code)
            if not response.ok:
                logger.error("Clear cart HTTP error: %s %s", response.status_code, response.text)
                return MutationResult.failure(f"HTTP {response.status_code}: {response.text}")
            payload = decode_json(response)
        except StorefrontError as exc:
            logger.exception("Clear cart error")
            return MutationResult.failure(exc.message, MALFORMED if isinstance(exc, MalformedResponse) else HTTP)

        envelope = parse_envelope(payload)
        if not envelope.success:
            logger.error("Failed to clear cart: %s", envelope.message)
            return MutationResult.failure(envelope.message or "Failed to clear cart")

        broadcast(cart_updated, sender=CartClient, session=self.session)
        broadcast(cart_cleared, sender=CartClient, session=self.session)
        deleted = payload.get("deleted_items", 0) if isinstance(payload, dict) else 0
        logger.info("Cart cleared successfully, deleted items: %s", deleted or 0)
        return MutationResult(ok=True, message=envelope.message or "Cart cleared", data=deleted or 0)

    def _mutate(self, method, path, token, fallback, **kwargs):
        try:
            response = self.backend.request(method, path, token=token, **kwargs)
            payload = decode_json(response)
        except StorefrontError as exc:
            logger.exception("%s %s error", method, path)
            return MutationResult.failure(exc.message, MALFORMED if isinstance(exc, MalformedResponse) else HTTP)

        envelope = parse_envelope(payload)
        if not envelope.success:
            return MutationResult.failure(envelope.message or fallback)

        broadcast(cart_updated, sender=CartClient, session=self.session)
        return MutationResult(ok=True, message=envelope.message or "", data=envelope.data)


def clear_cart_after_checkout(clear, attempts=None, delay=None, sleep=time.sleep):
    """
    Best-effort cart clear after an order went through.

    ``clear`` is called up to ``attempts`` times with ``delay`` seconds between
    tries. A falsy result or an exception counts as a failed try. Always
    returns a bool.
    """
    attempts = storefront_setting("CLEAR_RETRY_ATTEMPTS") if attempts is None else attempts
    delay = storefront_setting("CLEAR_RETRY_DELAY") if delay is None else delay

    logger.info("Clearing cart after checkout...")
    last_error = None
    for attempt in range(1, attempts + 1):
        try:
            result = clear()
            if result:
                logger.info("Cart cleared after successful checkout")
                return True
            last_error = getattr(result, "message", None) or "clear returned a failure"
        except Exception as exc:
            last_error = str(exc)
        logger.warning("Cart clear attempt %s failed: %s", attempt, last_error)

        if attempt < attempts:
            logger.info("Waiting before retry attempt %s...", attempt + 1)
            sleep(delay)

    logger.error("Failed to clear cart after multiple attempts. Last error: %s", last_error)
    return False
