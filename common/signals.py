"""
In-process storefront events.

Receivers get ``sender`` (the client class) and ``session`` (the
SessionProvider the mutation ran under). Events carry no payload and are
only sent after the backend confirmed the change.
"""
import logging

from django.dispatch import Signal

logger = logging.getLogger(__name__)

cart_updated = Signal()
cart_cleared = Signal()
order_placed = Signal()


def broadcast(signal, sender, session=None):
    """Fire-and-forget: a failing receiver is logged, never raised."""
    for receiver, result in signal.send_robust(sender=sender, session=session):
        if isinstance(result, Exception):
            logger.error("Receiver %r failed for %s: %s", receiver, sender.__name__, result)
