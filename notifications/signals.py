import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.dispatch import receiver

from common.signals import cart_cleared, cart_updated, order_placed

logger = logging.getLogger(__name__)

EVENT_NAMES = {
    cart_updated: "cart-updated",
    cart_cleared: "cart-cleared",
    order_placed: "order-placed",
}


def group_name(user_id):
    return f"user_{user_id}"


def push_event(event, session):
    """Fan an event out to the user's open websockets; nobody listening means it is dropped."""
    user_id = session.get_user_id() if session is not None else None
    if user_id is None:
        return False

    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False

    async_to_sync(channel_layer.group_send)(
        group_name(user_id),
        {
            "type": "storefront_event",  # handler method name in consumer
            "data": {"event": event},
        },
    )
    logger.debug("Pushed %s to %s", event, group_name(user_id))
    return True


@receiver(cart_updated)
def forward_cart_updated(sender, session=None, **kwargs):
    push_event(EVENT_NAMES[cart_updated], session)


@receiver(cart_cleared)
def forward_cart_cleared(sender, session=None, **kwargs):
    push_event(EVENT_NAMES[cart_cleared], session)


@receiver(order_placed)
def forward_order_placed(sender, session=None, **kwargs):
    push_event(EVENT_NAMES[order_placed], session)
