import logging
from dataclasses import dataclass

from common.backend import BackendClient, decode_json
from common.conf import storefront_setting
from common.exceptions import StorefrontError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidebarItem:
    title: str
    href: str
    has_notification: bool = False


SIDEBAR_ITEMS = (
    SidebarItem("Dashboard", "/admin"),
    SidebarItem("Products", "/admin/products"),
    SidebarItem("Orders", "/admin/orders"),
    SidebarItem("Customers", "/admin/customers"),
    SidebarItem("Analytics", "/admin/analytics"),
    SidebarItem("Chat Support", "/admin/chat", has_notification=True),
    SidebarItem("Testimonial", "/admin/testimonials"),
    SidebarItem("Inquiries", "/admin/contact"),
)


def fetch_open_chats(session, backend=None):
    """
    Active plus waiting conversations. This runs on a polling timer, so any
    failure quietly reads as zero.
    """
    token = session.get_token()
    if not token:
        return 0
    backend = backend or BackendClient()
    try:
        response = backend.get("chatbot/chat", token=token, params={"action": "admin_stats"})
        data = decode_json(response) or {}
    except StorefrontError:
        logger.exception("Failed to fetch open chats")
        return 0
    if not isinstance(data, dict) or not data.get("success"):
        return 0
    stats = data.get("data") or {}
    try:
        return int(stats.get("open_conversations") or 0)
    except (TypeError, ValueError, AttributeError):
        return 0


def build_sidebar(path, open_chats=0):
    items = []
    for item in SIDEBAR_ITEMS:
        badge = open_chats if item.has_notification and open_chats > 0 else None
        items.append(
            {
                "title": item.title,
                "href": item.href,
                "active": path == item.href,
                "badge": badge,
            }
        )
    return {
        "items": items,
        "open_chats": open_chats,
        "poll_seconds": storefront_setting("ADMIN_CHAT_POLL_SECONDS"),
    }
