from django.conf import settings

DEFAULTS = {
    "BACKEND_API_URL": "http://localhost:8000/api",
    "SESSION_STORAGE_KEY": "session",
    "REQUEST_TIMEOUT": None,
    "CLEAR_RETRY_ATTEMPTS": 3,
    "CLEAR_RETRY_DELAY": 1.0,
    "ADMIN_CHAT_POLL_SECONDS": 15,
    "HERO_AUTOPLAY_SECONDS": 4,
}


def storefront_setting(name):
    overrides = getattr(settings, "STOREFRONT", {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
