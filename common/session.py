"""
Session providers.

Every client is handed one of these instead of reaching for a global slot.
The stored value has the shape ``{"token": "...", "user": {...}}``.
"""
import logging

from .conf import storefront_setting

logger = logging.getLogger(__name__)


class SessionProvider:
    """Read/write access to the signed-in session, if there is one."""

    def get_session(self):
        raise NotImplementedError

    def set_session(self, data):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError

    def get_token(self):
        session = self.get_session()
        if not isinstance(session, dict):
            return None
        return session.get("token") or None

    def get_user(self):
        session = self.get_session()
        if not isinstance(session, dict):
            return None
        user = session.get("user")
        return user if isinstance(user, dict) else None

    def get_user_id(self):
        user = self.get_user() or {}
        return user.get("id")

    @property
    def is_authenticated(self):
        return bool(self.get_token())

    def auth_header(self):
        token = self.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}


class DjangoSessionProvider(SessionProvider):
    """Keeps the session dict under a fixed key of a Django session."""

    def __init__(self, django_session, key=None):
        self.django_session = django_session
        self.key = key or storefront_setting("SESSION_STORAGE_KEY")

    def get_session(self):
        try:
            return self.django_session.get(self.key)
        except Exception:
            # unreadable or tampered cookie is treated as a guest
            logger.exception("Could not read storefront session")
            return None

    def set_session(self, data):
        self.django_session[self.key] = data
        self.django_session.modified = True

    def clear(self):
        if self.key in self.django_session:
            del self.django_session[self.key]
            self.django_session.modified = True


class StaticSessionProvider(SessionProvider):
    """In-memory provider for scripts, websocket scopes and tests."""

    def __init__(self, token=None, user=None):
        self._data = {"token": token, "user": user} if token else None

    def get_session(self):
        return self._data

    def set_session(self, data):
        self._data = data

    def clear(self):
        self._data = None


def session_for(request):
    """The provider attached by SessionTokenMiddleware, or a fresh one."""
    provider = getattr(request, "storefront_session", None)
    if provider is None:
        provider = DjangoSessionProvider(request.session)
    return provider
