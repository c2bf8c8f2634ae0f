import logging

from common.backend import BackendClient, decode_json, error_message, parse_envelope
from common.exceptions import BackendError, MalformedResponse

logger = logging.getLogger(__name__)


class AuthClient:
    """Credential exchange with the backend; keeps the result in the session slot."""

    def __init__(self, session, backend=None):
        self.session = session
        self.backend = backend or BackendClient()

    def _exchange(self, path, body, fallback):
        response = self.backend.post(path, json=body)
        if not response.ok:
            raise BackendError(error_message(response, fallback), status=response.status_code)

        envelope = parse_envelope(decode_json(response))
        data = envelope.as_object()
        if not isinstance(data, dict) or envelope.payload.get("success") is False:
            raise BackendError(envelope.message or fallback, status=response.status_code)

        token = data.get("token") or data.get("access_token")
        user = data.get("user")
        if not token or not isinstance(user, dict):
            raise MalformedResponse("Login response is missing token or user")

        self.session.set_session({"token": token, "user": user})
        logger.info("Signed in user %s", user.get("id"))
        return {"user": user, "token": token}

    def login(self, email, password):
        return self._exchange("login", {"email": email, "password": password}, "Invalid credentials")

    def register(self, email, password, name):
        body = {"name": name, "email": email, "password": password, "password_confirmation": password}
        result = self._exchange("register", body, "Registration failed")
        return result["user"]

    def logout(self):
        token = self.session.get_token()
        if token:
            try:
                self.backend.post("logout", token=token)
            except BackendError:
                logger.warning("Backend logout failed; clearing local session anyway")
        self.session.clear()

    def get_current_user(self):
        if not self.session.get_token():
            return None
        return self.session.get_user()

    def is_admin(self):
        user = self.get_current_user() or {}
        return user.get("role") == "admin" or bool(user.get("is_admin"))
