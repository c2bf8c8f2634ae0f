class StorefrontError(Exception):
    """Base class for failures talking to the commerce backend."""

    default_message = "Something went wrong"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(StorefrontError):
    default_message = "Authentication required"


class BackendError(StorefrontError):
    """Non-2xx response or transport failure."""

    def __init__(self, message=None, status=None, payload=None):
        self.status = status
        self.payload = payload
        super().__init__(message or (f"HTTP error! status: {status}" if status else None))


class MalformedResponse(StorefrontError):
    default_message = "Malformed response from backend"
