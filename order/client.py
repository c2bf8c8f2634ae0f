import logging

from common.backend import BackendClient, decode_json
from common.exceptions import MalformedResponse

logger = logging.getLogger(__name__)


class OrdersClient:
    """
    Server-side caller of the orders resource.

    Sends the same headers the order proxy forwards, so the backend sees an
    identical request whichever way an order arrives.
    """

    def __init__(self, session, backend=None):
        self.session = session
        self.backend = backend or BackendClient()

    def create(self, payload):
        """Returns the decoded backend body whatever the status; callers check ``success``."""
        token = self.session.get_token()
        logger.info("Submitting order with %s item(s)", len(payload.get("items") or []))
        response = self.backend.post("orders", token=token, json=payload)
        body = decode_json(response)
        if not isinstance(body, dict):
            raise MalformedResponse(f"Unexpected order response (status {response.status_code})")
        return body

