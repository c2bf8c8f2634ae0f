import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.backend import BackendClient

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"success": False, "message": "Internal server error"}
AUTH_REQUIRED = {"success": False, "message": "Authentication required"}


def _authorization(request):
    return request.META.get("HTTP_AUTHORIZATION") or None


class OrderProxyView(APIView):
    """
    Pass-through to ``{backend}/orders``.

    GET  -> list the caller's orders; needs an Authorization header.
    POST -> create an order; Authorization is forwarded when present so
            guest orders still go through.
    Backend status and body are relayed unchanged.
    """

    backend_class = BackendClient

    def get(self, request):
        auth = _authorization(request)
        if not auth:
            return Response(AUTH_REQUIRED, status=status.HTTP_401_UNAUTHORIZED)

        try:
            response = self.backend_class().get("orders", headers={"Authorization": auth})
            data = response.json()
        except Exception:
            logger.exception("Orders GET error")
            return Response(INTERNAL_ERROR, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(data, status=response.status_code)

    def post(self, request):
        auth = _authorization(request)
        try:
            body = request.data
            headers = {"Content-Type": "application/json"}
            if auth:
                headers["Authorization"] = auth

            # log line only; whatever the body is gets forwarded as-is
            fields = body if isinstance(body, dict) else {}
            shipping = fields.get("shipping_info") or {}
            logger.info(
                "Creating order: hasAuth=%s isGuest=%s email=%s",
                bool(auth),
                fields.get("is_guest"),
                shipping.get("email") if isinstance(shipping, dict) else None,
            )

            response = self.backend_class().post("orders", json=body, headers=headers)
            data = response.json()

            logger.info(
                "Order creation response: status=%s success=%s message=%s",
                response.status_code,
                data.get("success") if isinstance(data, dict) else None,
                data.get("message") if isinstance(data, dict) else None,
            )
        except Exception:
            logger.exception("Orders POST error")
            return Response(INTERNAL_ERROR, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(data, status=response.status_code)
