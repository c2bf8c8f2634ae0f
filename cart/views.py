from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from common import toasts
from common.session import session_for

from .client import AUTH, MALFORMED, CartClient
from .serializers import AddToCartSerializer, CartItemSerializer, UpdateQuantitySerializer
from .summary import get_cart_summary

FAILURE_STATUS = {
    AUTH: status.HTTP_401_UNAUTHORIZED,
    MALFORMED: status.HTTP_502_BAD_GATEWAY,
}


def _cart_payload(items):
    return {
        "items": CartItemSerializer(items, many=True).data,
        "summary": get_cart_summary(items).as_dict(formatted=True),
    }


def _mutation_response(result, success_title, failure_title, client=None):
    if not result:
        toast = toasts.auth_required() if result.kind == AUTH else toasts.error(failure_title, result.message)
        return Response(
            {"success": False, "message": result.message, "toast": toast.as_dict()},
            status=FAILURE_STATUS.get(result.kind, status.HTTP_400_BAD_REQUEST),
        )
    body = {"success": True, "message": result.message, "toast": toasts.success(success_title).as_dict()}
    if client is not None:
        body.update(_cart_payload(client.list()))
    return Response(body, status=status.HTTP_200_OK)


def _validation_response(serializer):
    field, errors = next(iter(serializer.errors.items()))
    message = f"{field}: {errors[0]}"
    return Response(
        {"success": False, "errors": serializer.errors, "toast": toasts.validation_error(message).as_dict()},
        status=status.HTTP_400_BAD_REQUEST,
    )


class CartListCreateAPIView(APIView):

    def get(self, request, format=None):
        client = CartClient(session_for(request))
        return Response(_cart_payload(client.list()), status=status.HTTP_200_OK)

    def post(self, request, format=None):
        serializer = AddToCartSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_response(serializer)

        client = CartClient(session_for(request))
        data = serializer.validated_data
        result = client.add(data["product_id"], data["quantity"], data.get("color") or None)
        return _mutation_response(result, "Added to Cart", "Add to Cart Failed", client)


class CartItemDetailAPIView(APIView):

    def patch(self, request, pk, format=None):
        """Update quantity only."""
        serializer = UpdateQuantitySerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_response(serializer)

        client = CartClient(session_for(request))
        result = client.update_quantity(pk, serializer.validated_data["quantity"])
        return _mutation_response(result, "Cart Updated", "Update Failed", client)

    put = patch

    def delete(self, request, pk, format=None):
        client = CartClient(session_for(request))
        result = client.remove(pk)
        return _mutation_response(result, "Item Removed", "Remove Failed", client)


class CartClearAPIView(APIView):

    def delete(self, request, format=None):
        client = CartClient(session_for(request))
        result = client.clear()
        return _mutation_response(result, "Cart Cleared", "Clear Cart Failed", client)
