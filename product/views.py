import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from common import toasts
from common.exceptions import BackendError, StorefrontError
from common.session import session_for

from .categories import get_category_from_display_name
from .client import ProductClient
from .serializers import CategorySerializer, ProductFilterSerializer

logger = logging.getLogger(__name__)


def _backend_failure(exc, title):
    code = exc.status if isinstance(exc, BackendError) and exc.status else status.HTTP_502_BAD_GATEWAY
    return Response(
        {"success": False, "message": exc.message, "toast": toasts.error(title, exc.message).as_dict()},
        status=code,
    )


class ProductListAPIView(APIView):
    """
    GET /products/?search=&category=&min_price=&max_price=&in_stock=&sort_by=&sort_order=
    ``category`` accepts either the code (E-Bike) or its display name.
    """

    def get(self, request):
        filters = ProductFilterSerializer(data=request.query_params.dict())
        if not filters.is_valid():
            return Response({"success": False, "errors": filters.errors}, status=status.HTTP_400_BAD_REQUEST)

        params = dict(filters.validated_data)
        if params.get("category"):
            params["category"] = get_category_from_display_name(params["category"])

        try:
            products = ProductClient(session_for(request)).get_products(params)
        except StorefrontError as exc:
            return _backend_failure(exc, "Failed to Load Products")
        return Response({"success": True, "data": products, "total": len(products)})


class FeaturedProductListAPIView(APIView):

    def get(self, request):
        try:
            products = ProductClient(session_for(request)).get_featured_products()
        except StorefrontError as exc:
            return _backend_failure(exc, "Failed to Load Products")
        return Response({"success": True, "data": products})


class ProductDetailAPIView(APIView):

    def get(self, request, pk):
        try:
            product = ProductClient(session_for(request)).get_product(pk)
        except StorefrontError as exc:
            return _backend_failure(exc, "Product Unavailable")
        return Response({"success": True, "data": product})


class CategoryListAPIView(APIView):

    def get(self, request):
        categories = ProductClient(session_for(request)).get_categories()
        data = CategorySerializer([{"value": c} for c in categories if isinstance(c, str)], many=True).data
        return Response({"success": True, "data": data})
