import json
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from common import toasts
from common.exceptions import AuthenticationRequired, BackendError, StorefrontError
from common.session import session_for
from product.client import ProductClient, ProductForm
from product.serializers import ProductDataSerializer

from .permissions import IsStorefrontAdmin
from .sidebar import build_sidebar, fetch_open_chats

logger = logging.getLogger(__name__)

# fields that arrive JSON-encoded inside multipart forms
JSON_FIELDS = ("specifications", "ideal_for", "colors", "images")


def _payload(data):
    """Flatten request.data into a plain dict, decoding JSON-encoded form fields."""
    payload = {}
    for key in data.keys():
        if key in ("images[]", "files[]"):
            continue
        payload[key] = data.get(key)
    for key in JSON_FIELDS:
        raw = payload.get(key)
        if isinstance(raw, str):
            try:
                payload[key] = json.loads(raw)
            except ValueError:
                pass
    return payload


def _form_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _uploads(request, name="images[]"):
    files = request.FILES.getlist(name) or request.FILES.getlist("images")
    return [(f.name, f.read(), f.content_type) for f in files]


def _failure(exc, title):
    if isinstance(exc, AuthenticationRequired):
        code = status.HTTP_401_UNAUTHORIZED
        toast = toasts.auth_required()
    else:
        code = exc.status if isinstance(exc, BackendError) and exc.status else status.HTTP_502_BAD_GATEWAY
        toast = toasts.error(title, exc.message)
    return Response({"success": False, "message": exc.message, "toast": toast.as_dict()}, status=code)


@api_view(["GET"])
@permission_classes([IsStorefrontAdmin])
def admin_sidebar(request):
    path = request.query_params.get("path", "/admin")
    open_chats = fetch_open_chats(session_for(request))
    return Response(build_sidebar(path, open_chats))


@api_view(["GET"])
@permission_classes([IsStorefrontAdmin])
def admin_chat_stats(request):
    return Response({"open_conversations": fetch_open_chats(session_for(request))})


class AdminProductCreate(APIView):
    permission_classes = [IsStorefrontAdmin]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        serializer = ProductDataSerializer(data=_payload(request.data))
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.to_backend()
        uploads = _uploads(request)
        if uploads:
            data = ProductForm(
                fields={k: _form_value(v) for k, v in data.items() if v is not None},
                files=[("images[]", f) for f in uploads],
            )
        try:
            product = ProductClient(session_for(request)).create_product(data)
        except StorefrontError as exc:
            return _failure(exc, "Create Failed")
        return Response(
            {"success": True, "data": product, "toast": toasts.success("Product Created").as_dict()},
            status=status.HTTP_201_CREATED,
        )


class AdminProductDetail(APIView):
    permission_classes = [IsStorefrontAdmin]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def patch(self, request, pk):
        serializer = ProductDataSerializer(data=_payload(request.data), partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.to_backend()
        if request.content_type and request.content_type.startswith("multipart/"):
            data = ProductForm(
                fields={k: _form_value(v) for k, v in data.items() if v is not None},
                files=[("images[]", f) for f in _uploads(request)],
            )
        try:
            result = ProductClient(session_for(request)).update_product(pk, data)
        except StorefrontError as exc:
            return _failure(exc, "Update Failed")
        return Response({"success": True, "data": result, "toast": toasts.success("Product Updated").as_dict()})

    put = patch

    def delete(self, request, pk):
        try:
            ProductClient(session_for(request)).delete_product(pk)
        except StorefrontError as exc:
            return _failure(exc, "Delete Failed")
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminImageUpload(APIView):
    permission_classes = [IsStorefrontAdmin]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        uploads = _uploads(request)
        if not uploads:
            return Response({"success": False, "message": "No images provided"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            urls = ProductClient(session_for(request)).upload_images(uploads)
        except StorefrontError as exc:
            return _failure(exc, "Upload Failed")
        logger.info("Uploaded %d image(s)", len(urls))
        return Response({"success": True, "urls": urls}, status=status.HTTP_201_CREATED)
