import logging
from dataclasses import dataclass, field
from typing import List

from common.backend import BackendClient, decode_json, error_message, parse_envelope
from common.exceptions import AuthenticationRequired, BackendError, MalformedResponse, StorefrontError

from .categories import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

FILTER_KEYS = ("search", "category", "min_price", "max_price", "in_stock", "sort_by", "sort_order")
SORT_FIELDS = ("name", "price", "created_at", "updated_at")

UPDATED = {"success": True, "message": "Product updated successfully"}


@dataclass
class ProductForm:
    """Multipart submission: plain fields plus ``(name, file)`` uploads."""

    fields: dict = field(default_factory=dict)
    files: List[tuple] = field(default_factory=list)


def build_query(filters=None):
    """Only set filters become query parameters; booleans go out as true/false."""
    params = {}
    for key in FILTER_KEYS:
        value = (filters or {}).get(key)
        if value is None:
            continue
        if key in ("search", "category", "sort_by", "sort_order") and value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[key] = str(value)
    return params


class ProductClient:
    base_path = "products"

    def __init__(self, session, backend=None):
        self.session = session
        self.backend = backend or BackendClient()

    def _require_token(self):
        token = self.session.get_token()
        if not token:
            raise AuthenticationRequired()
        return token

    def _read(self, path, params=None):
        response = self.backend.get(path, params=params or None)
        if not response.ok:
            raise BackendError(status=response.status_code)
        return parse_envelope(decode_json(response))

    # ---- reads ----

    def get_products(self, filters=None):
        params = build_query(filters)
        logger.info("Fetching products with %s", params or "no filters")
        try:
            return self._read(self.base_path, params).as_list()
        except StorefrontError:
            logger.exception("Error fetching products")
            raise

    def get_featured_products(self):
        try:
            return self._read(f"{self.base_path}/featured").as_list()
        except StorefrontError:
            logger.exception("Error fetching featured products")
            raise

    def get_products_by_category(self, category, **filters):
        filters.pop("category", None)
        return self.get_products({"category": category, **filters})

    def get_product(self, product_id):
        try:
            return self._read(f"{self.base_path}/{product_id}").as_object()
        except StorefrontError:
            logger.exception("Error fetching product %s", product_id)
            raise

    def search_products(self, term, category=None):
        return self.get_products({"search": term, "category": category})

    def get_products_by_price_range(self, min_price, max_price, category=None):
        return self.get_products({"min_price": min_price, "max_price": max_price, "category": category})

    def get_in_stock_products(self, category=None):
        return self.get_products({"in_stock": True, "category": category})

    def get_products_sorted(self, sort_by, sort_order="asc", category=None):
        if sort_by not in SORT_FIELDS:
            raise ValueError(f"sort_by must be one of {', '.join(SORT_FIELDS)}")
        return self.get_products({"sort_by": sort_by, "sort_order": sort_order, "category": category})

    def get_categories(self):
        """Backend categories, or the built-in list when the endpoint is unavailable."""
        try:
            response = self.backend.get(f"{self.base_path}/categories")
            if not response.ok:
                return list(DEFAULT_CATEGORIES)
            envelope = parse_envelope(decode_json(response))
        except StorefrontError:
            logger.exception("Error fetching categories")
            return list(DEFAULT_CATEGORIES)
        return envelope.as_list() or list(DEFAULT_CATEGORIES)

    # ---- writes ----

    def _send(self, method, path, token, data):
        if isinstance(data, ProductForm):
            return self.backend.request(method, path, token=token, data=data.fields, files=data.files or None)
        return self.backend.request(method, path, token=token, json=data)

    def create_product(self, data):
        token = self._require_token()
        try:
            response = self._send("POST", self.base_path, token, data)
            if not response.ok:
                raise BackendError(error_message(response), status=response.status_code)
            return parse_envelope(decode_json(response)).as_object()
        except StorefrontError:
            logger.exception("Error creating product")
            raise

    def update_product(self, product_id, data):
        """
        JSON goes out as PUT. Multipart goes out as POST with ``_method=PUT``
        since file uploads only travel reliably over POST.
        """
        token = self._require_token()
        method = "PUT"
        if isinstance(data, ProductForm):
            data = ProductForm(fields={**data.fields, "_method": "PUT"}, files=data.files)
            method = "POST"

        try:
            response = self._send(method, f"{self.base_path}/{product_id}", token, data)
            logger.info("Update response status: %s", response.status_code)
            if not response.ok:
                logger.error("Update error response: %s", response.text)
                raise BackendError(error_message(response), status=response.status_code)
        except StorefrontError:
            logger.exception("Error updating product %s", product_id)
            raise

        try:
            payload = decode_json(response)
        except MalformedResponse:
            logger.warning("Failed to parse success response for product %s", product_id)
            return dict(UPDATED)
        if payload is None:
            return dict(UPDATED)
        return parse_envelope(payload).as_object()

    def delete_product(self, product_id):
        token = self._require_token()
        try:
            response = self.backend.delete(f"{self.base_path}/{product_id}", token=token)
            if not response.ok:
                raise BackendError(error_message(response), status=response.status_code)
        except StorefrontError:
            logger.exception("Error deleting product %s", product_id)
            raise

    def upload_images(self, files) -> List[str]:
        token = self._require_token()
        uploads = [("images[]", f) for f in files]
        try:
            response = self.backend.post("upload", token=token, files=uploads)
            if not response.ok:
                raise BackendError(error_message(response), status=response.status_code)
            data = decode_json(response)
        except StorefrontError:
            logger.exception("Error uploading images")
            raise
        if not isinstance(data, dict):
            return []
        return data.get("urls") or data.get("images") or []
