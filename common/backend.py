"""
HTTP access to the commerce backend and the one place where its response
envelopes are interpreted.
"""
import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .conf import storefront_setting
from .exceptions import BackendError, MalformedResponse

logger = logging.getLogger(__name__)


class Shape(enum.Enum):
    BARE_LIST = "bare_list"
    ENVELOPE = "envelope"
    OTHER = "other"


@dataclass(frozen=True)
class Envelope:
    shape: Shape
    payload: Any

    @property
    def success(self):
        if self.shape is Shape.BARE_LIST:
            return True
        return bool(isinstance(self.payload, dict) and self.payload.get("success"))

    @property
    def message(self):
        if isinstance(self.payload, dict):
            return self.payload.get("message")
        return None

    @property
    def data(self):
        if self.shape is Shape.BARE_LIST:
            return self.payload
        if isinstance(self.payload, dict):
            return self.payload.get("data")
        return None

    def as_list(self):
        """Always a list: single objects are wrapped, unknown shapes become []."""
        if self.shape is Shape.BARE_LIST:
            return list(self.payload)
        data = self.data
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return [data]
        return []

    def as_object(self):
        if self.shape is Shape.ENVELOPE:
            return self.payload["data"]
        data = self.data
        if data is not None:
            return data
        return self.payload


def parse_envelope(payload):
    """
    Tag a decoded response body with the shape the backend used.

    Accepted: a bare list, ``{"success": true, "data": [...] | {...}}``,
    anything else falls into ``Shape.OTHER``.
    """
    if isinstance(payload, list):
        return Envelope(Shape.BARE_LIST, payload)
    if isinstance(payload, dict) and payload.get("success") and payload.get("data") is not None:
        return Envelope(Shape.ENVELOPE, payload)
    return Envelope(Shape.OTHER, payload)


def decode_json(response):
    """Decoded body, ``None`` for an empty body; raises MalformedResponse."""
    text = response.text
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        raise MalformedResponse(f"Invalid JSON from backend (status {response.status_code})") from exc


def error_message(response, default=None):
    """Best-effort ``message`` out of an error response."""
    try:
        body = decode_json(response)
    except MalformedResponse:
        return response.text or default
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return default or f"HTTP error! status: {response.status_code}"


class BackendClient:
    """Thin wrapper around a requests session bound to the backend base URL."""

    def __init__(self, base_url=None, http=None, timeout=None):
        self.base_url = (base_url or storefront_setting("BACKEND_API_URL")).rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout if timeout is not None else storefront_setting("REQUEST_TIMEOUT")

    def url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        headers: Optional[dict] = None,
        **kwargs,
    ) -> requests.Response:
        merged = {"Accept": "application/json"}
        if "json" in kwargs:
            merged["Content-Type"] = "application/json"
        if token:
            merged["Authorization"] = f"Bearer {token}"
        if headers:
            merged.update(headers)
        try:
            return self.http.request(method, self.url(path), headers=merged, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise BackendError(f"Network error: {exc}") from exc

    def get(self, path, **kwargs):
        return self.request("GET", path, **kwargs)

    def post(self, path, **kwargs):
        return self.request("POST", path, **kwargs)

    def put(self, path, **kwargs):
        return self.request("PUT", path, **kwargs)

    def delete(self, path, **kwargs):
        return self.request("DELETE", path, **kwargs)

    def get_json(self, path, **kwargs):
        """GET and decode, raising BackendError on non-2xx."""
        response = self.get(path, **kwargs)
        if not response.ok:
            raise BackendError(status=response.status_code)
        return decode_json(response)
