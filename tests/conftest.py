import json

import pytest
import requests
from django.conf import settings as django_settings
from rest_framework.test import APIClient

from common.backend import BackendClient
from common.signals import cart_cleared, cart_updated, order_placed

BACKEND_URL = "http://backend.test/api"


def make_response(status=200, body=None, text=None):
    """A real requests.Response carrying ``body`` as JSON (or raw ``text``)."""
    response = requests.Response()
    response.status_code = status
    if text is None:
        text = "" if body is None else json.dumps(body)
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.url = BACKEND_URL
    return response


class FakeHTTP:
    """
    Stands in for requests.Session. Responses are replayed in order, the last
    one repeating; an exception in the queue is raised instead.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [make_response(200, {"success": True, "data": []})]
        self.calls = []

    def queue(self, *responses):
        self.responses = list(responses)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def backend_url(settings):
    settings.STOREFRONT = {**settings.STOREFRONT, "BACKEND_API_URL": BACKEND_URL, "CLEAR_RETRY_DELAY": 0}


@pytest.fixture
def http():
    return FakeHTTP()


@pytest.fixture
def backend(http):
    return BackendClient(base_url=BACKEND_URL, http=http)


@pytest.fixture
def patched_http(monkeypatch):
    """Every BackendClient built inside a view talks to this FakeHTTP."""
    fake = FakeHTTP()
    monkeypatch.setattr(requests.Session, "request", lambda self, method, url, **kw: fake.request(method, url, **kw))
    return fake


@pytest.fixture
def api_client():
    return APIClient()


def sign_in(client, token="tok-1234567890abc", user=None):
    session = client.session
    session["session"] = {"token": token, "user": user or {"id": 7, "name": "Juan Dela Cruz", "email": "juan@example.com"}}
    session.save()
    client.cookies[django_settings.SESSION_COOKIE_NAME] = session.session_key
    return client


@pytest.fixture
def events():
    seen = []
    handlers = {}
    for signal, name in ((cart_updated, "cart_updated"), (cart_cleared, "cart_cleared"), (order_placed, "order_placed")):
        def handler(sender, session=None, _name=name, **kwargs):
            seen.append(_name)
        handlers[signal] = handler
        signal.connect(handler, weak=False)
    yield seen
    for signal, handler in handlers.items():
        signal.disconnect(handler)
