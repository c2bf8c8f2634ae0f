import pytest
import requests

from cart.client import AUTH, HTTP, MALFORMED, CartClient, MutationResult, clear_cart_after_checkout
from common.session import StaticSessionProvider

from .conftest import make_response

USER = {"id": 7, "name": "Juan Dela Cruz"}


@pytest.fixture
def signed_in():
    return StaticSessionProvider(token="tok-1234567890abc", user=USER)


def test_guest_list_is_empty_without_calling_backend(backend, http):
    assert CartClient(StaticSessionProvider(), backend).list() == []
    assert http.calls == []


def test_list_fills_display_defaults(backend, http, signed_in):
    http.queue(make_response(200, {"success": True, "data": [{"id": 1, "product_id": 5, "quantity": "2", "price": "1500"}]}))

    items = CartClient(signed_in, backend).list()

    assert len(items) == 1
    item = items[0]
    assert item.id == "1"
    assert item.quantity == 2
    assert item.price == 1500
    assert item.total == 3000
    assert item.name == "Unknown Product"
    assert item.image_url == "/placeholder.svg"
    assert item.product.model == "Standard Model"
    assert item.product.category == "Electric Vehicle"

    method, url, kwargs = http.calls[0]
    assert (method, url) == ("GET", "http://backend.test/api/cart")
    assert kwargs["headers"]["Authorization"] == "Bearer tok-1234567890abc"


def test_list_clamps_negative_price_and_zero_quantity(backend, http, signed_in):
    http.queue(make_response(200, {"success": True, "data": [{"id": 2, "product_id": 5, "quantity": 0, "price": -10}]}))

    item = CartClient(signed_in, backend).list()[0]

    assert item.price == 0
    assert item.quantity == 1


@pytest.mark.parametrize(
    "response",
    [
        make_response(200, {"success": False, "message": "nope"}),
        make_response(500, text="<html>oops</html>"),
        requests.ConnectionError("down"),
    ],
)
def test_list_failures_read_as_empty(backend, http, signed_in, response):
    http.queue(response)
    assert CartClient(signed_in, backend).list() == []


def test_add_requires_token(backend, http, events):
    result = CartClient(StaticSessionProvider(), backend).add(5)

    assert not result
    assert result.kind == AUTH
    assert result.message == "Authentication required"
    assert http.calls == []
    assert events == []


def test_add_sends_clamped_quantity_and_announces(backend, http, signed_in, events):
    http.queue(make_response(200, {"success": True, "message": "Added", "data": {"id": 9, "product_id": 5, "price": 100, "quantity": 1}}))

    result = CartClient(signed_in, backend).add(5, quantity=0, color="Red")

    assert result.ok
    assert result.data.id == "9"
    method, url, kwargs = http.calls[0]
    assert (method, url) == ("POST", "http://backend.test/api/cart")
    assert kwargs["json"] == {"product_id": 5, "quantity": 1, "color": "Red"}
    assert events == ["cart_updated"]


def test_add_failure_keeps_backend_message(backend, http, signed_in, events):
    http.queue(make_response(422, {"success": False, "message": "Out of stock"}))

    result = CartClient(signed_in, backend).add(5)

    assert not result.ok
    assert result.message == "Out of stock"
    assert result.kind == HTTP
    assert events == []


def test_update_and_remove_hit_item_urls(backend, http, signed_in, events):
    http.queue(make_response(200, {"success": True, "message": "ok"}))
    client = CartClient(signed_in, backend)

    assert client.update_quantity("3", 4).ok
    assert client.remove("3").ok

    assert [(c[0], c[1]) for c in http.calls] == [
        ("PUT", "http://backend.test/api/cart/3"),
        ("DELETE", "http://backend.test/api/cart/3"),
    ]
    assert http.calls[0][2]["json"] == {"quantity": 4}
    assert events == ["cart_updated", "cart_updated"]


def test_malformed_mutation_response(backend, http, signed_in):
    http.queue(make_response(200, text="not json"))

    result = CartClient(signed_in, backend).remove("3")

    assert not result.ok
    assert result.kind == MALFORMED


def test_clear_reports_http_status_and_text(backend, http, signed_in, events):
    http.queue(make_response(500, text="boom"))

    result = CartClient(signed_in, backend).clear()

    assert not result.ok
    assert result.message == "HTTP 500: boom"
    assert events == []


def test_clear_returns_deleted_count_and_announces(backend, http, signed_in, events):
    http.queue(make_response(200, {"success": True, "message": "Cart cleared", "deleted_items": 3}))

    result = CartClient(signed_in, backend).clear()

    assert result.ok
    assert result.data == 3
    assert http.calls[0][:2] == ("DELETE", "http://backend.test/api/cart/clear")
    assert events == ["cart_updated", "cart_cleared"]


class TestClearAfterCheckout:

    def test_succeeds_on_third_attempt(self):
        outcomes = iter([False, MutationResult.failure("busy"), MutationResult(ok=True)])
        calls, sleeps = [], []

        def clear():
            calls.append(1)
            return next(outcomes)

        assert clear_cart_after_checkout(clear, attempts=3, delay=1.0, sleep=sleeps.append) is True
        assert len(calls) == 3
        assert sleeps == [1.0, 1.0]

    def test_gives_up_after_all_attempts(self):
        calls, sleeps = [], []

        def clear():
            calls.append(1)
            return False

        assert clear_cart_after_checkout(clear, attempts=3, delay=1.0, sleep=sleeps.append) is False
        assert len(calls) == 3
        assert sleeps == [1.0, 1.0]

    def test_exceptions_count_as_failures(self):
        def clear():
            raise RuntimeError("boom")

        assert clear_cart_after_checkout(clear, attempts=2, delay=0, sleep=lambda s: None) is False

    def test_first_success_stops_retrying(self):
        sleeps = []
        assert clear_cart_after_checkout(lambda: True, attempts=3, delay=1.0, sleep=sleeps.append) is True
        assert sleeps == []


def test_list_survives_oversized_numbers(backend, http, signed_in):
    huge = int("9" * 400)
    http.queue(make_response(200, text='{"success": true, "data": [{"id": 1, "product_id": 5, "quantity": %d, "price": %d}]}' % (huge, huge)))

    items = CartClient(signed_in, backend).list()

    assert len(items) == 1
    assert items[0].quantity == 1
    assert items[0].price == 0


def test_zero_attempts_means_no_clear_call():
    calls = []

    assert clear_cart_after_checkout(lambda: calls.append(1) or True, attempts=0, delay=0, sleep=lambda s: None) is False
    assert calls == []
