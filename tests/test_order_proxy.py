import requests

from common.session import StaticSessionProvider
from order.client import OrdersClient

from .conftest import make_response, sign_in

ORDER = {
    "items": [{"product_id": 5, "quantity": 1, "price": 1000}],
    "shipping_info": {"email": "juan@example.com"},
    "is_guest": True,
}


def test_get_without_authorization_never_reaches_backend(api_client, patched_http):
    response = api_client.get("/api/orders/")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Authentication required"}
    assert patched_http.calls == []


def test_get_forwards_authorization_and_relays(api_client, patched_http):
    patched_http.queue(make_response(200, {"success": True, "data": [{"id": 1}]}))

    response = api_client.get("/api/orders/", HTTP_AUTHORIZATION="Bearer abc")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": [{"id": 1}]}
    method, url, kwargs = patched_http.calls[0]
    assert (method, url) == ("GET", "http://backend.test/api/orders")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


def test_signed_in_session_supplies_the_token(api_client, patched_http):
    sign_in(api_client, token="session-token")
    patched_http.queue(make_response(200, {"success": True, "data": []}))

    response = api_client.get("/api/orders/")

    assert response.status_code == 200
    assert patched_http.calls[0][2]["headers"]["Authorization"] == "Bearer session-token"


def test_guest_post_is_forwarded_without_authorization(api_client, patched_http):
    patched_http.queue(make_response(201, {"success": True, "data": {"id": 9}}))

    response = api_client.post("/api/orders/", ORDER, format="json")

    assert response.status_code == 201
    assert response.json()["data"] == {"id": 9}
    method, url, kwargs = patched_http.calls[0]
    assert method == "POST"
    assert kwargs["json"] == ORDER
    assert "Authorization" not in kwargs["headers"]


def test_backend_error_status_is_relayed(api_client, patched_http):
    patched_http.queue(make_response(422, {"success": False, "message": "Invalid items"}))

    response = api_client.post("/api/orders/", ORDER, format="json", HTTP_AUTHORIZATION="Bearer abc")

    assert response.status_code == 422
    assert response.json() == {"success": False, "message": "Invalid items"}
    assert patched_http.calls[0][2]["headers"]["Authorization"] == "Bearer abc"


def test_network_failure_is_500_without_detail(api_client, patched_http):
    patched_http.queue(requests.ConnectionError("secret-host refused"))

    response = api_client.post("/api/orders/", ORDER, format="json")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}


def test_non_json_backend_body_is_500(api_client, patched_http):
    patched_http.queue(make_response(502, text="<html>Bad gateway</html>"))

    response = api_client.get("/api/orders/", HTTP_AUTHORIZATION="Bearer abc")

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"


def test_orders_client_posts_with_session_token(backend, http):
    http.queue(make_response(201, {"success": True, "data": {"id": 9}}))

    body = OrdersClient(StaticSessionProvider(token="abc", user={"id": 7}), backend).create(ORDER)

    assert body["data"] == {"id": 9}
    method, url, kwargs = http.calls[0]
    assert url == "http://backend.test/api/orders"
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_non_object_body_is_still_forwarded(api_client, patched_http):
    patched_http.queue(make_response(422, {"success": False, "message": "Order must be an object"}))

    response = api_client.post("/api/orders/", [ORDER], format="json")

    assert response.status_code == 422
    assert response.json()["message"] == "Order must be an object"
    assert patched_http.calls[0][2]["json"] == [ORDER]
