import requests

from common.session import StaticSessionProvider
from dashboard.sidebar import build_sidebar, fetch_open_chats

from .conftest import make_response, sign_in

ADMIN = {"id": 1, "name": "Admin", "email": "admin@example.com", "role": "admin"}


def test_open_chats_needs_a_token(backend, http):
    assert fetch_open_chats(StaticSessionProvider(), backend) == 0
    assert http.calls == []


def test_open_chats_count(backend, http):
    http.queue(make_response(200, {"success": True, "data": {"open_conversations": 3}}))

    assert fetch_open_chats(StaticSessionProvider("abc", ADMIN), backend) == 3
    method, url, kwargs = http.calls[0]
    assert url == "http://backend.test/api/chatbot/chat"
    assert kwargs["params"] == {"action": "admin_stats"}


def test_open_chats_failures_read_as_zero(backend, http):
    session = StaticSessionProvider("abc", ADMIN)
    for response in (make_response(500, text="oops"), requests.Timeout("slow"), make_response(200, {"success": False})):
        http.queue(response)
        assert fetch_open_chats(session, backend) == 0


def test_sidebar_marks_active_item_and_badge():
    sidebar = build_sidebar("/admin/orders", open_chats=2)

    active = [item["title"] for item in sidebar["items"] if item["active"]]
    assert active == ["Orders"]
    chat = next(item for item in sidebar["items"] if item["title"] == "Chat Support")
    assert chat["badge"] == 2
    assert sidebar["poll_seconds"] == 15
    assert [item["title"] for item in sidebar["items"]][-1] == "Inquiries"


def test_sidebar_hides_zero_badge():
    chat = next(item for item in build_sidebar("/admin")["items"] if item["title"] == "Chat Support")
    assert chat["badge"] is None


def test_admin_endpoints_reject_customers(api_client, patched_http):
    sign_in(api_client, user={"id": 7, "role": "customer"})

    assert api_client.get("/admin-panel/sidebar/").status_code == 403
    assert api_client.post("/admin-panel/products/", {}, format="json").status_code == 403
    assert patched_http.calls == []


def test_admin_sidebar_endpoint(api_client, patched_http):
    sign_in(api_client, user=ADMIN)
    patched_http.queue(make_response(200, {"success": True, "data": {"open_conversations": 4}}))

    response = api_client.get("/admin-panel/sidebar/", {"path": "/admin/chat"})

    assert response.status_code == 200
    assert response.data["open_chats"] == 4


def test_admin_create_product(api_client, patched_http):
    sign_in(api_client, token="admin-token", user=ADMIN)
    patched_http.queue(make_response(201, {"success": True, "data": {"id": 11, "name": "V9"}}))
    product = {
        "name": "V9",
        "description": "Electric tricycle",
        "price": "85000.00",
        "original_price": "90000.00",
        "category": "E-Trike",
        "model": "V9",
        "colors": [{"name": "Red", "value": "#ff0000"}],
    }

    response = api_client.post("/admin-panel/products/", product, format="json")

    assert response.status_code == 201
    assert response.data["data"] == {"id": 11, "name": "V9"}
    method, url, kwargs = patched_http.calls[0]
    assert (method, url) == ("POST", "http://backend.test/api/products")
    assert kwargs["json"]["price"] == 85000.0
    assert kwargs["headers"]["Authorization"] == "Bearer admin-token"


def test_admin_create_product_validation(api_client, patched_http):
    sign_in(api_client, user=ADMIN)

    response = api_client.post(
        "/admin-panel/products/",
        {"name": "V9", "description": "", "price": "100", "original_price": "50", "category": "E-Trike", "model": "V9"},
        format="json",
    )

    assert response.status_code == 400
    assert "original_price" in response.data
    assert patched_http.calls == []


def test_admin_delete_product_backend_error(api_client, patched_http):
    sign_in(api_client, user=ADMIN)
    patched_http.queue(make_response(404, {"message": "Product not found"}))

    response = api_client.delete("/admin-panel/products/3/")

    assert response.status_code == 404
    assert response.data["toast"]["message"] == "Product not found"
