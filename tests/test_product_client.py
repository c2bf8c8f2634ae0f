import pytest

from common.backend import Shape, parse_envelope
from common.exceptions import AuthenticationRequired, BackendError
from common.session import StaticSessionProvider
from product.categories import DEFAULT_CATEGORIES, get_category_from_display_name, get_product_display_name
from product.client import ProductClient, ProductForm, build_query

from .conftest import make_response

GUEST = StaticSessionProvider()
ADMIN = StaticSessionProvider(token="admin-token", user={"id": 1, "role": "admin"})


@pytest.mark.parametrize(
    "body, expected",
    [
        ([{"id": 1}, {"id": 2}], [{"id": 1}, {"id": 2}]),
        ({"success": True, "data": [{"id": 1}]}, [{"id": 1}]),
        ({"success": True, "data": {"id": 1}}, [{"id": 1}]),
        ({"success": False, "message": "nope"}, []),
        ({"id": 1}, []),
    ],
)
def test_get_products_accepts_every_envelope_shape(backend, http, body, expected):
    http.queue(make_response(200, body))
    assert ProductClient(GUEST, backend).get_products() == expected


def test_parse_envelope_tags_shapes():
    assert parse_envelope([]).shape is Shape.BARE_LIST
    assert parse_envelope({"success": True, "data": []}).shape is Shape.ENVELOPE
    assert parse_envelope({"success": True, "data": None}).shape is Shape.OTHER
    assert parse_envelope(None).shape is Shape.OTHER


def test_only_set_filters_become_query_params(backend, http):
    http.queue(make_response(200, []))

    ProductClient(GUEST, backend).get_products({"search": "", "category": "E-Bike", "in_stock": True, "min_price": None})

    assert http.calls[0][2]["params"] == {"category": "E-Bike", "in_stock": "true"}


def test_build_query_keeps_false_and_zero():
    assert build_query({"in_stock": False, "min_price": 0}) == {"in_stock": "false", "min_price": "0"}


def test_read_failure_raises_with_status(backend, http):
    http.queue(make_response(500, text="boom"))

    with pytest.raises(BackendError) as excinfo:
        ProductClient(GUEST, backend).get_featured_products()

    assert excinfo.value.status == 500
    assert excinfo.value.message == "HTTP error! status: 500"


def test_get_product_unwraps_envelope(backend, http):
    http.queue(make_response(200, {"success": True, "data": {"id": 4, "name": "V9"}}))

    assert ProductClient(GUEST, backend).get_product(4) == {"id": 4, "name": "V9"}
    assert http.calls[0][1] == "http://backend.test/api/products/4"


def test_sorted_rejects_unknown_field(backend):
    with pytest.raises(ValueError):
        ProductClient(GUEST, backend).get_products_sorted("colour")


def test_categories_fall_back_to_defaults(backend, http):
    http.queue(make_response(404, {"message": "missing"}))
    assert ProductClient(GUEST, backend).get_categories() == list(DEFAULT_CATEGORIES)

    http.queue(make_response(200, {"success": True, "data": ["E-Bike", "E-Trike"]}))
    assert ProductClient(GUEST, backend).get_categories() == ["E-Bike", "E-Trike"]


def test_writes_need_a_token(backend, http):
    client = ProductClient(GUEST, backend)

    with pytest.raises(AuthenticationRequired):
        client.create_product({"name": "V9"})
    with pytest.raises(AuthenticationRequired):
        client.delete_product(1)
    assert http.calls == []


def test_json_update_goes_out_as_put(backend, http):
    http.queue(make_response(200, {"success": True, "data": {"id": 3, "name": "T20"}}))

    result = ProductClient(ADMIN, backend).update_product(3, {"name": "T20"})

    method, url, kwargs = http.calls[0]
    assert (method, url) == ("PUT", "http://backend.test/api/products/3")
    assert kwargs["json"] == {"name": "T20"}
    assert kwargs["headers"]["Authorization"] == "Bearer admin-token"
    assert result == {"id": 3, "name": "T20"}


def test_multipart_update_is_post_with_method_override(backend, http):
    http.queue(make_response(200, {"success": True, "data": {"id": 3}}))
    form = ProductForm(fields={"name": "T20"}, files=[("images[]", ("a.png", b"png", "image/png"))])

    ProductClient(ADMIN, backend).update_product(3, form)

    method, url, kwargs = http.calls[0]
    assert method == "POST"
    assert kwargs["data"] == {"name": "T20", "_method": "PUT"}
    assert kwargs["files"] == [("images[]", ("a.png", b"png", "image/png"))]
    assert "json" not in kwargs
    assert form.fields == {"name": "T20"}


@pytest.mark.parametrize("text", ["", "   ", "not json"])
def test_update_with_unreadable_success_body(backend, http, text):
    http.queue(make_response(200, text=text))

    result = ProductClient(ADMIN, backend).update_product(3, {"name": "T20"})

    assert result == {"success": True, "message": "Product updated successfully"}


def test_update_error_uses_backend_message(backend, http):
    http.queue(make_response(422, {"message": "The name field is required."}))

    with pytest.raises(BackendError) as excinfo:
        ProductClient(ADMIN, backend).update_product(3, {})

    assert excinfo.value.message == "The name field is required."
    assert excinfo.value.status == 422


def test_upload_images(backend, http):
    http.queue(make_response(200, {"urls": ["/storage/a.png"]}))

    urls = ProductClient(ADMIN, backend).upload_images([("a.png", b"png", "image/png")])

    assert urls == ["/storage/a.png"]
    method, url, kwargs = http.calls[0]
    assert url == "http://backend.test/api/upload"
    assert kwargs["files"] == [("images[]", ("a.png", b"png", "image/png"))]


def test_category_display_names():
    assert get_product_display_name("E-Bike") == "Electric Bicycles"
    assert get_product_display_name("Hoverboard") == "Hoverboard"
    assert get_category_from_display_name("Electric Tricycles") == "E-Trike"


@pytest.mark.parametrize(
    "call, expected",
    [
        (lambda c: c.search_products("x", "E-Bike"), {"search": "x", "category": "E-Bike"}),
        (lambda c: c.search_products("x"), {"search": "x"}),
        (lambda c: c.get_in_stock_products(), {"in_stock": "true"}),
        (lambda c: c.get_products_by_price_range(1000, 5000, "E-Trike"),
         {"min_price": "1000", "max_price": "5000", "category": "E-Trike"}),
        (lambda c: c.get_products_by_category("E-Dump", in_stock=False),
         {"category": "E-Dump", "in_stock": "false"}),
        (lambda c: c.get_products_sorted("price", "desc"), {"sort_by": "price", "sort_order": "desc"}),
    ],
)
def test_shortcut_queries(backend, http, call, expected):
    http.queue(make_response(200, []))

    assert call(ProductClient(GUEST, backend)) == []
    assert http.calls[0][1] == "http://backend.test/api/products"
    assert http.calls[0][2]["params"] == expected
