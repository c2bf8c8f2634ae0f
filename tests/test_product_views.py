from .conftest import make_response


def test_product_list_maps_display_name(api_client, patched_http):
    patched_http.queue(make_response(200, {"success": True, "data": [{"id": 1}]}))

    response = api_client.get("/products/", {"category": "Electric Scooters"})

    assert response.status_code == 200
    assert response.data["total"] == 1
    assert patched_http.calls[0][2]["params"] == {"category": "E-Scooter"}


def test_product_list_rejects_inverted_price_range(api_client, patched_http):
    response = api_client.get("/products/", {"min_price": 10, "max_price": 5})

    assert response.status_code == 400
    assert patched_http.calls == []


def test_product_list_backend_failure(api_client, patched_http):
    patched_http.queue(make_response(503, text="down"))

    response = api_client.get("/products/")

    assert response.status_code == 503
    assert response.data["toast"]["title"] == "Failed to Load Products"


def test_categories_endpoint_has_display_names(api_client, patched_http):
    patched_http.queue(make_response(500, text=""))

    response = api_client.get("/products/categories/")

    assert response.status_code == 200
    assert response.data["data"][0] == {"value": "E-Bike", "display_name": "Electric Bicycles"}
