"""
Farm Market — Django HTTP Adapter Tests
=========================================
End-to-end requests through config.urls with an in-memory or file
journal. No database is touched.
"""

import json

import pytest

from adapters.django_api.wiring import build_dependencies, reset_dependencies

FARMER = "farmer-ann"
BUYER = "buyer-cy"


@pytest.fixture(autouse=True)
def fresh_registry(settings):
    settings.MARKET_JOURNAL_PATH = ""
    settings.MARKET_CALLER_HEADER = "X-Market-Caller"
    reset_dependencies()
    yield
    reset_dependencies()


def _post(client, url, body=None, caller=FARMER):
    extra = {"HTTP_X_MARKET_CALLER": caller} if caller else {}
    return client.post(
        url,
        data=json.dumps(body or {}),
        content_type="application/json",
        **extra,
    )


def _add(client, name="Tomatoes", price=10, quantity=100, caller=FARMER):
    response = _post(
        client, "/v1/products",
        {"name": name, "price": price, "quantity": quantity},
        caller=caller,
    )
    assert response.status_code == 200, response.json()
    return response.json()["data"]["id"]


class TestProductEndpoints:
    def test_add_and_read(self, client):
        product_id = _add(client)
        assert product_id == 1

        response = client.get("/v1/products/1")
        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "data": {
                "id": 1,
                "name": "Tomatoes",
                "price": 10,
                "quantity": 100,
                "owner": FARMER,
                "present": True,
            },
        }

    def test_count(self, client):
        _add(client)
        _add(client, name="Leeks")
        response = client.get("/v1/products/count")
        assert response.json()["data"] == {"count": 2}

    def test_unknown_product_404(self, client):
        response = client.get("/v1/products/9")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_invalid_price_400(self, client):
        response = _post(client, "/v1/products", {"name": "Kale", "price": 0, "quantity": 1})
        assert response.status_code == 400
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "INVALID_ARGUMENT"
        assert body["error"]["details"]["policy_name"] == "positive_price_policy"

    def test_malformed_json_400(self, client):
        response = client.post(
            "/v1/products",
            data="{oops",
            content_type="application/json",
            HTTP_X_MARKET_CALLER=FARMER,
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_wrong_field_type_400(self, client):
        response = _post(client, "/v1/products", {"name": "Kale", "price": "5", "quantity": 1})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_missing_caller_401(self, client):
        response = _post(client, "/v1/products", {"name": "Kale", "price": 5, "quantity": 1}, caller=None)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "MISSING_CALLER"

    def test_method_not_allowed(self, client):
        assert client.get("/v1/products").status_code == 405
        assert client.post("/v1/products/count").status_code == 405


class TestListingLifecycle:
    def test_tomato_season_over_http(self, client):
        product_id = _add(client)

        assert _post(client, f"/v1/products/{product_id}/buy", {"quantity": 40}, caller=BUYER).status_code == 200
        overdraw = _post(client, f"/v1/products/{product_id}/buy", {"quantity": 70}, caller=BUYER)
        assert overdraw.status_code == 409
        assert overdraw.json()["error"]["code"] == "INSUFFICIENT_QUANTITY"

        update = _post(client, f"/v1/products/{product_id}/update", {"price": 12, "quantity": 60})
        assert update.status_code == 200

        assert _post(client, f"/v1/products/{product_id}/buy", {"quantity": 60}, caller=BUYER).status_code == 200
        assert _post(client, f"/v1/products/{product_id}/remove").status_code == 200
        assert client.get(f"/v1/products/{product_id}").status_code == 404

    def test_stranger_update_403(self, client):
        product_id = _add(client)
        response = _post(
            client, f"/v1/products/{product_id}/update",
            {"price": 1, "quantity": 1}, caller=BUYER,
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_remove_with_stock_409(self, client):
        product_id = _add(client)
        response = _post(client, f"/v1/products/{product_id}/remove")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "PRECONDITION_FAILED"

    def test_ownership_probe(self, client):
        product_id = _add(client)
        ok = client.get(f"/v1/products/{product_id}/ownership", HTTP_X_MARKET_CALLER=FARMER)
        assert ok.status_code == 200
        assert ok.json()["data"] == {"owner": True}

        fatal = client.get(f"/v1/products/{product_id}/ownership", HTTP_X_MARKET_CALLER=BUYER)
        assert fatal.status_code == 500
        assert fatal.json()["error"]["code"] == "FATAL_INVARIANT_VIOLATION"


class TestWiring:
    def test_dependencies_are_cached(self):
        assert build_dependencies() is build_dependencies()

    def test_file_journal_survives_restart(self, client, settings, tmp_path):
        settings.MARKET_JOURNAL_PATH = str(tmp_path / "journal.jsonl")
        reset_dependencies()

        product_id = _add(client, quantity=1)
        _post(client, f"/v1/products/{product_id}/buy", {"quantity": 1}, caller=BUYER)
        _post(client, f"/v1/products/{product_id}/remove")

        reset_dependencies()
        assert client.get("/v1/products/count").json()["data"] == {"count": 1}
        assert _add(client, name="Leeks") == 2

    def test_custom_caller_header(self, client, settings):
        settings.MARKET_CALLER_HEADER = "X-Principal"
        reset_dependencies()
        response = client.post(
            "/v1/products",
            data=json.dumps({"name": "Kale", "price": 5, "quantity": 1}),
            content_type="application/json",
            HTTP_X_PRINCIPAL=FARMER,
        )
        assert response.status_code == 200
        assert build_dependencies().registry.get_product(1).owner == FARMER
