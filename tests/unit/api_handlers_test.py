"""Tests for the FastAPI exception handler and OpenAPI registration."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from json_resp.api import collect_components, register_error_handlers, register_openapi
from json_resp.openapi import combine_errors, merge_responses
from tests.fixtures.sample_errors import ShopErrors


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI(title="shop", version="1.0")
    register_error_handlers(app)

    gone_or_missing = combine_errors(ShopErrors.oai.NotFound, ShopErrors.oai.Gone)

    @app.get("/items/{item}", responses=merge_responses(gone_or_missing, ShopErrors.oai.OutOfStock))
    async def get_item(item: str) -> dict[str, str]:
        if item == "missing":
            raise ShopErrors.NotFound()
        if item == "sold":
            raise ShopErrors.OutOfStock("sold out until Monday")
        if item == "crash":
            raise ShopErrors.Database(RuntimeError("connection reset"))
        return {"item": item}

    register_openapi(app, ShopErrors, gone_or_missing)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def test_ok_route_is_untouched(client: TestClient) -> None:
    resp = client.get("/items/apple")
    assert resp.status_code == 200
    assert resp.json() == {"item": "apple"}


def test_client_case_is_converted(client: TestClient) -> None:
    resp = client.get("/items/missing")
    assert resp.status_code == 404
    assert resp.json() == {"status": 404, "code": "not-found", "content": None}


def test_client_case_payload_is_returned(client: TestClient) -> None:
    resp = client.get("/items/sold")
    assert resp.status_code == 409
    assert resp.json() == {"status": 409, "code": "out-of-stock", "content": "sold out until Monday"}


def test_internal_case_hides_detail(client: TestClient) -> None:
    resp = client.get("/items/crash")
    assert resp.status_code == 500
    assert resp.json() == {"status": 500, "code": "shop-internal", "content": None}
    assert "connection reset" not in resp.text


def test_openapi_document_contains_error_schemas(client: TestClient) -> None:
    doc = client.get("/openapi.json").json()
    schemas = doc["components"]["schemas"]
    for name in ("NotFound", "Gone", "OutOfStock", "InternalError", "NotFoundOrGone"):
        assert name in schemas

    responses = doc["paths"]["/items/{item}"]["get"]["responses"]
    assert responses["404"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/NotFoundOrGone"
    }
    assert responses["409"]["description"] == "out-of-stock"
    # FastAPI's own validation schemas survive
    assert "HTTPValidationError" in schemas


def test_openapi_document_is_cached(app: FastAPI) -> None:
    assert app.openapi() is app.openapi()


def test_collect_components_rejects_unknown_sources() -> None:
    with pytest.raises(TypeError):
        collect_components(object())  # type: ignore[arg-type]


def test_collect_components_merges_sources() -> None:
    components = collect_components(ShopErrors.oai.NotFound, ShopErrors.oai)
    assert list(components["schemas"]) == ["NotFound", "Gone", "OutOfStock", "InternalError"]
