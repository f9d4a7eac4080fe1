import httpx
import pytest
from fastapi.testclient import TestClient

from motocenter.api.main import app, get_service
from motocenter.utils.formatting import PRICE_ON_REQUEST, SOLD

from conftest import TABLE_PATH


@pytest.fixture()
def api(make_service, bikes_payload, bike_record):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == TABLE_PATH:
            return httpx.Response(200, json=bikes_payload)
        if request.url.path == f"{TABLE_PATH}/recDucatiMonster":
            return httpx.Response(200, json=bike_record)
        return httpx.Response(404, json={"error": "NOT_FOUND"})

    session = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = make_service(session=session, ttl=60)
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_list_bikes_with_filters(api):
    response = api.get("/bikes", params={"brand": "honda", "category": "cross"})
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["source"] == "live"
    assert body["bikes"][0]["id"] == "recHondaCrf450"
    assert body["bikes"][0]["price_label"] == "7.900 €"


def test_list_bikes_labels(api):
    body = api.get("/bikes", params={"status": "Sold"}).json()
    husqvarna = next(b for b in body["bikes"] if b["id"] == "recHusqvarnaTc125")
    assert husqvarna["price"] is None
    assert husqvarna["price_label"] == PRICE_ON_REQUEST
    assert husqvarna["status_label"] == SOLD


def test_featured_bikes(api):
    response = api.get("/bikes/featured", params={"count": 2})
    assert [b["id"] for b in response.json()] == ["recHondaCrf450", "recHondaCb650"]


def test_get_bike_and_related(api):
    bike = api.get("/bikes/recDucatiMonster").json()
    assert bike["title"] == "Ducati Monster 821"
    api.get("/bikes")
    related = api.get("/bikes/recHondaCb650/related").json()
    assert [b["id"] for b in related] == ["recHondaCrf450", "recKawasakiZ900"]


def test_get_missing_bike_returns_404(api):
    response = api.get("/bikes/recMissing")
    assert response.status_code == 404


def test_health_and_cache_clear(api):
    assert api.get("/health").json() == {"status": "ok", "cached": False}
    api.get("/bikes")
    assert api.get("/health").json()["cached"] is True
    assert api.post("/cache/clear").json() == {"status": "cleared", "cached": False}
