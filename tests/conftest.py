import json
from pathlib import Path

import pytest

from motocenter.catalog.airtable import AirtableClient
from motocenter.catalog.cache import CatalogCache
from motocenter.catalog.service import CatalogService

FIXTURES = Path(__file__).parent / "fixtures" / "http" / "airtable"

BASE_ID = "appTest"
TABLE_ID = "tblBikes"
TABLE_PATH = f"/v0/{BASE_ID}/{TABLE_ID}"
AIRTABLE_HOST = "api.airtable.com"


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def load_fixture(name: str):
    return json.loads((FIXTURES / name).read_text())


@pytest.fixture()
def bikes_payload():
    return load_fixture("bikes_list.json")


@pytest.fixture()
def bike_record():
    return load_fixture("bike_record.json")


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def raw_snapshot(tmp_path):
    path = tmp_path / "bikes.json"
    path.write_text(
        json.dumps(
            {
                "bikes": [
                    {"id": "recSnapA", "fields": {"Title": "Honda XR 150", "Brand": "Honda", "Images": [{"url": "https://cdn/xr.jpg"}]}},
                    {"id": "recSnapB", "fields": {"Title": "Vespa GTS 300", "Brand": "Piaggio", "Category": "Scooter"}},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def make_service(tmp_path, clock):
    def factory(snapshot_path: Path | None = None, *, session=None, ttl: float = 1.0) -> CatalogService:
        client = AirtableClient("test-key", BASE_ID, TABLE_ID, session=session)
        return CatalogService(
            client,
            cache=CatalogCache(ttl, clock=clock),
            snapshot_path=snapshot_path or tmp_path / "missing.json",
        )

    return factory
