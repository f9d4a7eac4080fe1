"""FastAPI proxy that serves the catalog to the website without exposing the Airtable key."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel

from motocenter.catalog.errors import InvalidArgument, NotFound
from motocenter.catalog.models import CatalogItem
from motocenter.catalog.service import CatalogService, create_service_from_env, filter_items
from motocenter.utils.dates import format_timestamp
from motocenter.utils.formatting import format_mileage, format_price, status_label

logger = logging.getLogger(__name__)

_service: CatalogService | None = None


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    if _service is not None:
        await _service.close()


app = FastAPI(title="Moto Center Catalog API", lifespan=lifespan)


class BikePayload(BaseModel):
    id: str
    title: str
    brand: str
    category: str
    year: str | int
    price: float | None
    mileage: float
    engine_cc: float | None
    color: str
    description: str
    featured: bool
    status: str
    car_gr_link: str
    images: list[str]
    price_label: str
    mileage_label: str
    status_label: str


class BikeListResponse(BaseModel):
    bikes: list[BikePayload]
    count: int
    source: str
    fetched_at: str


class HealthResponse(BaseModel):
    status: str
    cached: bool


def get_service() -> CatalogService:
    global _service
    if _service is None:
        load_dotenv()
        _service = create_service_from_env()
    return _service


def _payload(item: CatalogItem) -> BikePayload:
    data: dict[str, Any] = item.to_dict()
    return BikePayload(
        **data,
        price_label=format_price(item.price),
        mileage_label=format_mileage(item.mileage),
        status_label=status_label(item.status),
    )


@app.get("/health", response_model=HealthResponse)
async def health(service: CatalogService = Depends(get_service)) -> HealthResponse:
    return HealthResponse(status="ok", cached=service.is_cached())


@app.get("/bikes", response_model=BikeListResponse)
async def list_bikes(
    brand: str | None = None,
    category: str | None = None,
    status: str | None = None,
    service: CatalogService = Depends(get_service),
) -> BikeListResponse:
    result = await service.fetch_all_result()
    items = filter_items(result.items, brand=brand, category=category, status=status)
    return BikeListResponse(
        bikes=[_payload(item) for item in items],
        count=len(items),
        source=result.source.value,
        fetched_at=format_timestamp(result.fetched_at),
    )


@app.get("/bikes/featured", response_model=list[BikePayload])
async def featured_bikes(
    count: int = Query(4, ge=0, le=100),
    service: CatalogService = Depends(get_service),
) -> list[BikePayload]:
    return [_payload(item) for item in await service.fetch_featured(count)]


async def _lookup(service: CatalogService, bike_id: str) -> CatalogItem:
    try:
        return await service.fetch_by_id(bike_id)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFound as exc:
        logger.info("Bike %s not found (upstream status %s)", bike_id, exc.status)
        raise HTTPException(status_code=404, detail="Η μοτοσυκλέτα δεν βρέθηκε") from exc


@app.get("/bikes/{bike_id}", response_model=BikePayload)
async def get_bike(bike_id: str, service: CatalogService = Depends(get_service)) -> BikePayload:
    return _payload(await _lookup(service, bike_id))


@app.get("/bikes/{bike_id}/related", response_model=list[BikePayload])
async def related_bikes(
    bike_id: str,
    limit: int = Query(3, ge=0, le=20),
    service: CatalogService = Depends(get_service),
) -> list[BikePayload]:
    bike = await _lookup(service, bike_id)
    return [_payload(item) for item in await service.fetch_related(bike, limit)]


@app.post("/cache/clear", response_model=HealthResponse)
async def clear_cache(service: CatalogService = Depends(get_service)) -> HealthResponse:
    service.clear_cache()
    return HealthResponse(status="cleared", cached=service.is_cached())


if __name__ == "__main__":  # pragma: no cover - manual run
    import uvicorn

    load_dotenv()
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
    uvicorn.run(app, host=os.environ.get("API_HOST", "0.0.0.0"), port=int(os.environ.get("PORT", 8000)))
