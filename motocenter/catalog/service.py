"""Catalog data service: cached Airtable listing with snapshot fallback."""

from __future__ import annotations

import asyncio
import logging
import pathlib

import httpx
import pendulum

from motocenter.catalog.airtable import NON_EMPTY_TITLE, AirtableClient
from motocenter.catalog.cache import CatalogCache
from motocenter.catalog.errors import InvalidArgument, NotFound, SnapshotError
from motocenter.catalog.mapping import map_api_record, normalize_entry
from motocenter.catalog.models import CatalogItem, CatalogResult, CatalogSource
from motocenter.catalog.snapshot import DEFAULT_SNAPSHOT_PATH, load_snapshot
from motocenter.config import Settings, load_settings
from motocenter.utils.dates import now_in_tz

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)
SNAPSHOT_ERRORS = (SnapshotError, ValueError, KeyError, TypeError, AttributeError)
FEATURED_COUNT = 4
RELATED_COUNT = 3


class CatalogService:
    """Read-only view of the bikes catalog.

    Bulk reads never raise: a remote failure falls back to the bundled
    snapshot, and a broken snapshot yields an empty list. Fallback results
    are not cached, so the next call tries the remote table again.
    Single-record lookups raise ``InvalidArgument`` or ``NotFound``.
    """

    def __init__(
        self,
        client: AirtableClient,
        *,
        cache: CatalogCache | None = None,
        snapshot_path: pathlib.Path = DEFAULT_SNAPSHOT_PATH,
        max_records: int = 100,
    ) -> None:
        self.client = client
        self.cache = cache or CatalogCache()
        self.snapshot_path = snapshot_path
        self.max_records = max_records
        self._refreshed_at: pendulum.DateTime | None = None

    async def close(self) -> None:
        await self.client.close()

    async def fetch_all(self) -> list[CatalogItem]:
        result = await self.fetch_all_result()
        return result.items

    async def fetch_all_result(self) -> CatalogResult:
        cached = self.cache.get()
        if cached is not None:
            return CatalogResult(cached, CatalogSource.CACHED, self._refreshed_at or now_in_tz())
        try:
            records = await self.client.list_records(
                filter_formula=NON_EMPTY_TITLE, max_records=self.max_records
            )
            items = [map_api_record(record) for record in records]
        except REMOTE_ERRORS as exc:
            logger.error("Airtable listing failed: %s", exc, exc_info=True)
            logger.warning("Falling back to snapshot %s", self.snapshot_path)
            return await self._fallback()
        self.cache.set(items)
        self._refreshed_at = now_in_tz()
        logger.info("Fetched %s bikes from Airtable", len(items))
        return CatalogResult(items, CatalogSource.LIVE, self._refreshed_at)

    async def _fallback(self) -> CatalogResult:
        loop = asyncio.get_running_loop()
        try:
            entries = await loop.run_in_executor(None, load_snapshot, self.snapshot_path)
            items = [normalize_entry(entry) for entry in entries]
        except SNAPSHOT_ERRORS as exc:
            logger.error("Snapshot fallback also failed: %s", exc)
            return CatalogResult([], CatalogSource.EMPTY, now_in_tz())
        logger.info("Serving %s bikes from snapshot", len(items))
        return CatalogResult(items, CatalogSource.FALLBACK, now_in_tz())

    async def fetch_featured(self, count: int = FEATURED_COUNT) -> list[CatalogItem]:
        # First N in fetch order; the Featured flag is not consulted.
        items = await self.fetch_all()
        featured = items[: max(count, 0)]
        logger.debug("Featured candidates: %s", [item.id for item in featured])
        return featured

    async def fetch_by_id(self, record_id: str) -> CatalogItem:
        if not record_id:
            raise InvalidArgument("No ID provided")
        cached = self.cache.find(record_id)
        if cached is not None:
            return cached
        try:
            payload = await self.client.get_record(record_id)
        except httpx.HTTPStatusError as exc:
            raise NotFound(record_id, exc.response.status_code) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Lookup of %s failed: %s", record_id, exc)
            raise NotFound(record_id) from exc
        try:
            return map_api_record(payload)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise NotFound(record_id) from exc

    async def fetch_filtered(
        self,
        *,
        brand: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> list[CatalogItem]:
        return filter_items(await self.fetch_all(), brand=brand, category=category, status=status)

    async def fetch_related(self, item: CatalogItem, limit: int = RELATED_COUNT) -> list[CatalogItem]:
        items = await self.fetch_all()
        related = [
            other
            for other in items
            if other.id != item.id
            and ((item.brand and other.brand == item.brand) or (item.category and other.category == item.category))
        ]
        return related[: max(limit, 0)]

    def clear_cache(self) -> None:
        self.cache.clear()
        self._refreshed_at = None

    def is_cached(self) -> bool:
        return self.cache.is_valid()


def filter_items(
    items: list[CatalogItem],
    *,
    brand: str | None = None,
    category: str | None = None,
    status: str | None = None,
) -> list[CatalogItem]:
    """Brand and status match exactly, category as a substring; all case-insensitive."""
    return [item for item in items if _matches(item, brand, category, status)]


def _matches(item: CatalogItem, brand: str | None, category: str | None, status: str | None) -> bool:
    if brand and item.brand.lower() != brand.lower():
        return False
    if category and category.lower() not in item.category.lower():
        return False
    if status and item.status.lower() != status.lower():
        return False
    return True


def create_service_from_env(settings: Settings | None = None) -> CatalogService:
    settings = settings or load_settings()
    if not settings.has_credentials:
        logger.warning("Airtable credentials are incomplete; listings will come from the snapshot")
    client = AirtableClient(
        settings.airtable_api_key,
        settings.airtable_base_id,
        settings.airtable_table_id,
        timeout=settings.airtable_timeout,
    )
    return CatalogService(
        client,
        cache=CatalogCache(settings.cache_ttl),
        snapshot_path=settings.snapshot_path,
        max_records=settings.max_records,
    )
