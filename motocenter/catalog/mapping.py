"""Normalization of catalog input variants into ``CatalogItem``."""

from __future__ import annotations

from typing import Any, Mapping

from motocenter.catalog.models import (
    PLACEHOLDER_IMAGE,
    UNTITLED,
    CatalogItem,
    NormalizedEntry,
    RawRecord,
    SnapshotEntry,
)


def image_url(attachment: Mapping[str, Any]) -> str | None:
    """Pick the best rendition: large thumbnail, then full, then the original."""
    thumbnails = attachment.get("thumbnails") or {}
    if not isinstance(thumbnails, Mapping):
        raise ValueError(f"Malformed thumbnails: {thumbnails!r}")
    for size in ("large", "full"):
        rendition = thumbnails.get(size) or {}
        url = rendition.get("url") if isinstance(rendition, Mapping) else None
        if url:
            return url
    return attachment.get("url") or None


def _images(entries: Any) -> list[str]:
    if isinstance(entries, str):
        entries = [entries]
    elif entries and not isinstance(entries, (list, tuple)):
        raise ValueError(f"Images must be a list, got {type(entries).__name__}")
    urls: list[str] = []
    for entry in entries or ():
        if isinstance(entry, str):
            url = entry
        elif isinstance(entry, Mapping):
            url = image_url(entry)
        else:
            url = None
        if url:
            urls.append(url)
    return urls or [PLACEHOLDER_IMAGE]


def map_record(record: RawRecord) -> CatalogItem:
    f = record.fields
    return CatalogItem(
        id=record.id,
        title=f.get("Title") or UNTITLED,
        brand=f.get("Brand") or "",
        category=f.get("Category") or "",
        year=f.get("Year") or "",
        price=f.get("Price") or None,
        mileage=f.get("Mileage") or 0,
        engine_cc=f.get("Engine_CC") or None,
        color=f.get("Color") or "",
        description=f.get("Description") or "",
        featured=bool(f.get("Featured")),
        status=f.get("Status") or "",
        car_gr_link=f.get("car_gr_link") or "",
        images=_images(f.get("Images")),
    )


def map_normalized(entry: NormalizedEntry) -> CatalogItem:
    d = entry.data
    return CatalogItem(
        id=str(d.get("id") or ""),
        title=d.get("title") or UNTITLED,
        brand=d.get("brand") or "",
        category=d.get("category") or "",
        year=d.get("year") or "",
        price=d.get("price") or None,
        mileage=d.get("mileage") or 0,
        engine_cc=d.get("engine_cc") or None,
        color=d.get("color") or "",
        description=d.get("description") or "",
        featured=bool(d.get("featured")),
        status=d.get("status") or "",
        car_gr_link=d.get("car_gr_link") or "",
        images=_images(d.get("images")),
    )


def normalize_entry(entry: SnapshotEntry) -> CatalogItem:
    if isinstance(entry, RawRecord):
        return map_record(entry)
    return map_normalized(entry)


def map_api_record(payload: Mapping[str, Any]) -> CatalogItem:
    """Map a record object exactly as the Airtable API returns it."""
    fields = payload.get("fields") or {}
    if not isinstance(fields, Mapping):
        raise ValueError(f"Record {payload.get('id')} has malformed fields")
    return map_record(RawRecord(id=str(payload["id"]), fields=fields))
