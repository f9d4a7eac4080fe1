"""Catalog data models."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Union

import pendulum

PLACEHOLDER_IMAGE = "./assets/images/placeholder.jpg"
UNTITLED = "Χωρίς τίτλο"


@dataclass(slots=True)
class CatalogItem:
    id: str
    title: str = UNTITLED
    brand: str = ""
    category: str = ""
    year: str | int = ""
    price: float | None = None
    mileage: float = 0
    engine_cc: float | None = None
    color: str = ""
    description: str = ""
    featured: bool = False
    status: str = ""
    car_gr_link: str = ""
    images: list[str] = field(default_factory=lambda: [PLACEHOLDER_IMAGE])

    @property
    def is_sold(self) -> bool:
        return self.status.lower() == "sold"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class RawRecord:
    """A record in the upstream Airtable shape: ``{"id": ..., "fields": {...}}``."""

    id: str
    fields: Mapping[str, Any]


@dataclass(slots=True)
class NormalizedEntry:
    """A snapshot entry that already uses the ``CatalogItem`` field names."""

    data: Mapping[str, Any]


SnapshotEntry = Union[RawRecord, NormalizedEntry]


def classify_entry(obj: Any) -> SnapshotEntry:
    if not isinstance(obj, Mapping):
        raise TypeError(f"Catalog entry must be an object, got {type(obj).__name__}")
    fields = obj.get("fields")
    if isinstance(fields, Mapping):
        return RawRecord(id=str(obj.get("id") or ""), fields=fields)
    return NormalizedEntry(data=obj)


class CatalogSource(str, enum.Enum):
    LIVE = "live"
    CACHED = "cached"
    FALLBACK = "fallback"
    EMPTY = "empty"


@dataclass(slots=True)
class CatalogResult:
    """Items returned by a bulk fetch, tagged with where they came from."""

    items: list[CatalogItem]
    source: CatalogSource
    fetched_at: pendulum.DateTime

    @property
    def is_live(self) -> bool:
        return self.source in (CatalogSource.LIVE, CatalogSource.CACHED)
