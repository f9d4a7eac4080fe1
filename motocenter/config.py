"""Environment-driven settings."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from motocenter.catalog.cache import DEFAULT_TTL
from motocenter.catalog.snapshot import DEFAULT_SNAPSHOT_PATH


@dataclass(slots=True)
class Settings:
    airtable_api_key: str
    airtable_base_id: str
    airtable_table_id: str
    airtable_timeout: float = 30.0
    cache_ttl: float = DEFAULT_TTL
    max_records: int = 100
    snapshot_path: pathlib.Path = DEFAULT_SNAPSHOT_PATH

    @property
    def has_credentials(self) -> bool:
        return bool(self.airtable_api_key and self.airtable_base_id and self.airtable_table_id)


def load_settings() -> Settings:
    """Read settings from the environment. Call ``load_dotenv()`` first at entry points."""
    snapshot = os.environ.get("CATALOG_SNAPSHOT_PATH")
    return Settings(
        airtable_api_key=os.environ.get("AIRTABLE_API_KEY", ""),
        airtable_base_id=os.environ.get("AIRTABLE_BASE_ID", ""),
        airtable_table_id=os.environ.get("AIRTABLE_TABLE_ID", ""),
        airtable_timeout=float(os.environ.get("AIRTABLE_TIMEOUT", 30.0)),
        cache_ttl=float(os.environ.get("CATALOG_CACHE_TTL", DEFAULT_TTL)),
        max_records=int(os.environ.get("CATALOG_MAX_RECORDS", 100)),
        snapshot_path=pathlib.Path(snapshot) if snapshot else DEFAULT_SNAPSHOT_PATH,
    )
