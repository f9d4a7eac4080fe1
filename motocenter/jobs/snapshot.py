"""Rewrite the fallback snapshot from the live Airtable table."""

from __future__ import annotations

import asyncio
import logging
import pathlib

from dotenv import load_dotenv

from motocenter.catalog.airtable import NON_EMPTY_TITLE, AirtableClient
from motocenter.catalog.snapshot import write_snapshot
from motocenter.config import load_settings

logger = logging.getLogger(__name__)


async def refresh_snapshot(path: pathlib.Path | None = None, *, client: AirtableClient | None = None) -> int:
    """Fetch live records and store them in the raw upstream shape.

    Remote failures propagate and the existing snapshot is left untouched.
    An unwritable target raises ``SnapshotError``; set CATALOG_SNAPSHOT_PATH
    outside the installed package for scheduled runs.
    """
    load_dotenv()
    settings = load_settings()
    target = path or settings.snapshot_path
    owned = client is None
    client = client or AirtableClient(
        settings.airtable_api_key,
        settings.airtable_base_id,
        settings.airtable_table_id,
        timeout=settings.airtable_timeout,
    )
    try:
        records = await client.list_records(filter_formula=NON_EMPTY_TITLE, max_records=settings.max_records)
    finally:
        if owned:
            await client.close()
    count = await asyncio.get_running_loop().run_in_executor(None, write_snapshot, target, records)
    logger.info("Snapshot refreshed with %s records", count)
    return count


if __name__ == "__main__":
    asyncio.run(refresh_snapshot())
