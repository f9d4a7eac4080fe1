"""Refresh the bundled fallback snapshot from Airtable once."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import pathlib
import sys

import httpx
from dotenv import load_dotenv

from motocenter.catalog.errors import SnapshotError
from motocenter.jobs.snapshot import refresh_snapshot


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", type=pathlib.Path, default=None, help="Snapshot path (default: CATALOG_SNAPSHOT_PATH)")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
    try:
        count = asyncio.run(refresh_snapshot(args.output))
    except (httpx.HTTPError, ValueError, SnapshotError) as exc:
        print(f"Snapshot refresh failed: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Stored {count} bikes")


if __name__ == "__main__":
    main()
