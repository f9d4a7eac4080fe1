"""Airtable REST client for the bikes table."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

AIRTABLE_API_URL = "https://api.airtable.com/v0"
NON_EMPTY_TITLE = "NOT({Title}='')"


class AirtableClient:
    def __init__(
        self,
        token: str,
        base_id: str,
        table_id: str,
        *,
        session: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        api_url: str = AIRTABLE_API_URL,
    ) -> None:
        self.table_url = f"{api_url.rstrip('/')}/{base_id}/{table_id}"
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        self.session = session or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self.session.aclose()

    async def list_records(
        self,
        *,
        filter_formula: str | None = NON_EMPTY_TITLE,
        max_records: int = 100,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"maxRecords": str(max_records)}
        if filter_formula:
            params["filterByFormula"] = filter_formula
        records: list[dict[str, Any]] = []
        while True:
            response = await self.session.get(self.table_url, params=params, headers=self._headers)
            response.raise_for_status()
            data = response.json()
            page = data.get("records") if isinstance(data, dict) else None
            if not isinstance(page, list):
                raise ValueError("Airtable response has no 'records' list")
            records.extend(page)
            offset = data.get("offset")
            if not offset or len(records) >= max_records:
                break
            params["offset"] = offset
        logger.debug("Listed %s records from %s", len(records), self.table_url)
        return records[:max_records]

    async def get_record(self, record_id: str) -> dict[str, Any]:
        response = await self.session.get(f"{self.table_url}/{quote(record_id, safe='')}", headers=self._headers)
        response.raise_for_status()
        return response.json()
