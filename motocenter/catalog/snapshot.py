"""Bundled fallback snapshot of the catalog."""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Iterable, Mapping

from motocenter.catalog.errors import SnapshotError
from motocenter.catalog.models import SnapshotEntry, classify_entry

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_PATH = pathlib.Path(__file__).resolve().parent.parent / "data" / "bikes.json"


def load_snapshot(path: pathlib.Path = DEFAULT_SNAPSHOT_PATH) -> list[SnapshotEntry]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    entries = _entries(data)
    try:
        return [classify_entry(entry) for entry in entries]
    except TypeError as exc:
        raise SnapshotError(f"Malformed snapshot {path}: {exc}") from exc


def _entries(data: Any) -> list[Any]:
    if isinstance(data, Mapping):
        for key in ("bikes", "records"):
            if isinstance(data.get(key), list):
                return data[key]
        raise SnapshotError("Snapshot object has no 'bikes' list")
    if isinstance(data, list):
        return data
    raise SnapshotError(f"Unexpected snapshot type {type(data).__name__}")


def write_snapshot(path: pathlib.Path, records: Iterable[Mapping[str, Any]]) -> int:
    """Replace the snapshot at ``path``.

    The bundled default lives inside the installed package, which is often
    read-only; scheduled refreshes should point CATALOG_SNAPSHOT_PATH elsewhere.
    """
    payload = {"bikes": list(records)}
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        raise SnapshotError(f"Cannot write snapshot {path} (set CATALOG_SNAPSHOT_PATH to a writable file): {exc}") from exc
    logger.info("Wrote %s records to %s", len(payload["bikes"]), path)
    return len(payload["bikes"])
