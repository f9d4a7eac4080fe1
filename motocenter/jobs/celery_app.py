"""Celery configuration for scheduled jobs."""

from __future__ import annotations

import os

from celery import Celery
from celery.schedules import crontab

from motocenter.utils.dates import timezone_name

broker_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")
backend_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")

celery_app = Celery("motocenter", broker=broker_url, backend=backend_url, include=["motocenter.jobs.snapshot"])
celery_app.conf.timezone = timezone_name()
celery_app.conf.beat_schedule = {
    "refresh-snapshot": {
        "task": "motocenter.jobs.snapshot.refresh",
        "schedule": crontab(minute=int(os.environ.get("SNAPSHOT_MINUTE", "15"))),
    },
}


@celery_app.task(name="motocenter.jobs.snapshot.refresh")
def refresh_snapshot_task() -> int:  # pragma: no cover - executed by worker
    import asyncio

    from motocenter.jobs.snapshot import refresh_snapshot

    return asyncio.run(refresh_snapshot())
