"""Datetime helpers."""

from __future__ import annotations

import os

import pendulum

DEFAULT_TZ = "Europe/Athens"


def timezone_name() -> str:
    return os.environ.get("TIMEZONE", DEFAULT_TZ)


def now_in_tz() -> pendulum.DateTime:
    tz = pendulum.timezone(timezone_name())
    return pendulum.now(tz)


def format_timestamp(value: pendulum.DateTime) -> str:
    return value.to_iso8601_string()
