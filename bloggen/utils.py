from __future__ import annotations

import datetime as dt

DATE_FMT = "%Y-%m-%d"


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base + "/"
    return f"{base}/{path}"


def iso_date(value: dt.datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.strftime(DATE_FMT)


def utc_today() -> str:
    return iso_date(dt.datetime.now(dt.timezone.utc))


def timestamp_date(timestamp: float) -> str:
    return iso_date(dt.datetime.fromtimestamp(timestamp, tz=dt.timezone.utc))
