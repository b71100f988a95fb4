"""Datetime helpers shared by the integration layers.

Currently provides:
    parse_iso8601(s): parser for the ``eventDate`` stamps Adobe Sign puts in
    webhook notifications. Always returns an *aware* UTC datetime and accepts
        • trailing "Z"
        • explicit offsets like "+00:00" or "-05:00"
        • fractional seconds
    LOG_TIMESTAMP_FORMAT: day-first console stamp used by the text log format.
"""
from __future__ import annotations

import datetime as _dt
from typing import Union

from dateutil.parser import isoparse as _isoparse

__all__ = ["LOG_TIMESTAMP_FORMAT", "parse_iso8601"]

LOG_TIMESTAMP_FORMAT = "%d-%m-%Y, %H:%M:%S"


def _ensure_utc(dt: _dt.datetime) -> _dt.datetime:
    """Return *dt* converted to UTC and TZ-aware."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        # naive → assume already UTC
        return dt.replace(tzinfo=_dt.timezone.utc)
    return dt.astimezone(_dt.timezone.utc)


def parse_iso8601(value: Union[str, _dt.datetime]) -> _dt.datetime:
    """Parse *value* into a timezone-aware UTC datetime.

    Accepts ISO-8601 strings or datetime objects. If *value* is already a
    datetime, it will be normalised to UTC.
    """
    if isinstance(value, _dt.datetime):
        return _ensure_utc(value)

    if not isinstance(value, str):
        raise TypeError("parse_iso8601 expects str or datetime, got " + type(value).__name__)

    try:
        dt = _isoparse(value)
    except ValueError as exc:
        raise ValueError(f"invalid ISO-8601 datetime: {value}") from exc

    return _ensure_utc(dt)

