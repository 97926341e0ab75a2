"""
Time zone / UTC conversion helpers and ISO-8601 rendering.

Conventions:
    local    : naive datetime holding wall-clock time somewhere
    utc      : UTC instant; naive values are taken to be UTC already
    offset   : timedelta east of UTC (UTC+05:30 -> timedelta(hours=5, minutes=30))
    zone     : a timedelta offset, a tzinfo, or an IANA name such as "Europe/London"
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config.settings import settings
from models.domain import InvalidArgument

ISO8601_DATE_ONLY = "%Y-%m-%d"
ISO8601_SECONDS   = "%Y-%m-%dT%H:%M:%S"


def resolve_zone(zone: timedelta | tzinfo | str | None = None) -> tzinfo:
    """Turn a zone value into a tzinfo. None means settings.default_timezone."""
    if zone is None:
        zone = settings.default_timezone
    if isinstance(zone, tzinfo):
        return zone
    if isinstance(zone, timedelta):
        return timezone(zone)
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgument(f"Unknown timezone: {zone!r}") from exc


def _naive_utc(utc: datetime) -> datetime:
    if utc.tzinfo is not None:
        utc = utc.astimezone(timezone.utc)
    return utc.replace(tzinfo=None)


def local_to_utc(local: datetime, gmt_offset: timedelta) -> datetime:
    """Wall-clock time at `gmt_offset` -> aware UTC datetime."""
    return (local.replace(tzinfo=None) - gmt_offset).replace(tzinfo=timezone.utc)


def utc_to_local(utc: datetime, gmt_offset: timedelta) -> datetime:
    """UTC instant -> naive wall-clock time at `gmt_offset`."""
    return _naive_utc(utc) + gmt_offset


def gmt_offset(utc: datetime, local: datetime) -> timedelta:
    """Offset implied by a pair of readings of the same instant."""
    return local.replace(tzinfo=None) - _naive_utc(utc)


def utc_to_offset(utc: datetime, zone: timedelta | tzinfo | str) -> datetime:
    """UTC instant -> aware datetime expressed in `zone`."""
    tz = resolve_zone(zone)
    return _naive_utc(utc).replace(tzinfo=timezone.utc).astimezone(tz)


def local_to_offset(local: datetime, zone: tzinfo | str | None = None) -> datetime:
    """
    Attach `zone` to a naive wall-clock time.

    The zone's rules decide the offset for that wall-clock time (DST aware);
    an already-aware input has its tzinfo replaced, not converted.
    """
    tz = resolve_zone(zone)
    return local.replace(tzinfo=tz)


# ── ISO-8601 ──────────────────────────────────────────────────────────────────

def iso8601_date(value: date) -> str:
    return value.strftime(ISO8601_DATE_ONLY)


def iso8601(value: datetime) -> str:
    """
    Render with millisecond precision.

    2023-06-01T08:10:20.000        naive
    2023-06-01T08:10:20.000Z       UTC
    2023-06-01T08:10:20.000-04:00  any other offset
    """
    text = f"{value.strftime(ISO8601_SECONDS)}.{value.microsecond // 1000:03d}"
    offset = value.utcoffset()
    if offset is None:
        return text
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_iso8601(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidArgument(f"Not an ISO-8601 timestamp: {text!r}") from exc
