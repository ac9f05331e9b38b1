from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]

LOCAL_TIMEZONE = ZoneInfo("Asia/Kolkata")


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def iso_instant(moment: datetime) -> str:
    """Render as `2026-10-17T06:15:00.000Z`, the shape browsers send."""
    as_utc = moment.astimezone(UTC)
    return as_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def local_clock_string(moment: datetime) -> str:
    """Render in India time as `17/10/2026, 11:45:00 am`."""
    local = moment.astimezone(LOCAL_TIMEZONE)
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return (
        f"{local.day}/{local.month}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )
