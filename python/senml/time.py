"""Convert resolved SenML times to and from datetimes.

This is the only place a clock is read.  Absolute times are seconds since
the Unix epoch; relative times are offsets from "now", which the caller
may pass explicitly to keep results reproducible.

SenML carries sub-second precision in a float, so conversions are exact
only to about a microsecond for present-day timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .records import SenMLTime

TIME_ORIGIN = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_datetime(t: SenMLTime, now: datetime | None = None) -> datetime:
    """Return the UTC datetime a resolved time denotes.

    ``now`` is only consulted for relative times and defaults to the
    current wall-clock time.
    """
    offset = timedelta(seconds=t.seconds)
    if not t.is_relative:
        return TIME_ORIGIN + offset
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now + offset


def from_datetime(dt: datetime) -> float:
    """Seconds since the epoch for *dt*; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - TIME_ORIGIN).total_seconds()
