from __future__ import annotations

import datetime as dt
import math

_MAX_SECONDS = dt.timedelta.max.total_seconds()
_MIN_SECONDS = dt.timedelta.min.total_seconds()


def to_seconds(value: dt.timedelta) -> float:
    return value.total_seconds()


def from_seconds(seconds: float) -> dt.timedelta:
    """Convert float seconds back to a timedelta, saturating instead of overflowing."""
    if math.isnan(seconds):
        raise ValueError("duration is NaN")
    if seconds >= _MAX_SECONDS:
        return dt.timedelta.max
    if seconds <= _MIN_SECONDS:
        return dt.timedelta.min
    return dt.timedelta(seconds=seconds)


def decay_factor(age: dt.timedelta, horizon: dt.timedelta) -> float:
    """Linear decay from 1 at age zero to 0 at `horizon`, floored at zero."""
    return max(0.0, 1.0 - age / horizon)


def utcnow_like(reference: dt.datetime) -> dt.datetime:
    """
    Read the wall clock in UTC, naive or aware to match `reference` so the two
    can be subtracted.
    """
    if reference.tzinfo is None or reference.utcoffset() is None:
        return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    return dt.datetime.now(dt.timezone.utc)
