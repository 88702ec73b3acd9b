"""Cache expiration policy.

A snapshot is valid while the reference time is strictly before the
snapshot timestamp plus :data:`MAX_CACHE_AGE_DAYS` calendar days.

The day arithmetic is done on wall-clock time in the policy time zone:
adding ``timedelta(days=n)`` to an aware datetime keeps its local time of
day, so across a daylight-saving transition "7 days later" is the same
clock time a week later rather than exactly 168 hours.  The comparison
itself is between absolute instants.  In UTC both readings agree.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

MAX_CACHE_AGE_DAYS = 7


def validate(
    timestamp: datetime,
    against: datetime,
    *,
    max_age_days: int = MAX_CACHE_AGE_DAYS,
    tz: tzinfo = timezone.utc,
) -> bool:
    """Return ``True`` if a snapshot saved at *timestamp* is still valid at *against*.

    Args:
        timestamp: When the snapshot was saved.  Naive values are taken as UTC.
        against: The reference ("now") time.  Naive values are taken as UTC.
        max_age_days: Number of calendar days a snapshot stays valid.
        tz: Time zone whose calendar defines a day.

    Returns:
        ``against < timestamp + max_age_days`` (calendar days in *tz*).
    """
    local_timestamp = _aware(timestamp).astimezone(tz)
    max_age = local_timestamp + timedelta(days=max_age_days)
    # Same-tzinfo comparisons use wall time; compare in UTC instead.
    return _aware(against).astimezone(timezone.utc) < max_age.astimezone(timezone.utc)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
