"""UTC normalization helpers.

Appointment times are stored as naive datetimes that express UTC instants.
Every value compared against stored times goes through these helpers first.
"""

from datetime import date, datetime, time, timedelta, timezone


def to_utc(value: datetime | date | str) -> datetime:
    """Return ``value`` as a naive datetime in UTC.

    Aware datetimes are converted, naive ones are taken to already be UTC.
    Dates map to midnight UTC. Strings are parsed as ISO-8601.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))

    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)

    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(instant: datetime) -> datetime:
    return datetime.combine(to_utc(instant).date(), time.min)


def end_of_day(instant: datetime) -> datetime:
    return start_of_day(instant) + timedelta(days=1) - timedelta(microseconds=1)


def add_days(instant: datetime, days: int) -> datetime:
    return instant + timedelta(days=days)
