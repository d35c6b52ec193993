from datetime import date, datetime, timedelta, timezone

from telemed.core.timeutils import add_days, end_of_day, start_of_day, to_utc


def test_to_utc_converts_aware_datetimes() -> None:
    paris_winter = timezone(timedelta(hours=1))

    assert to_utc(datetime(2026, 1, 5, 9, 0, tzinfo=paris_winter)) == datetime(2026, 1, 5, 8, 0)


def test_to_utc_treats_naive_datetimes_as_utc() -> None:
    assert to_utc(datetime(2026, 1, 5, 9, 0)) == datetime(2026, 1, 5, 9, 0)


def test_to_utc_maps_dates_to_midnight() -> None:
    assert to_utc(date(2026, 1, 5)) == datetime(2026, 1, 5, 0, 0)


def test_to_utc_parses_iso_strings() -> None:
    assert to_utc('2026-01-05T23:30:00-02:00') == datetime(2026, 1, 6, 1, 30)
    assert to_utc('2026-01-05T09:00:00Z') == datetime(2026, 1, 5, 9, 0)


def test_day_boundaries() -> None:
    instant = datetime(2026, 1, 5, 17, 42, 3)

    assert start_of_day(instant) == datetime(2026, 1, 5, 0, 0)
    assert end_of_day(instant) == datetime(2026, 1, 5, 23, 59, 59, 999999)


def test_add_days_crosses_month_boundaries() -> None:
    assert add_days(datetime(2026, 1, 31), 1) == datetime(2026, 2, 1)
    assert add_days(datetime(2026, 3, 1), -1) == datetime(2026, 2, 28)
