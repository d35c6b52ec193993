from datetime import datetime

import pytest

from telemed.core.errors import InvalidRequestError
from telemed.services import appointment_query
from telemed.services.appointment_query import AppointmentFilter, AppointmentQuery

TODAY = datetime(2026, 3, 11)


def _bounds(predicates) -> list[tuple[str, str, datetime]]:
    return [(p.left.name, p.operator.__name__, p.right.value) for p in predicates]


@pytest.mark.parametrize('value', ['today', 'future', 'past'])
def test_parse_filter_accepts_known_filters(value: str) -> None:
    assert appointment_query.parse_filter(value).value == value


@pytest.mark.parametrize('value', ['weekly', '', None, 'TODAY'])
def test_parse_filter_rejects_unknown_filters(value) -> None:
    with pytest.raises(InvalidRequestError) as exception_info:
        appointment_query.parse_filter(value)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == f'Invalid filter: {value}'


def test_today_window_spans_the_whole_day() -> None:
    window, order_by = appointment_query.time_window(AppointmentFilter.TODAY, 3, TODAY)

    assert _bounds(window) == [
        ('start_time', 'ge', datetime(2026, 3, 11)),
        ('end_time', 'le', datetime(2026, 3, 11, 23, 59, 59, 999999)),
    ]
    assert order_by[0].element.name == 'start_time'


def test_future_window_selects_the_day_offset_days_ahead() -> None:
    window, order_by = appointment_query.time_window(AppointmentFilter.FUTURE, 2, TODAY)

    assert _bounds(window) == [
        ('start_time', 'ge', datetime(2026, 3, 13)),
        ('start_time', 'lt', datetime(2026, 3, 14)),
    ]
    assert order_by[0].element.name == 'start_time'


def test_past_window_ends_at_start_of_today() -> None:
    window, order_by = appointment_query.time_window(AppointmentFilter.PAST, 1, TODAY)

    assert _bounds(window) == [
        ('end_time', 'ge', datetime(2026, 3, 9, 23, 59, 59, 999999)),
        ('end_time', 'lt', datetime(2026, 3, 11)),
    ]
    assert order_by[0].element.name == 'end_time'


def test_time_window_rejects_values_outside_the_enum() -> None:
    with pytest.raises(InvalidRequestError):
        appointment_query.time_window('weekly', 0, TODAY)


@pytest.mark.parametrize('appointment_filter', list(AppointmentFilter))
def test_list_all_uses_offset_as_page_index(appointment_filter: AppointmentFilter) -> None:
    query = appointment_query.list_all((), appointment_filter, offset=2, limit=5, today_start=TODAY)

    assert query.offset == 10
    assert query.limit == 5
    assert query.with_details is True
    assert len(query.predicates) == 2


def test_list_all_prepends_scope_predicates() -> None:
    scope = ('scope-marker',)

    query = appointment_query.list_all(scope, AppointmentFilter.TODAY, offset=0, limit=5, today_start=TODAY)

    assert query.predicates[0] == 'scope-marker'
    assert len(query.predicates) == 3


def test_future_for_doctor_skips_rows_not_pages() -> None:
    query = appointment_query.future_for_doctor(4, TODAY, offset=3, limit=5)

    assert query.offset == 3
    assert query.limit == 5
    assert query.with_details is True


def test_active_for_doctor_returns_at_most_one_row() -> None:
    assert appointment_query.active_for_doctor(4, TODAY).limit == 1


def test_paginate_returns_a_new_query() -> None:
    base = AppointmentQuery()

    paged = base.paginate(5, 10)

    assert (base.offset, base.limit) == (None, None)
    assert (paged.offset, paged.limit) == (5, 10)
