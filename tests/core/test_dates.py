"""Tests for date helpers."""

from datetime import date, datetime

from pms.core.dates import clear_time_component, resolve_date


def test_clear_time_component_from_datetime():
    assert clear_time_component(datetime(2024, 3, 1, 17, 45)) == date(2024, 3, 1)


def test_clear_time_component_keeps_date():
    assert clear_time_component(date(2024, 3, 1)) == date(2024, 3, 1)


def test_resolve_date_defaults_to_today():
    assert resolve_date() == date.today()


def test_resolve_date_strips_time():
    resolved = resolve_date(datetime(2024, 3, 1, 9, 30))
    assert resolved == date(2024, 3, 1)
    assert not isinstance(resolved, datetime)
