from datetime import date, datetime, timezone

import pytest

from agenda_service.domain.agenda.trigger import local_today, should_trigger, to_local_time


def test_local_time_uses_organization_timezone() -> None:
    now = datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc)

    assert to_local_time(now, 'America/Bogota').hour == 7
    assert to_local_time(now, 'Europe/Madrid').hour == 13


def test_naive_datetimes_are_treated_as_utc() -> None:
    assert to_local_time(datetime(2025, 3, 7, 12, 0), 'America/Bogota').hour == 7


@pytest.mark.parametrize('tz_name', ['Not/AZone', '', None])
def test_unresolvable_timezone_falls_back_to_fixed_offset(tz_name) -> None:
    now = datetime(2025, 3, 7, 3, 0, tzinfo=timezone.utc)

    assert to_local_time(now, tz_name).hour == 22


@pytest.mark.parametrize(
    ('send_time', 'expected'),
    [
        ('07:00', True),
        ('07:45:00', True),
        ('08:00:00', False),
        ('12:00', False),
    ],
)
def test_should_trigger_compares_local_hour(send_time: str, expected: bool) -> None:
    now = datetime(2025, 3, 7, 12, 10, tzinfo=timezone.utc)

    assert should_trigger(now, 'America/Bogota', send_time) is expected


def test_should_trigger_handles_daylight_saving() -> None:
    # New York is UTC-4 in July and UTC-5 in January
    assert should_trigger(datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc), 'America/New_York', '08:00')
    assert should_trigger(datetime(2025, 1, 15, 13, 0, tzinfo=timezone.utc), 'America/New_York', '08:00')


def test_should_trigger_uses_fallback_offset_for_bad_timezone() -> None:
    now = datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc)

    assert should_trigger(now, 'Invalid/Zone', '07:00')


def test_should_trigger_rejects_malformed_send_time() -> None:
    with pytest.raises(ValueError):
        should_trigger(datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc), 'UTC', 'noon')


def test_local_today_can_differ_from_utc_date() -> None:
    now = datetime(2025, 3, 8, 2, 0, tzinfo=timezone.utc)

    assert local_today(now, 'America/Bogota') == date(2025, 3, 7)
    assert local_today(now, 'Asia/Tokyo') == date(2025, 3, 8)
