import itertools

import pytest

from amlich import lunar
from amlich.errors import AmlichError, LeapMonthScanError
from amlich.julian import jd_from_date, jd_to_date
from amlich.lunar import (
    get_leap_month,
    get_leap_month_offset,
    get_lunar_month_11,
    lunar_month_length,
    lunar_to_solar,
    solar_to_lunar,
)
from amlich.models import INVALID_SOLAR_DATE, LunarDate, SolarDate


@pytest.mark.parametrize(
    "solar, expected",
    [
        ((10, 2, 2024), LunarDate(1, 1, 2024)),
        ((29, 1, 2025), LunarDate(1, 1, 2025)),
        ((1, 1, 2024), LunarDate(20, 11, 2023)),
        ((22, 3, 2023), LunarDate(1, 2, 2023, True)),
        ((20, 2, 2023), LunarDate(1, 2, 2023)),
    ],
)
def test_solar_to_lunar(solar, expected):
    assert solar_to_lunar(*solar, 7.0) == expected


def test_new_year_eve_2024():
    eve = solar_to_lunar(9, 2, 2024)
    assert (eve.month, eve.year, eve.is_leap) == (12, 2023, False)
    assert eve.day in (29, 30)


def test_lunar_to_solar():
    assert lunar_to_solar(1, 1, 2024) == SolarDate(10, 2, 2024)
    assert lunar_to_solar(1, 2, 2023, True) == SolarDate(22, 3, 2023)
    assert lunar_to_solar(1, 2, 2023, False) == SolarDate(20, 2, 2023)


def test_leap_request_for_other_month_is_invalid():
    result = lunar_to_solar(1, 3, 2023, True)
    assert result == INVALID_SOLAR_DATE
    assert not result.is_valid()


def test_leap_request_in_common_year_falls_back_to_regular_month():
    assert lunar_to_solar(1, 1, 2024, True) == lunar_to_solar(1, 1, 2024, False)


@pytest.mark.parametrize(
    "year, leap_month", [(2020, 4), (2023, 2), (2024, 0), (2025, 6)]
)
def test_get_leap_month(year, leap_month):
    assert get_leap_month(year) == leap_month


def test_month_lengths():
    lengths = [lunar_month_length(m, 2024) for m in range(1, 13)]
    assert set(lengths) <= {29, 30}
    year_length = jd_from_date(*lunar_to_solar(1, 1, 2025).as_tuple()) - jd_from_date(
        *lunar_to_solar(1, 1, 2024).as_tuple()
    )
    assert sum(lengths) == year_length


def test_leap_month_length():
    assert lunar_month_length(2, 2023, True) in (29, 30)
    assert lunar_month_length(3, 2023, True) == 0


def test_month_11_precedes_winter_solstice():
    a11 = get_lunar_month_11(2023, 7.0)
    day, month, year = jd_to_date(a11)
    assert year == 2023
    assert month in (11, 12)
    assert a11 <= jd_from_date(22, 12, 2023)


def test_round_trip_1900_2100():
    start = jd_from_date(1, 1, 1900)
    end = jd_from_date(31, 12, 2100)
    for jd in range(start, end + 1):
        solar = SolarDate(*jd_to_date(jd))
        ld = solar_to_lunar(*solar.as_tuple(), 7.0)
        assert 1 <= ld.day <= 30
        assert 1 <= ld.month <= 12
        assert lunar_to_solar(ld.day, ld.month, ld.year, ld.is_leap, 7.0) == solar


def test_new_moon_later_than_mean_estimate():
    # New moon k falls after 7 May 2054 even though the mean estimate is earlier
    ld = solar_to_lunar(7, 5, 2054, 7.0)
    assert 29 <= ld.day <= 30
    assert lunar_to_solar(ld.day, ld.month, ld.year, ld.is_leap, 7.0) == SolarDate(7, 5, 2054)
    next_day = solar_to_lunar(8, 5, 2054, 7.0)
    assert next_day.day == 1


def test_time_zone_changes_month_boundaries():
    # Vietnamese Tết 1985 fell a month before the Chinese New Year
    assert solar_to_lunar(21, 1, 1985, 7.0) == LunarDate(1, 1, 1985)
    assert solar_to_lunar(20, 2, 1985, 8.0) == LunarDate(1, 1, 1985)
    assert solar_to_lunar(21, 1, 1985, 8.0) != LunarDate(1, 1, 1985)


def test_leap_month_scan_is_bounded(monkeypatch):
    counter = itertools.count()
    monkeypatch.setattr(lunar, "get_sun_longitude", lambda day_number, tz: next(counter))
    with pytest.raises(LeapMonthScanError) as excinfo:
        get_leap_month_offset(jd_from_date(22, 12, 2022), 7.0)
    assert isinstance(excinfo.value, AmlichError)
