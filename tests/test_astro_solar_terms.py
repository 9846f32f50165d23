import math

import pytest

from amlich.astro import get_new_moon_day, get_sun_longitude, sun_longitude
from amlich.julian import jd_from_date
from amlich.models import SolarDate
from amlich.solar_terms import (
    SOLAR_TERMS,
    find_term_start,
    get_season,
    get_solar_term,
    get_solar_terms_for_year,
)


@pytest.mark.parametrize("jd", [0.5, 1721425.5, 2299160.5, 2451545.0, 2460351.2, 2488070.0])
def test_sun_longitude_range(jd):
    value = sun_longitude(jd)
    assert 0 <= value < 2 * math.pi


def test_sun_longitude_sector_range():
    for jd in range(jd_from_date(1, 1, 2024), jd_from_date(1, 1, 2025), 5):
        assert 0 <= get_sun_longitude(jd, 7.0) <= 11


def test_new_moon_of_tet_2024():
    # New moon of 9 Feb 2024 22:59 UTC falls on 10 Feb local time
    k = round((jd_from_date(10, 2, 2024) - 2415021.076998695) / 29.530588853)
    assert get_new_moon_day(k, 7.0) == jd_from_date(10, 2, 2024)


def test_twenty_four_terms():
    assert len(SOLAR_TERMS) == 24
    assert SOLAR_TERMS[0][0] == "Xuân Phân"
    assert SOLAR_TERMS[21][0] == "Lập Xuân"


def test_seasons():
    assert get_season(0) == "Xuân"
    assert get_season(5) == "Xuân"
    assert get_season(6) == "Hạ"
    assert get_season(12) == "Thu"
    assert get_season(23) == "Đông"


def test_solar_term_of_tet_2024():
    term = get_solar_term(jd_from_date(10, 2, 2024), 7.0)
    assert term.name == "Lập Xuân"
    assert term.index == 21
    assert term.longitude == 315
    assert 315 <= term.current_longitude < 330
    assert term.description == "Start of Spring (Lập Xuân)"


@pytest.mark.parametrize(
    "date, name",
    [
        ((25, 6, 2024), "Hạ Chí"),
        ((25, 12, 2024), "Đông Chí"),
        ((1, 10, 2024), "Thu Phân"),
    ],
)
def test_solar_term_known_days(date, name):
    assert get_solar_term(jd_from_date(*date), 7.0).name == name


def test_terms_for_year_lists_every_transition():
    starts = get_solar_terms_for_year(2024, 7.0)
    assert starts[0].date == SolarDate(1, 1, 2024)
    assert len(starts) == 25
    assert len({s.term.index for s in starts[1:]}) == 24
    jds = [s.jd for s in starts]
    assert jds == sorted(jds)


def test_find_term_start_thanh_minh():
    start = find_term_start("Thanh Minh", 2024, 7.0)
    assert start is not None
    assert start.date.month == 4
    assert start.date.day in (4, 5)


def test_find_term_start_unknown_name():
    assert find_term_start("Không Có", 2024, 7.0) is None
