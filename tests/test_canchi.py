import pytest

from amlich.canchi import (
    CAN,
    CHI,
    get_can_index,
    get_chi_index,
    get_day_canchi,
    get_month_canchi,
    get_year_canchi,
    lunar_month_name,
    make_canchi,
)
from amlich.julian import jd_from_date


@pytest.mark.parametrize(
    "date, full",
    [
        ((10, 2, 2024), "Giáp Thìn"),
        ((29, 1, 2025), "Mậu Tuất"),
        ((1, 1, 2024), "Giáp Tý"),
    ],
)
def test_day_canchi(date, full):
    assert get_day_canchi(jd_from_date(*date)).full == full


def test_year_canchi():
    year = get_year_canchi(2024)
    assert year.full == "Giáp Thìn"
    assert year.con_giap == "Thìn (Rồng)"
    assert get_year_canchi(2025).full == "Ất Tỵ"
    assert get_year_canchi(1984).sexagenary_index == 0


def test_month_canchi():
    assert get_month_canchi(1, 2024).full == "Bính Dần"
    assert get_month_canchi(1, 2023).full == "Giáp Dần"
    assert get_month_canchi(11, 2023).chi == "Tý"


def test_leap_month_canchi_keeps_regular_pair():
    leap = get_month_canchi(2, 2023, True)
    regular = get_month_canchi(2, 2023)
    assert leap.full == "Ất Mão (nhuận)"
    assert (leap.can, leap.chi) == (regular.can, regular.chi)


def test_elements():
    pair = make_canchi(0, 4)
    assert pair.can_element == "Mộc"
    assert pair.chi_element == "Thổ"


def test_make_canchi_wraps_indices():
    pair = make_canchi(12, 14)
    assert (pair.can_index, pair.chi_index) == (2, 2)
    assert pair.full == "Bính Dần"


def test_index_lookups():
    assert get_can_index("Giáp") == 0
    assert get_chi_index("Hợi") == 11
    assert len(CAN) == 10
    assert len(CHI) == 12


def test_lunar_month_name():
    assert lunar_month_name(1) == "Giêng"
    assert lunar_month_name(12) == "Chạp"
    assert lunar_month_name(2, True) == "Hai nhuận"


@pytest.mark.parametrize(
    "can_index, chi_index, expected",
    [(0, 0, 0), (1, 1, 6), (2, 2, 13), (9, 11, 59)],
)
def test_sexagenary_index(can_index, chi_index, expected):
    assert make_canchi(can_index, chi_index).sexagenary_index == expected
