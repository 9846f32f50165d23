from amlich.holidays import (
    get_holidays_for_date,
    get_major_holidays,
    get_vietnamese_holidays,
    nth_weekday_of_month,
)
from amlich.julian import jd_from_date
from amlich.models import SolarDate


def _by_name(holidays):
    return {h.name: h for h in holidays}


def test_lunar_festivals_2024():
    holidays = get_vietnamese_holidays(2024)
    tet = [h for h in holidays if h.lunar is not None and h.lunar.day == 1 and h.lunar.month == 1]
    assert tet[0].solar == SolarDate(10, 2, 2024)
    dates = {(h.solar.day, h.solar.month) for h in holidays if not h.is_solar}
    assert (17, 9) in dates  # Trung Thu
    assert (18, 4) in dates  # Giỗ Tổ Hùng Vương
    assert (2, 2) in dates  # Ông Công Ông Táo, lunar 23/12 of the previous year


def test_giao_thua():
    eve = _by_name(get_vietnamese_holidays(2024))["Giao Thừa (Đêm giao thừa)"]
    assert eve.solar == SolarDate(9, 2, 2024)
    assert eve.lunar.month == 12
    assert eve.lunar.year == 2023
    assert eve.is_major
    eve_2025 = _by_name(get_vietnamese_holidays(2025))["Giao Thừa (Đêm giao thừa)"]
    assert eve_2025.solar == SolarDate(28, 1, 2025)


def test_thanh_minh():
    thanh_minh = _by_name(get_vietnamese_holidays(2024))["Tết Thanh Minh"]
    assert thanh_minh.solar.month == 4
    assert thanh_minh.solar.day in (4, 5)
    assert thanh_minh.is_solar


def test_sorted_by_date():
    holidays = get_vietnamese_holidays(2024)
    keys = [jd_from_date(*h.solar.as_tuple()) for h in holidays]
    assert keys == sorted(keys)
    assert all(h.solar.year == 2024 for h in holidays if h.is_solar)


def test_major_holidays():
    major = get_major_holidays(2024)
    assert major
    assert all(h.is_major for h in major)
    assert len(major) < len(get_vietnamese_holidays(2024))


def test_holidays_for_date():
    names = [h.name for h in get_holidays_for_date(2, 9, 2024)]
    assert any("Quốc Khánh" in name for name in names)
    assert get_holidays_for_date(3, 3, 2024) == [
        h for h in get_vietnamese_holidays(2024) if h.solar == SolarDate(3, 3, 2024)
    ]


def test_nth_weekday_of_month():
    # Mother's Day 2024: second Sunday of May
    assert nth_weekday_of_month(2024, 5, 0, 2) == SolarDate(12, 5, 2024)
    # Father's Day 2024: third Sunday of June
    assert nth_weekday_of_month(2024, 6, 0, 3) == SolarDate(16, 6, 2024)
