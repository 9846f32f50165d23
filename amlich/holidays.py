"""Vietnamese lunar festivals and solar holidays for a solar year."""

import logging
import threading
from typing import Any

import orjson

from amlich.julian import day_of_week, jd_from_date, jd_to_date
from amlich.lunar import TIME_ZONE, lunar_to_solar, solar_to_lunar
from amlich.models import Holiday, LunarDate, SolarDate
from amlich.ruleset import DATA_DIR
from amlich.solar_terms import find_term_start

log = logging.getLogger(__name__)

HOLIDAYS_FILE = DATA_DIR / "holidays.json"

_HOLIDAY_DATA: dict[str, Any] | None = None
_HOLIDAY_DATA_LOCK = threading.Lock()


def _holiday_data() -> dict[str, Any]:
    """Load the holiday tables once."""
    global _HOLIDAY_DATA
    if _HOLIDAY_DATA is not None:
        return _HOLIDAY_DATA
    with _HOLIDAY_DATA_LOCK:
        if _HOLIDAY_DATA is None:
            _HOLIDAY_DATA = orjson.loads(HOLIDAYS_FILE.read_bytes())
            log.debug(f"{__name__}: loaded {HOLIDAYS_FILE.name}")
    return _HOLIDAY_DATA


def nth_weekday_of_month(year: int, month: int, weekday: int, nth: int) -> SolarDate:
    """Date of the nth given weekday (0=Sunday) in a month."""
    first_weekday = day_of_week(jd_from_date(1, month, year))
    offset = (7 + weekday - first_weekday) % 7
    return SolarDate(1 + offset + 7 * (nth - 1), month, year)


def _lunar_festival(entry: dict[str, Any], solar_year: int, time_zone: float) -> Holiday | None:
    lunar = LunarDate(entry["lunar_day"], entry["lunar_month"], solar_year + entry["year_offset"])
    solar = lunar_to_solar(lunar.day, lunar.month, lunar.year, False, time_zone)
    if not solar.is_valid():
        return None
    return Holiday(
        name=entry["name"],
        description=entry["description"],
        solar=solar,
        lunar=lunar,
        is_solar=False,
        category=entry["category"],
        is_major=entry["is_major"],
    )


def _giao_thua(solar_year: int, time_zone: float) -> Holiday:
    """New Year's Eve is the last day of lunar month 12, whether it has 29 or 30 days."""
    tet = lunar_to_solar(1, 1, solar_year, False, time_zone)
    eve = SolarDate(*jd_to_date(jd_from_date(*tet.as_tuple()) - 1))
    return Holiday(
        name="Giao Thừa (Đêm giao thừa)",
        description="New Year's Eve",
        solar=eve,
        lunar=solar_to_lunar(*eve.as_tuple(), time_zone),
        is_solar=False,
        category="festival",
        is_major=True,
    )


def _thanh_minh(solar_year: int, time_zone: float) -> Holiday:
    start = find_term_start("Thanh Minh", solar_year, time_zone)
    solar = start.date if start is not None else SolarDate(5, 4, solar_year)
    return Holiday(
        name="Tết Thanh Minh",
        description="Tomb Sweeping Day (Solar calendar)",
        solar=solar,
        lunar=None,
        is_solar=True,
        category="festival",
        is_major=True,
    )


def get_vietnamese_holidays(solar_year: int, time_zone: float = TIME_ZONE) -> list[Holiday]:
    """All festivals and holidays falling in a solar year, sorted by date."""
    data = _holiday_data()
    holidays = []
    for entry in data["lunar_festivals"]:
        holiday = _lunar_festival(entry, solar_year, time_zone)
        if holiday is not None:
            holidays.append(holiday)
    holidays.append(_giao_thua(solar_year, time_zone))
    holidays.append(_thanh_minh(solar_year, time_zone))

    for entry in data["solar_holidays"]:
        holidays.append(
            Holiday(
                name=entry["name"],
                description=entry["description"],
                solar=SolarDate(entry["day"], entry["month"], solar_year),
                lunar=None,
                is_solar=True,
                category=entry["category"],
                is_major=entry["is_major"],
            )
        )
    for entry in data["weekday_holidays"]:
        holidays.append(
            Holiday(
                name=entry["name"],
                description=entry["description"],
                solar=nth_weekday_of_month(
                    solar_year, entry["month"], entry["weekday"], entry["nth"]
                ),
                lunar=None,
                is_solar=True,
                category=entry["category"],
                is_major=entry["is_major"],
            )
        )

    holidays.sort(key=lambda h: (jd_from_date(*h.solar.as_tuple()), h.name))
    return holidays


def get_major_holidays(solar_year: int, time_zone: float = TIME_ZONE) -> list[Holiday]:
    return [h for h in get_vietnamese_holidays(solar_year, time_zone) if h.is_major]


def get_holidays_for_date(
    dd: int, mm: int, yy: int, time_zone: float = TIME_ZONE
) -> list[Holiday]:
    """Holidays observed on a given solar date."""
    target = SolarDate(dd, mm, yy)
    return [h for h in get_vietnamese_holidays(yy, time_zone) if h.solar == target]
