"""Tiết Khí: the 24 solar terms, 15 degrees of sun longitude each."""

import math

from amlich.astro import local_midnight, sun_longitude
from amlich.julian import jd_from_date, jd_to_date
from amlich.models import SolarDate, SolarTerm, SolarTermStart

# (name, description), index 0 = Xuân Phân at 0 degrees
SOLAR_TERMS: tuple[tuple[str, str], ...] = (
    ("Xuân Phân", "Spring Equinox"),
    ("Thanh Minh", "Pure Brightness"),
    ("Cốc Vũ", "Grain Rain"),
    ("Lập Hạ", "Start of Summer"),
    ("Tiểu Mãn", "Grain Buds"),
    ("Mang Chủng", "Grain in Ear"),
    ("Hạ Chí", "Summer Solstice"),
    ("Tiểu Thử", "Slight Heat"),
    ("Đại Thử", "Great Heat"),
    ("Lập Thu", "Start of Autumn"),
    ("Xử Thử", "End of Heat"),
    ("Bạch Lộ", "White Dew"),
    ("Thu Phân", "Autumn Equinox"),
    ("Hàn Lộ", "Cold Dew"),
    ("Sương Giáng", "Frost Descent"),
    ("Lập Đông", "Start of Winter"),
    ("Tiểu Tuyết", "Slight Snow"),
    ("Đại Tuyết", "Great Snow"),
    ("Đông Chí", "Winter Solstice"),
    ("Tiểu Hàn", "Slight Cold"),
    ("Đại Hàn", "Great Cold"),
    ("Lập Xuân", "Start of Spring"),
    ("Vũ Thủy", "Rain Water"),
    ("Kinh Trập", "Awakening of Insects"),
)

SOLAR_TERM_NAMES = frozenset(name for name, _ in SOLAR_TERMS)

SEASONS = ("Xuân", "Hạ", "Thu", "Đông")


def get_season(term_index: int) -> str:
    """Season of a term index: six terms per season starting at Xuân Phân."""
    return SEASONS[(term_index % 24) // 6]


def get_solar_term(day_number: int, time_zone: float = 7.0) -> SolarTerm:
    """Calculate the solar term in effect at local midnight of a Julian day."""
    degrees = math.degrees(sun_longitude(local_midnight(day_number, time_zone))) % 360.0
    index = int(degrees // 15) % 24
    name, description = SOLAR_TERMS[index]
    return SolarTerm(
        index=index,
        name=name,
        description=f"{description} ({name})",
        longitude=index * 15,
        current_longitude=round(degrees, 2),
        season=get_season(index),
    )


def get_solar_terms_for_year(
    year: int, time_zone: float = 7.0
) -> tuple[SolarTermStart, ...]:
    """List each day of a solar year on which a new solar term begins.

    1 January is always included, carrying the term already in effect.
    """
    starts: list[SolarTermStart] = []
    previous = None
    for jd in range(jd_from_date(1, 1, year), jd_from_date(31, 12, year) + 1):
        term = get_solar_term(jd, time_zone)
        if term.index != previous:
            starts.append(SolarTermStart(jd=jd, date=SolarDate(*jd_to_date(jd)), term=term))
            previous = term.index
    return tuple(starts)


def find_term_start(
    name: str, year: int, time_zone: float = 7.0
) -> SolarTermStart | None:
    """First day of the named term inside a solar year, if it starts there."""
    for start in get_solar_terms_for_year(year, time_zone)[1:]:
        if start.term.name == name:
            return start
    return None
