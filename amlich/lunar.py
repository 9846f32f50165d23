"""Solar <-> lunar conversion for the Vietnamese calendar."""

import math

from amlich.astro import NEW_MOON_EPOCH, SYNODIC_MONTH, get_new_moon_day, get_sun_longitude
from amlich.errors import LeapMonthScanError
from amlich.julian import jd_from_date, jd_to_date
from amlich.models import INVALID_SOLAR_DATE, LunarDate, SolarDate

TIME_ZONE = 7.0
LEAP_MONTH_SCAN_LIMIT = 14


def get_lunar_month_11(yy: int, time_zone: float) -> int:
    """Find the start of the 11th lunar month for a given Gregorian year."""
    off = jd_from_date(31, 12, yy) - 2415021
    k = math.floor(off / SYNODIC_MONTH)
    nm = get_new_moon_day(k, time_zone)
    sun_long = get_sun_longitude(nm, time_zone)
    if sun_long >= 9:
        nm = get_new_moon_day(k - 1, time_zone)
    return nm


def get_leap_month_offset(a11: int, time_zone: float) -> int:
    """Calculate the index of the leap month following the 11th lunar month.

    The leap month is the first month after a11 with no change of sun longitude
    sector between its new moon and the next one.
    """
    k = math.floor((a11 - NEW_MOON_EPOCH) / SYNODIC_MONTH + 0.5)
    i = 1
    arc = get_sun_longitude(get_new_moon_day(k + i, time_zone), time_zone)
    while True:
        last = arc
        i += 1
        arc = get_sun_longitude(get_new_moon_day(k + i, time_zone), time_zone)
        if arc == last:
            return i - 1
        if i >= LEAP_MONTH_SCAN_LIMIT:
            raise LeapMonthScanError(
                f"No leap month found within {LEAP_MONTH_SCAN_LIMIT} new moons after JD {a11}"
            )


def solar_to_lunar(dd: int, mm: int, yy: int, time_zone: float = TIME_ZONE) -> LunarDate:
    """Convert a Gregorian (Solar) date to its corresponding Lunar date."""
    day_number = jd_from_date(dd, mm, yy)
    k = math.floor((day_number - NEW_MOON_EPOCH) / SYNODIC_MONTH)
    # Periodic terms can put the true new moon k after the date
    for candidate in (k + 1, k, k - 1):
        month_start = get_new_moon_day(candidate, time_zone)
        if month_start <= day_number:
            break
    a11 = get_lunar_month_11(yy, time_zone)
    b11 = a11
    if a11 >= month_start:
        lunar_year = yy
        a11 = get_lunar_month_11(yy - 1, time_zone)
    else:
        lunar_year = yy + 1
        b11 = get_lunar_month_11(yy + 1, time_zone)
    lunar_day = day_number - month_start + 1
    diff = math.floor((month_start - a11) / 29)
    lunar_leap = False
    lunar_month = diff + 11
    if b11 - a11 > 365:
        leap_month_diff = get_leap_month_offset(a11, time_zone)
        if diff >= leap_month_diff:
            lunar_month = diff + 10
            if diff == leap_month_diff:
                lunar_leap = True
    if lunar_month > 12:
        lunar_month = lunar_month - 12
    if lunar_month >= 11 and diff < 4:
        lunar_year -= 1
    return LunarDate(lunar_day, lunar_month, lunar_year, lunar_leap)


def _month_11_bounds(lunar_month: int, lunar_year: int, time_zone: float) -> tuple[int, int]:
    if lunar_month < 11:
        return (
            get_lunar_month_11(lunar_year - 1, time_zone),
            get_lunar_month_11(lunar_year, time_zone),
        )
    return (
        get_lunar_month_11(lunar_year, time_zone),
        get_lunar_month_11(lunar_year + 1, time_zone),
    )


def _month_start(
    lunar_month: int, lunar_year: int, lunar_leap: bool, time_zone: float
) -> int | None:
    """Julian day of the new moon opening a lunar month, None if it does not exist."""
    a11, b11 = _month_11_bounds(lunar_month, lunar_year, time_zone)
    k = math.floor(0.5 + (a11 - NEW_MOON_EPOCH) / SYNODIC_MONTH)
    off = lunar_month - 11
    if off < 0:
        off += 12
    if b11 - a11 > 365:
        leap_off = get_leap_month_offset(a11, time_zone)
        leap_month = leap_off - 2
        if leap_month < 0:
            leap_month += 12
        if lunar_leap and lunar_month != leap_month:
            return None
        if lunar_leap or off >= leap_off:
            off += 1
    return get_new_moon_day(k + off, time_zone)


def lunar_to_solar(
    lunar_day: int,
    lunar_month: int,
    lunar_year: int,
    lunar_leap: bool = False,
    time_zone: float = TIME_ZONE,
) -> SolarDate:
    """Convert a Lunar date to its corresponding Gregorian (Solar) date.

    Returns INVALID_SOLAR_DATE when a leap month is requested that differs from
    the leap month of a 13-month lunar year.
    """
    month_start = _month_start(lunar_month, lunar_year, lunar_leap, time_zone)
    if month_start is None:
        return INVALID_SOLAR_DATE
    return SolarDate(*jd_to_date(month_start + lunar_day - 1))


def get_leap_month(lunar_year: int, time_zone: float = TIME_ZONE) -> int:
    """Number of the leap month in a lunar year, 0 when the year has none."""
    # Months 1-10 sit between the month-11 boundaries of the previous and current
    # solar year; months 11 and 12 sit after the current year's boundary.
    for start_year, months in ((lunar_year - 1, range(1, 11)), (lunar_year, (11, 12))):
        a11, b11 = _month_11_bounds(11, start_year, time_zone)
        if b11 - a11 <= 365:
            continue
        leap_month = get_leap_month_offset(a11, time_zone) - 2
        if leap_month < 0:
            leap_month += 12
        if leap_month in months:
            return leap_month
    return 0


def lunar_month_length(
    lunar_month: int,
    lunar_year: int,
    lunar_leap: bool = False,
    time_zone: float = TIME_ZONE,
) -> int:
    """Number of days (29 or 30) in a lunar month, 0 if the month does not exist."""
    month_start = _month_start(lunar_month, lunar_year, lunar_leap, time_zone)
    if month_start is None:
        return 0
    k = math.floor(0.5 + (month_start - NEW_MOON_EPOCH) / SYNODIC_MONTH)
    next_start = get_new_moon_day(k + 1, time_zone)
    if next_start <= month_start:
        next_start = get_new_moon_day(k + 2, time_zone)
    return next_start - month_start
