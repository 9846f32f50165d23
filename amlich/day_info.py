"""Everything the calendar knows about one solar date, in a single DayInfo."""

from amlich import config
from amlich.almanac import calculate_day_fortune
from amlich.canchi import LEAP_SUFFIX, THU, get_day_canchi, get_month_canchi, get_year_canchi
from amlich.hours import get_auspicious_hours
from amlich.julian import day_of_week, jd_from_date
from amlich.lunar import solar_to_lunar
from amlich.models import CanChiInfo, DayInfo, LunarInfo, SolarInfo
from amlich.ruleset import get_ruleset, get_ruleset_data
from amlich.solar_terms import get_solar_term


def get_day_info_with_timezone(
    dd: int, mm: int, yy: int, time_zone: float, ruleset_id: str | None = None
) -> DayInfo:
    """Build the full DayInfo for a solar date at a UTC offset (hours)."""
    descriptor = get_ruleset(ruleset_id or config.RULESET_ID)
    data = get_ruleset_data(descriptor.id)

    jd = jd_from_date(dd, mm, yy)
    weekday = day_of_week(jd)
    solar = SolarInfo(
        day=dd,
        month=mm,
        year=yy,
        day_of_week=weekday,
        day_of_week_name=THU[weekday],
        date_string=f"{yy:04d}-{mm:02d}-{dd:02d}",
    )

    lunar_date = solar_to_lunar(dd, mm, yy, time_zone)
    lunar = LunarInfo(
        day=lunar_date.day,
        month=lunar_date.month,
        year=lunar_date.year,
        is_leap_month=lunar_date.is_leap,
        date_string=f"{lunar_date.day}/{lunar_date.month}/{lunar_date.year}"
        + (LEAP_SUFFIX if lunar_date.is_leap else ""),
    )

    day_canchi = get_day_canchi(jd)
    month_canchi = get_month_canchi(lunar_date.month, lunar_date.year, lunar_date.is_leap)
    year_canchi = get_year_canchi(lunar_date.year)
    canchi = CanChiInfo(
        day=day_canchi,
        month=month_canchi,
        year=year_canchi,
        full=f"Ngày {day_canchi.full}, tháng {month_canchi.full}, năm {year_canchi.full}",
    )

    solar_term = get_solar_term(jd, time_zone)
    fortune = calculate_day_fortune(
        jd,
        day_canchi,
        lunar_date.day,
        lunar_date.month,
        year_canchi.can,
        solar_term.name,
        data,
    )

    return DayInfo(
        solar=solar,
        lunar=lunar,
        jd=jd,
        canchi=canchi,
        solar_term=solar_term,
        hours=get_auspicious_hours(day_canchi.chi_index),
        fortune=fortune,
        ruleset_id=descriptor.id,
        ruleset_version=descriptor.version,
    )


def get_day_info(dd: int, mm: int, yy: int, ruleset_id: str | None = None) -> DayInfo:
    """DayInfo at the configured default time zone (UTC+7 unless overridden)."""
    return get_day_info_with_timezone(dd, mm, yy, config.TIME_ZONE, ruleset_id)
