"""Date conversion service: Solar (Dương lịch) <-> Lunar (Âm lịch) with the day's almanac."""

import datetime
import logging
import re
from typing import Any

import orjson

from amlich import config
from amlich.canchi import lunar_month_name
from amlich.day_info import get_day_info_with_timezone
from amlich.i18n import quality_label, t, weekday_label
from amlich.julian import jd_from_date
from amlich.lunar import lunar_to_solar
from amlich.models import DayInfo
from amlich.ruleset import get_ruleset_data

log = logging.getLogger(__name__)

CONVERSION_TYPES = ("s2l", "l2s")
DATE_PATTERN = re.compile(r"^(-?\d{1,4})-(\d{2})-(\d{2})$")
LOCALES = {"vi": "vi-VN", "en": "en-US"}


def validate_date(date: str) -> bool:
    """Validate if a string is a real solar date in strict YYYY-MM-DD format."""
    if not DATE_PATTERN.match(date):
        return False
    try:
        datetime.date.fromisoformat(date)
        return True
    except ValueError:
        return False


def split_date(date: str) -> tuple[int, int, int]:
    """Split a YYYY-MM-DD string into day, month and year without calendar checks."""
    match = DATE_PATTERN.match(date)
    if not match:
        raise ValueError("Invalid date format: YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    return day, month, year


def join_date(day: int, month: int, year: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def get_number_of_days(day: int, month: int, year: int) -> int:
    """Day difference between today and a solar date."""
    return jd_from_date(day, month, year) - datetime.date.today().toordinal() - 1721425


def to_plain(value: Any) -> Any:
    """Convert dataclass records into JSON-ready dicts and lists."""
    return orjson.loads(orjson.dumps(value))


def to_json(result: dict[str, Any]) -> bytes:
    return orjson.dumps(result, option=orjson.OPT_INDENT_2)


def _build_response(mode: str, info: DayInfo, lang: str, time_zone: float) -> dict[str, Any]:
    data = get_ruleset_data(info.ruleset_id)
    weekday = weekday_label(info.solar.day_of_week, lang)
    lunar = info.lunar
    canchi = info.canchi
    fortune = info.fortune
    days = get_number_of_days(info.solar.day, info.solar.month, info.solar.year)
    day_star = fortune.stars.day_star
    mansion = data.nhi_thap_bat_tu[day_star.index]

    return {
        "mode": mode,
        "solar_date": info.solar.date_string,
        "lunar_date": join_date(lunar.day, lunar.month, lunar.year),
        "weekday": weekday,
        "difference_days": abs(days),
        "difference_direction": "days_remaining" if days >= 0 else "days_elapsed",
        "relative_to": datetime.date.today().isoformat(),
        "lunar_date_meta": {
            "leap_month": lunar.is_leap_month,
            "month_name": lunar_month_name(lunar.month, lunar.is_leap_month),
            "date_string": lunar.date_string,
        },
        "full_lunar_date": t("full_lunar_date", lang).format(
            weekday=weekday,
            day=lunar.day,
            month=lunar_month_name(lunar.month, lunar.is_leap_month),
            year=canchi.year.full,
        ),
        "can_chi": {
            "day": canchi.day.full,
            "month": canchi.month.full,
            "year": canchi.year.full,
            "con_giap": canchi.year.con_giap,
            "full_can_chi_date": t("full_canchi_date", lang).format(
                weekday=weekday,
                day=canchi.day.full,
                month=canchi.month.full,
                year=canchi.year.full,
            ),
        },
        "solar_term": to_plain(info.solar_term),
        "auspicious_hours": {
            "summary": t("good_hours_summary", lang).format(hours=info.hours.summary),
            "hours": [
                {"name": h.hour_chi, "time_range": h.time_range, "star": h.star}
                for h in info.hours.good_hours
            ],
        },
        "auspicious_day": {
            "day_type": fortune.day_deity.classification,
            "name": t(f"deity_{fortune.day_deity.classification}", lang),
            "deity": fortune.day_deity.name,
        },
        "twelve_day_officer": {
            **to_plain(fortune.truc),
            "quality_label": quality_label(fortune.truc.quality, lang),
        },
        "twenty_eight_mansion": {
            **to_plain(day_star),
            "meaning": mansion.meaning,
            "quality_label": quality_label(day_star.quality, lang),
        },
        "taboos": [
            {**to_plain(taboo), "severity_label": t(f"severity_{taboo.severity}", lang)}
            for taboo in fortune.taboos
        ],
        "day_fortune": to_plain(fortune),
        "ruleset": {"id": info.ruleset_id, "version": info.ruleset_version},
        "locale": LOCALES[lang],
        "time_zone": time_zone,
    }


def date_conversion_tool(conversion_type: str, date: str, **kwargs) -> dict[str, Any]:
    """Convert between Solar (Dương lịch) and Lunar (Âm lịch) dates.

    conversion_type is s2l (Solar->Lunar) or l2s (Lunar->Solar) and date is YYYY-MM-DD.
    Optional keyword arguments: leap_month (l2s only), lang (vi|en), time_zone, ruleset.
    Failures are returned as {"error": ...}, never raised.
    """
    if not all([conversion_type, date]):
        return {"error": "Missing one or more required arguments: conversion_type, date"}

    if not isinstance(date, str):
        return {"error": "Invalid date format: YYYY-MM-DD"}

    if conversion_type not in CONVERSION_TYPES:
        return {"error": "Wrong Conversion Type: conversion_type must be s2l or l2s"}

    lang = kwargs.get("lang") or config.LANG
    if lang not in LOCALES:
        return {"error": "Wrong language: lang must be vi or en"}

    try:
        time_zone = float(kwargs.get("time_zone", config.TIME_ZONE))
    except (TypeError, ValueError):
        return {"error": "Invalid time_zone: must be a number of hours"}
    if not -12.0 <= time_zone <= 14.0:
        return {"error": "Invalid time_zone: must be between -12 and 14"}

    ruleset_id = kwargs.get("ruleset") or config.RULESET_ID

    if conversion_type == "s2l":
        if not validate_date(date):
            return {"error": "Invalid date format: YYYY-MM-DD"}
        day, month, year = split_date(date)
        try:
            info = get_day_info_with_timezone(day, month, year, time_zone, ruleset_id)
            return _build_response("s2l", info, lang, time_zone)
        except Exception as error:
            log.error(f"{__name__}: Error converting Solar date {date} to Lunar date: {error}")
            return {"error": f"Error converting Solar date {date} to Lunar date: {error}"}

    try:
        day, month, year = split_date(date)
    except ValueError as error:
        return {"error": str(error)}
    if not 1 <= month <= 12:
        return {"error": "Invalid date: Lunar month must be between 1 and 12"}
    if not 1 <= day <= 30:
        return {"error": "Invalid date: Lunar day must be between 1 and 30"}

    leap_month = bool(kwargs.get("leap_month", False))
    try:
        solar = lunar_to_solar(day, month, year, leap_month, time_zone)
        if not solar.is_valid():
            return {
                "error": f"Invalid lunar date: Day {day} Month {month} (Leap: {leap_month}) Year {year} does not exist."
            }
        info = get_day_info_with_timezone(*solar.as_tuple(), time_zone, ruleset_id)
        if (info.lunar.day, info.lunar.month) != (day, month):
            return {
                "error": f"Invalid lunar date: Day {day} Month {month} (Leap: {leap_month}) Year {year} does not exist."
            }
        return _build_response("l2s", info, lang, time_zone)
    except Exception as error:
        log.error(f"{__name__}: Error converting Lunar date {date} {kwargs} to Solar date: {error}")
        return {"error": f"Error converting Lunar date {date} {kwargs} to Solar date: {error}"}
