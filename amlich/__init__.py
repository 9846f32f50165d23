from amlich.day_info import get_day_info, get_day_info_with_timezone
from amlich.julian import jd_from_date, jd_to_date
from amlich.lunar import lunar_to_solar, solar_to_lunar

__all__ = [
    "get_day_info",
    "get_day_info_with_timezone",
    "jd_from_date",
    "jd_to_date",
    "lunar_to_solar",
    "solar_to_lunar",
]
