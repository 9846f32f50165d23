"""
Sun position and new moon series.

(c) 2006 Ho Ngoc Duc.
Astronomical algorithms
from the book "Astronomical Algorithms" by Jean Meeus, 1998
"""

import math

DR = math.pi / 180.0
NEW_MOON_EPOCH = 2415021.076998695  # First new moon of 1900 (JDE)
SYNODIC_MONTH = 29.530588853


def new_moon(k: int) -> float:
    """Compute the Julian date of the k-th new moon since 1900-01-01."""
    t = k / 1236.85
    t2 = t * t
    t3 = t2 * t
    jd1 = 2415020.75933 + 29.53058868 * k + 0.0001178 * t2 - 0.000000155 * t3
    jd1 = jd1 + 0.00033 * math.sin((166.56 + 132.87 * t - 0.009173 * t2) * DR)
    m = 359.2242 + 29.10535608 * k - 0.0000333 * t2 - 0.00000347 * t3
    mpr = 306.0253 + 385.81691806 * k + 0.0107306 * t2 + 0.00001236 * t3
    f = 21.2964 + 390.67050646 * k - 0.0016528 * t2 - 0.00000239 * t3
    c1 = (0.1734 - 0.000393 * t) * math.sin(m * DR) + 0.0021 * math.sin(2 * DR * m)
    c1 = c1 - 0.4068 * math.sin(mpr * DR) + 0.0161 * math.sin(DR * 2 * mpr)
    c1 = c1 - 0.0004 * math.sin(DR * 3 * mpr)
    c1 = c1 + 0.0104 * math.sin(DR * 2 * f) - 0.0051 * math.sin(DR * (m + mpr))
    c1 = c1 - 0.0074 * math.sin(DR * (m - mpr)) + 0.0004 * math.sin(DR * (2 * f + m))
    c1 = (
        c1 - 0.0004 * math.sin(DR * (2 * f - m)) - 0.0006 * math.sin(DR * (2 * f + mpr))
    )
    c1 = (
        c1
        + 0.0010 * math.sin(DR * (2 * f - mpr))
        + 0.0005 * math.sin(DR * (2 * mpr + m))
    )
    if t < -11:
        deltat = (
            0.001
            + 0.000839 * t
            + 0.0002261 * t2
            - 0.00000845 * t3
            - 0.000000081 * t * t3
        )
    else:
        deltat = -0.000278 + 0.000265 * t + 0.000262 * t2
    return jd1 + c1 - deltat


def get_new_moon_day(k: int, time_zone: float) -> int:
    """Compute the local Julian day of the k-th new moon."""
    return math.floor(new_moon(k) + 0.5 + time_zone / 24.0)


def sun_longitude(jdn: float) -> float:
    """Compute the true longitude of the sun, in radians within [0, 2*pi)."""
    t = (jdn - 2451545.0) / 36525.0
    t2 = t * t
    m = 357.52910 + 35999.05030 * t - 0.0001559 * t2 - 0.00000048 * t * t2
    l0 = 280.46645 + 36000.76983 * t + 0.0003032 * t2
    dl = (1.914600 - 0.004817 * t - 0.000014 * t2) * math.sin(DR * m)
    dl += (0.019993 - 0.000101 * t) * math.sin(DR * 2 * m) + 0.000290 * math.sin(
        DR * 3 * m
    )
    longitude = (l0 + dl) * DR
    return longitude - math.pi * 2 * math.floor(longitude / (math.pi * 2))


def local_midnight(day_number: int, time_zone: float) -> float:
    """Fractional Julian date of local midnight starting the given day."""
    return day_number - 0.5 - time_zone / 24.0


def get_sun_longitude(day_number: int, time_zone: float) -> int:
    """Sun longitude sector (0-11, 30 degrees each) at local midnight of a day."""
    return math.floor(sun_longitude(local_midnight(day_number, time_zone)) / math.pi * 6)
