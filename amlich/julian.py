"""Julian day number conversions."""

GREGORIAN_START_JD = 2299161  # 15 Oct 1582


def jd_from_date(dd: int, mm: int, yy: int) -> int:
    """Compute the Julian day number for a given Gregorian date."""
    a = (14 - mm) // 12
    y = yy + 4800 - a
    m = mm + 12 * a - 3
    jd = dd + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045
    if jd < GREGORIAN_START_JD:
        jd = dd + (153 * m + 2) // 5 + 365 * y + y // 4 - 32083
    return jd


def jd_to_date(jd: int) -> tuple[int, int, int]:
    """Convert a Julian day number to a date (day, month, year)."""
    if jd > GREGORIAN_START_JD - 1:
        a = jd + 32044
        b = (4 * a + 3) // 146097
        c = a - (b * 146097) // 4
    else:
        b = 0
        c = jd + 32082

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = b * 100 + d - 4800 + m // 10
    return day, month, year


def day_of_week(jd: int) -> int:
    """Weekday of a Julian day number, 0=Sunday .. 6=Saturday."""
    return (jd + 1) % 7
