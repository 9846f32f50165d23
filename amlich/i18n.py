"""Simple two-language (vi/en) labels for presenting almanac results."""

_STRINGS: dict[str, dict[str, str]] = {
    "weekday_0": {"vi": "Chủ Nhật", "en": "Sunday"},
    "weekday_1": {"vi": "Thứ Hai", "en": "Monday"},
    "weekday_2": {"vi": "Thứ Ba", "en": "Tuesday"},
    "weekday_3": {"vi": "Thứ Tư", "en": "Wednesday"},
    "weekday_4": {"vi": "Thứ Năm", "en": "Thursday"},
    "weekday_5": {"vi": "Thứ Sáu", "en": "Friday"},
    "weekday_6": {"vi": "Thứ Bảy", "en": "Saturday"},
    "quality_cat": {"vi": "Tốt", "en": "Auspicious"},
    "quality_hung": {"vi": "Xấu", "en": "Inauspicious"},
    "quality_binh": {"vi": "Trung bình", "en": "Neutral"},
    "deity_hoang_dao": {"vi": "Ngày Hoàng Đạo", "en": "Auspicious day (Hoàng Đạo)"},
    "deity_hac_dao": {"vi": "Ngày Hắc Đạo", "en": "Inauspicious day (Hắc Đạo)"},
    "severity_hard": {"vi": "Kỵ nặng", "en": "Strong taboo"},
    "severity_soft": {"vi": "Kỵ nhẹ", "en": "Mild taboo"},
    "leap": {"vi": "nhuận", "en": "leap"},
    "full_lunar_date": {
        "vi": "{weekday} ngày {day} tháng {month} năm {year}",
        "en": "{weekday}, day {day} of month {month}, year {year}",
    },
    "full_canchi_date": {
        "vi": "{weekday} ngày {day} tháng {month} năm {year}",
        "en": "{weekday}, {day} day, {month} month, {year} year",
    },
    "good_hours_summary": {
        "vi": "Giờ Hoàng Đạo: {hours}",
        "en": "Auspicious hours: {hours}",
    },
}


def t(key: str, lang: str) -> str:
    """Return the label for key in lang, falling back to Vietnamese, then the key."""
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("vi") or key


def weekday_label(day_of_week: int, lang: str) -> str:
    return t(f"weekday_{day_of_week % 7}", lang)


def quality_label(quality: str, lang: str) -> str:
    return t(f"quality_{quality}", lang)
