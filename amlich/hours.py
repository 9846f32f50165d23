"""Giờ Hoàng Đạo: the six auspicious two-hour periods of a day."""

from amlich.canchi import CHI
from amlich.models import AuspiciousHours, HourInfo

# (star, is_good, description), in cycle order starting from Thanh Long
TWELVE_STARS = [
    ("Thanh Long", True, "Hoàng Đạo - Rồng xanh, mọi việc hanh thông"),
    ("Minh Đường", True, "Hoàng Đạo - Minh đường sáng sủa, gặp quý nhân"),
    ("Thiên Hình", False, "Hắc Đạo - Hình phạt, dễ vướng kiện tụng"),
    ("Chu Tước", False, "Hắc Đạo - Chim lửa, dễ sinh thị phi"),
    ("Kim Quỹ", True, "Hoàng Đạo - Hòm vàng, lợi cầu tài"),
    ("Bảo Quang", True, "Hoàng Đạo - Kim đường bảo quang, việc lớn dễ thành"),
    ("Bạch Hổ", False, "Hắc Đạo - Hổ trắng, kỵ tang sự và đi xa"),
    ("Ngọc Đường", True, "Hoàng Đạo - Ngọc đường, lợi văn thư cầu danh"),
    ("Thiên Lao", False, "Hắc Đạo - Ngục trời, dễ bị cản trở"),
    ("Nguyên Vũ", False, "Hắc Đạo - Huyền vũ, đề phòng mất mát"),
    ("Tư Mệnh", True, "Hoàng Đạo - Tư mệnh, lợi việc ban ngày"),
    ("Câu Trận", False, "Hắc Đạo - Câu trận, dễ vướng tranh chấp"),
]

# Hour branch index at which Thanh Long falls, indexed by the day's chi
DAY_TO_START_HOUR = [8, 10, 0, 2, 4, 6, 8, 10, 0, 2, 4, 6]

TIME_RANGES = [f"{(i * 2 + 23) % 24:02d}:00-{(i * 2 + 1) % 24:02d}:00" for i in range(12)]


def hour_chi_for_clock(hour: int) -> int:
    """Map a clock hour (0-23) to its hour branch index; 23:00 already belongs to Tý."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0..23, got {hour}")
    return ((hour + 1) // 2) % 12


def is_hour_auspicious(day_chi_index: int, hour_chi_index: int) -> HourInfo:
    """Star and classification of one two-hour period of a day."""
    day_chi_index %= 12
    hour_chi_index %= 12
    start = DAY_TO_START_HOUR[day_chi_index]
    star, is_good, description = TWELVE_STARS[(hour_chi_index + 12 - start) % 12]
    return HourInfo(
        hour_index=hour_chi_index,
        hour_chi=CHI[hour_chi_index],
        time_range=TIME_RANGES[hour_chi_index],
        star=star,
        star_description=description,
        is_good=is_good,
    )


def get_auspicious_hours(day_chi_index: int) -> AuspiciousHours:
    """Calculate the twelve hours of a day and pick out the auspicious ones."""
    day_chi_index %= 12
    hours = tuple(is_hour_auspicious(day_chi_index, h) for h in range(12))
    good_hours = tuple(hour for hour in hours if hour.is_good)
    summary = ", ".join(f"{hour.hour_chi} ({hour.time_range})" for hour in good_hours)
    return AuspiciousHours(
        day_chi_index=day_chi_index,
        day_chi=CHI[day_chi_index],
        hours=hours,
        good_hours=good_hours,
        summary=summary,
    )
