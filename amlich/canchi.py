"""Can Chi (heavenly stems and earthly branches) for days, months and years."""

from amlich.models import CanChi

CAN = ["Giáp", "Ất", "Bính", "Đinh", "Mậu", "Kỷ", "Canh", "Tân", "Nhâm", "Quý"]

CHI = [
    "Tý",
    "Sửu",
    "Dần",
    "Mão",
    "Thìn",
    "Tỵ",
    "Ngọ",
    "Mùi",
    "Thân",
    "Dậu",
    "Tuất",
    "Hợi",
]

CON_GIAP = [
    "Tý (Chuột)",
    "Sửu (Trâu)",
    "Dần (Hổ)",
    "Mão (Mèo)",
    "Thìn (Rồng)",
    "Tỵ (Rắn)",
    "Ngọ (Ngựa)",
    "Mùi (Dê)",
    "Thân (Khỉ)",
    "Dậu (Gà)",
    "Tuất (Chó)",
    "Hợi (Lợn)",
]

NGU_HANH_CAN = ["Mộc", "Mộc", "Hỏa", "Hỏa", "Thổ", "Thổ", "Kim", "Kim", "Thủy", "Thủy"]

NGU_HANH_CHI = [
    "Thủy",
    "Thổ",
    "Mộc",
    "Mộc",
    "Thổ",
    "Hỏa",
    "Hỏa",
    "Thổ",
    "Kim",
    "Kim",
    "Thổ",
    "Thủy",
]

# Sunday first, matching day_of_week()
THU = ["Chủ Nhật", "Thứ Hai", "Thứ Ba", "Thứ Tư", "Thứ Năm", "Thứ Sáu", "Thứ Bảy"]

MONTHS = [
    "Giêng",
    "Hai",
    "Ba",
    "Tư",
    "Năm",
    "Sáu",
    "Bảy",
    "Tám",
    "Chín",
    "Mười",
    "Mười Một",
    "Chạp",
]

# Can of lunar month 1, indexed by the year's can (Giáp/Kỷ -> Bính Dần, ...)
FIRST_MONTH_CAN = [2, 4, 6, 8, 0, 2, 4, 6, 8, 0]

LEAP_SUFFIX = " (nhuận)"


def make_canchi(can_index: int, chi_index: int, suffix: str = "") -> CanChi:
    """Build a CanChi record from stem and branch indices (wrapped modulo 10/12)."""
    can_index %= 10
    chi_index %= 12
    can = CAN[can_index]
    chi = CHI[chi_index]
    return CanChi(
        can_index=can_index,
        chi_index=chi_index,
        can=can,
        chi=chi,
        full=f"{can} {chi}{suffix}",
        con_giap=CON_GIAP[chi_index],
        can_element=NGU_HANH_CAN[can_index],
        chi_element=NGU_HANH_CHI[chi_index],
        sexagenary_index=(can_index * 6 + chi_index // 2) % 60,
    )


def get_day_canchi(jd: int) -> CanChi:
    """Can Chi of a day from its Julian day number."""
    return make_canchi((jd + 9) % 10, (jd + 1) % 12)


def get_month_canchi(lunar_month: int, lunar_year: int, is_leap: bool = False) -> CanChi:
    """Can Chi of a lunar month. Month 1 is always a Dần month."""
    year_can = (lunar_year + 6) % 10
    can_index = (FIRST_MONTH_CAN[year_can] + lunar_month - 1) % 10
    return make_canchi(can_index, (lunar_month + 1) % 12, LEAP_SUFFIX if is_leap else "")


def get_year_canchi(lunar_year: int) -> CanChi:
    """Can Chi of a lunar year (2024 -> Giáp Thìn)."""
    return make_canchi((lunar_year + 6) % 10, (lunar_year + 8) % 12)


def get_can_index(can: str) -> int:
    """Index (0-9) of a heavenly stem name."""
    return CAN.index(can)


def get_chi_index(chi: str) -> int:
    """Index (0-11) of an earthly branch name."""
    return CHI.index(chi)


def lunar_month_name(lunar_month: int, is_leap: bool = False) -> str:
    """Traditional month name ("Giêng", "Chạp"), with the leap marker."""
    name = MONTHS[(lunar_month - 1) % 12]
    return f"{name} nhuận" if is_leap else name
