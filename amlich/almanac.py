"""Almanac calculators: the day's element, conflicts, directions, trực, deity,
taboos and stars, combined into a DayFortune."""

from amlich.canchi import CHI, CON_GIAP
from amlich.errors import RuleSetError
from amlich.models import (
    CanChi,
    DayConflict,
    DayDeity,
    DayElement,
    DayFortune,
    DayStar,
    DayStars,
    DayTaboo,
    RuleEvidence,
    StarRuleEvidence,
    TravelDirection,
    TrucInfo,
    XungHop,
)
from amlich.ruleset import AlmanacData, SourceMeta, TabooDayRule, TabooMonthChiRule, baseline_data
from amlich.stars import StarCategory, category_meta, get_day_star_rules, resolve_rules

# Reference day for the 28-mansion cycle: JD 2451545 (1 Jan 2000) is mansion 16
MANSION_REF_JD = 2451545
MANSION_REF_INDEX = 16

TRUC_TABLE = [
    {
        "name": "Kiến",
        "quality": "cat",
        "meaning": "Khởi đầu, kiến lập; hợp việc vừa phải hơn là khai mở lớn.",
        "good_for": ("Xuất hành", "Thăm hỏi", "Gặp gỡ", "Ký kết nhỏ", "Cầu tài vừa"),
        "avoid": ("Động thổ", "Xây cất lớn", "An táng", "Mở kho quy mô lớn"),
    },
    {
        "name": "Trừ",
        "quality": "cat",
        "meaning": "Trừ bỏ, tẩy uế; thuận loại bỏ điều xấu và làm sạch.",
        "good_for": ("Giải hạn", "Dọn dẹp", "Tẩy uế", "Chữa bệnh", "Cắt tóc", "Xuất hành"),
        "avoid": ("Khai trương lớn", "Khởi công trọng đại", "Chi xuất tiền lớn"),
    },
    {
        "name": "Mãn",
        "quality": "hung",
        "meaning": "Viên mãn, đầy đủ; hợp thu nạp và tổng kết hơn là khởi tạo.",
        "good_for": ("Tế lễ", "Nhập kho", "Tổng kết", "Nhận hàng"),
        "avoid": ("Cưới hỏi", "Khởi công", "Khai trương"),
    },
    {
        "name": "Bình",
        "quality": "binh",
        "meaning": "Cân bằng, yên ổn; hợp việc thường nhật, kém hợp việc lớn.",
        "good_for": ("Giao dịch nhỏ", "Gặp gỡ", "Học hành", "Khám định kỳ"),
        "avoid": ("Khởi sự lớn", "Động thổ", "Công trình nặng"),
    },
    {
        "name": "Định",
        "quality": "cat",
        "meaning": "Ổn định, an định; tốt để chốt việc và an vị.",
        "good_for": ("Ký kết", "Chốt kế hoạch", "An vị", "Nhập trạch", "Cưới hỏi"),
        "avoid": ("Tranh tụng", "Thưa kiện", "Xuất hành xa"),
    },
    {
        "name": "Chấp",
        "quality": "binh",
        "meaning": "Giữ gìn, duy trì; không hợp khai mở lớn.",
        "good_for": ("Tu sửa", "Xây bền vững", "Trồng cây lâu năm", "Tuyển dụng"),
        "avoid": ("Dời nhà", "Mở cửa buôn bán", "Xuất nhập kho lớn", "Chi tiền lớn"),
    },
    {
        "name": "Phá",
        "quality": "hung",
        "meaning": "Phá bỏ, kết liễu; hợp dỡ bỏ cái cũ.",
        "good_for": ("Phá dỡ", "Thanh lý", "Kết thúc việc cũ", "Trị bệnh"),
        "avoid": ("Khởi công", "Khai trương", "Cưới hỏi", "Nhập trạch", "Ký hợp đồng mới"),
    },
    {
        "name": "Nguy",
        "quality": "hung",
        "meaning": "Nguy nan, cần cẩn trọng; hợp việc đòi hỏi tỉ mỉ.",
        "good_for": ("Lễ bái", "Cầu an", "Đo đạc", "Thi công chi tiết"),
        "avoid": ("Khai trương", "Động thổ", "Cưới hỏi", "Đi xa mạo hiểm"),
    },
    {
        "name": "Thành",
        "quality": "cat",
        "meaning": "Thành tựu, hoàn tất; rất thuận việc lớn và việc mừng.",
        "good_for": ("Khánh thành", "Ký kết", "Khai trương", "Cưới hỏi", "Nhập trạch", "Nhậm chức"),
        "avoid": ("Kiện tụng", "Phá dỡ"),
    },
    {
        "name": "Thu",
        "quality": "hung",
        "meaning": "Thu nạp, thu hoạch; hợp gom góp cất giữ hơn là mở rộng.",
        "good_for": ("Thu hoạch", "Thu nợ", "Nhập kho", "Cất giữ"),
        "avoid": ("Khai trương", "Khởi công", "Mở rộng mới"),
    },
    {
        "name": "Khai",
        "quality": "cat",
        "meaning": "Khai mở, mở mang; đại cát cho các việc mở đầu.",
        "good_for": ("Khai trương", "Khởi công nhẹ", "Xuất hành", "Ứng cử", "Nhận chức"),
        "avoid": ("An táng", "Lợp mái", "Đào giếng"),
    },
    {
        "name": "Bế",
        "quality": "hung",
        "meaning": "Đóng lại, kết thúc; kỵ khởi sự.",
        "good_for": ("Kết thúc", "Đóng kho", "Lấp hố", "Vá sửa chỗ hư"),
        "avoid": ("Mở hàng", "Khởi công", "Cưới hỏi", "Xuất hành", "Nhậm chức"),
    },
]

TRUC_NAMES = [entry["name"] for entry in TRUC_TABLE]


def _evidence(meta: SourceMeta, profile: str) -> RuleEvidence:
    return RuleEvidence(source_id=meta.source_id, method=meta.method, profile=profile)


def get_day_element(day_canchi: CanChi, data: AlmanacData) -> DayElement:
    """Na âm element of the day's can chi pair."""
    entry = data.sexagenary_na_am.get(day_canchi.full)
    if entry is None:
        raise RuleSetError(f"na am entry missing for {day_canchi.full}")
    return DayElement(
        na_am=entry.na_am,
        element=entry.element,
        can_element=day_canchi.can_element,
        chi_element=day_canchi.chi_element,
        evidence=_evidence(data.na_am_meta, data.profile),
    )


def get_conflict(day_canchi: CanChi, data: AlmanacData) -> DayConflict:
    """Opposing branch, conflicting ages and the sát hướng of the day."""
    rule = data.conflict_by_chi.get(day_canchi.chi)
    if rule is None:
        raise RuleSetError(f"conflict rule missing for chi {day_canchi.chi}")
    opposing_con_giap = CON_GIAP[CHI.index(rule.opposing_chi)]
    return DayConflict(
        opposing_chi=rule.opposing_chi,
        opposing_con_giap=opposing_con_giap,
        tuoi_xung=(f"{day_canchi.can} {rule.opposing_chi}", opposing_con_giap),
        sat_huong=rule.sat_huong,
        evidence=_evidence(data.conflict_meta, data.profile),
    )


def get_than_huong(day_can: str, data: AlmanacData) -> TravelDirection:
    """Thần hướng: directions of travel, wealth god and joy god for the day's can."""
    rule = data.travel_by_can.get(day_can)
    if rule is None:
        raise RuleSetError(f"travel rule missing for can {day_can}")
    return TravelDirection(
        xuat_hanh_huong=rule.xuat_hanh_huong,
        tai_than=rule.tai_than,
        hy_than=rule.hy_than,
        evidence=_evidence(data.travel_meta, data.profile),
    )


def get_truc(day_chi_index: int, lunar_month: int, evidence: RuleEvidence | None = None) -> TrucInfo:
    """Thập nhị trực of a day. Kiến falls on the day whose chi equals the month's chi."""
    month_chi_index = (lunar_month + 1) % 12
    index = (day_chi_index % 12 + 12 - month_chi_index) % 12
    entry = TRUC_TABLE[index]
    return TrucInfo(
        index=index,
        name=entry["name"],
        quality=entry["quality"],
        meaning=entry["meaning"],
        good_for=entry["good_for"],
        avoid=entry["avoid"],
        evidence=evidence,
    )


def get_xung_hop(day_chi_index: int) -> XungHop:
    """Lục xung, tam hợp and tứ hành xung of a branch, in branch order."""
    idx = day_chi_index % 12
    return XungHop(
        luc_xung=CHI[(idx + 6) % 12],
        tam_hop=tuple(CHI[i] for i in range(12) if i % 4 == idx % 4),
        tu_hanh_xung=tuple(CHI[i] for i in range(12) if i % 3 == idx % 3),
    )


def lunar_month_branch(lunar_month: int) -> str:
    """Branch of a lunar month; months outside 1..12 wrap around."""
    normalized = (lunar_month - 1) % 12 + 1
    return CHI[(normalized + 1) % 12]


def resolve_day_deity(lunar_month: int, day_chi: str, data: AlmanacData) -> DayDeity:
    """Hoàng đạo / hắc đạo deity governing the day."""
    rule_set = data.day_deity_rule_set
    month_branch = lunar_month_branch(lunar_month)
    start = rule_set.month_group_start_by_chi.get(month_branch)
    if start is None:
        raise RuleSetError(f"day deity month group missing for {month_branch}")
    entry = rule_set.cycle[(start + CHI.index(day_chi)) % 12]
    return DayDeity(
        name=entry.name,
        classification=entry.classification,
        evidence=_evidence(data.day_deity_meta, data.profile),
    )


def _day_taboo(
    rule: TabooDayRule | TabooMonthChiRule, reason: str, data: AlmanacData
) -> DayTaboo:
    return DayTaboo(
        rule_id=rule.rule_id,
        name=rule.name,
        severity=rule.severity,
        reason=reason,
        evidence=_evidence(data.taboo_rule_meta[rule.rule_id], data.profile),
    )


def resolve_day_taboos(
    lunar_day: int, lunar_month: int, day_chi: str, data: AlmanacData
) -> tuple[DayTaboo, ...]:
    """Taboo hits in fixed order: Tam Nương, Nguyệt Kỵ, Sát Chủ, Thọ Tử."""
    rules = data.taboo_rules
    hits = []
    for rule in (rules.tam_nuong, rules.nguyet_ky):
        if lunar_day in rule.lunar_days:
            hits.append(
                _day_taboo(rule, f"Ngày âm lịch {lunar_day} thuộc {rule.name}", data)
            )
    for rule in (rules.sat_chu, rules.tho_tu):
        if rule.by_lunar_month.get(lunar_month) == day_chi:
            reason = (
                f"Chi ngày {day_chi} trùng chi {rule.name} của tháng âm lịch {lunar_month}"
            )
            hits.append(_day_taboo(rule, reason, data))
    return tuple(hits)


def get_day_star(jd: int, data: AlmanacData) -> DayStar:
    """Nhị thập bát tú star of the day, a plain 28-day cycle over the Julian day."""
    index = (MANSION_REF_INDEX + jd - MANSION_REF_JD) % 28
    star = data.nhi_thap_bat_tu[index]
    return DayStar(
        index=index,
        name=star.name,
        quality=star.quality,
        evidence=_evidence(data.star_meta, data.profile),
    )


def get_day_stars(
    jd: int,
    day_canchi: CanChi,
    lunar_month: int,
    year_can: str,
    tiet_khi_name: str,
    data: AlmanacData,
) -> DayStars:
    rules = get_day_star_rules(
        data,
        day_canchi.chi,
        day_canchi=day_canchi.full,
        year_can=year_can,
        lunar_month=lunar_month,
        tiet_khi_name=tiet_khi_name,
    )
    cat_tinh, sat_tinh = resolve_rules(rules)
    matched = tuple(
        StarRuleEvidence(
            name=rule.name,
            quality=rule.quality.value,
            category=rule.category.token,
            source_id=rule.source_id,
            method=category_meta(rule.category, data).method,
            profile=data.profile,
        )
        for rule in rules
    )
    return DayStars(
        cat_tinh=cat_tinh,
        sat_tinh=sat_tinh,
        day_star=get_day_star(jd, data),
        matched_rules=matched,
        evidence=_evidence(category_meta(StarCategory.FIXED_BY_CHI, data), data.profile),
    )


def calculate_day_fortune(
    jd: int,
    day_canchi: CanChi,
    lunar_day: int,
    lunar_month: int,
    year_can: str,
    tiet_khi_name: str,
    data: AlmanacData | None = None,
) -> DayFortune:
    """Run every almanac calculator for one day against a rule set.

    The baseline rule set is used when no data is passed.
    """
    if data is None:
        data = baseline_data()
    profile = data.profile
    return DayFortune(
        profile=profile,
        day_element=get_day_element(day_canchi, data),
        conflict=get_conflict(day_canchi, data),
        travel=get_than_huong(day_canchi.can, data),
        stars=get_day_stars(jd, day_canchi, lunar_month, year_can, tiet_khi_name, data),
        day_deity=resolve_day_deity(lunar_month, day_canchi.chi, data),
        taboos=resolve_day_taboos(lunar_day, lunar_month, day_canchi.chi, data),
        xung_hop=get_xung_hop(day_canchi.chi_index),
        truc=get_truc(
            day_canchi.chi_index,
            lunar_month,
            RuleEvidence(source_id="formula", method="table-lookup", profile=profile),
        ),
    )
