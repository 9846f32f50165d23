"""Record types shared by the calendar and almanac layers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolarDate:
    """A solar (Gregorian, or Julian before 15 Oct 1582) calendar date."""

    day: int
    month: int
    year: int

    def as_tuple(self) -> tuple[int, int, int]:
        return self.day, self.month, self.year

    def is_valid(self) -> bool:
        """False for the zero date returned by a rejected lunar conversion."""
        return self.day > 0 and self.month > 0


INVALID_SOLAR_DATE = SolarDate(0, 0, 0)


@dataclass(frozen=True)
class SolarInfo:
    day: int
    month: int
    year: int
    day_of_week: int  # 0=Chủ Nhật (Sunday) .. 6=Thứ Bảy
    day_of_week_name: str
    date_string: str  # "YYYY-MM-DD"


@dataclass(frozen=True)
class LunarDate:
    day: int
    month: int
    year: int
    is_leap: bool = False


@dataclass(frozen=True)
class LunarInfo:
    day: int
    month: int
    year: int
    is_leap_month: bool
    date_string: str  # "d/m/yyyy", with " (nhuận)" for leap months


@dataclass(frozen=True)
class CanChi:
    """A heavenly stem / earthly branch pair with its derived labels."""

    can_index: int  # 0-9
    chi_index: int  # 0-11
    can: str
    chi: str
    full: str  # "Giáp Thìn", month pairs may carry " (nhuận)"
    con_giap: str  # Zodiac label ("Thìn (Rồng)")
    can_element: str
    chi_element: str
    sexagenary_index: int  # 0-59, informational only


@dataclass(frozen=True)
class CanChiInfo:
    day: CanChi
    month: CanChi
    year: CanChi
    full: str


@dataclass(frozen=True)
class SolarTerm:
    index: int  # 0-23, 0 = Xuân Phân
    name: str
    description: str
    longitude: int  # Nominal start longitude (degrees)
    current_longitude: float  # Actual sun longitude of the day (degrees, 2 dp)
    season: str


@dataclass(frozen=True)
class SolarTermStart:
    """First day of a solar term inside a given solar year."""

    jd: int
    date: SolarDate
    term: SolarTerm


@dataclass(frozen=True)
class HourInfo:
    hour_index: int  # Hour branch index, 0 = Tý (23:00-01:00)
    hour_chi: str
    time_range: str
    star: str
    star_description: str
    is_good: bool


@dataclass(frozen=True)
class AuspiciousHours:
    day_chi_index: int
    day_chi: str
    hours: tuple[HourInfo, ...]
    good_hours: tuple[HourInfo, ...]
    summary: str

    @property
    def good_hour_count(self) -> int:
        return len(self.good_hours)


@dataclass(frozen=True)
class RuleEvidence:
    """Which rule-set source and method produced a derived value."""

    source_id: str
    method: str
    profile: str


@dataclass(frozen=True)
class DayElement:
    na_am: str
    element: str
    can_element: str
    chi_element: str
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class DayConflict:
    opposing_chi: str
    opposing_con_giap: str
    tuoi_xung: tuple[str, ...]
    sat_huong: str
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class TravelDirection:
    xuat_hanh_huong: str
    tai_than: str
    hy_than: str
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class DayStar:
    """The 28-mansion (nhị thập bát tú) star of the day."""

    index: int
    name: str
    quality: str  # cat | hung | binh
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class StarRuleEvidence:
    name: str
    quality: str
    category: str
    source_id: str
    method: str
    profile: str


@dataclass(frozen=True)
class DayStars:
    cat_tinh: tuple[str, ...]
    sat_tinh: tuple[str, ...]
    day_star: DayStar
    matched_rules: tuple[StarRuleEvidence, ...]
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class DayDeity:
    name: str
    classification: str  # hoang_dao | hac_dao
    evidence: RuleEvidence | None = None

    @property
    def is_hoang_dao(self) -> bool:
        return self.classification == "hoang_dao"


@dataclass(frozen=True)
class DayTaboo:
    rule_id: str
    name: str
    severity: str  # hard | soft
    reason: str
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class XungHop:
    luc_xung: str
    tam_hop: tuple[str, str, str]
    tu_hanh_xung: tuple[str, str, str, str]


@dataclass(frozen=True)
class TrucInfo:
    index: int
    name: str
    quality: str  # cat | hung | binh
    meaning: str
    good_for: tuple[str, ...]
    avoid: tuple[str, ...]
    evidence: RuleEvidence | None = None


@dataclass(frozen=True)
class DayFortune:
    profile: str
    day_element: DayElement
    conflict: DayConflict
    travel: TravelDirection
    stars: DayStars
    day_deity: DayDeity
    taboos: tuple[DayTaboo, ...]
    xung_hop: XungHop
    truc: TrucInfo


@dataclass(frozen=True)
class DayInfo:
    """Everything derived for one solar date. The sole input to presenters."""

    solar: SolarInfo
    lunar: LunarInfo
    jd: int
    canchi: CanChiInfo
    solar_term: SolarTerm
    hours: AuspiciousHours
    fortune: DayFortune
    ruleset_id: str
    ruleset_version: str


@dataclass(frozen=True)
class Holiday:
    name: str
    description: str
    solar: SolarDate
    lunar: LunarDate | None
    is_solar: bool
    category: str
    is_major: bool
