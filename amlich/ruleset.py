"""Almanac rule sets: loading, validation and the registry of known rule sets.

A rule set is parsed from JSON with orjson, checked against closed
vocabularies (directions, method tokens, solar term names, can/chi) and only
then published. Everything downstream treats the result as read-only.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import orjson

from amlich.canchi import CAN, CHI
from amlich.errors import RuleSetError, UnknownRulesetError
from amlich.solar_terms import SOLAR_TERM_NAMES

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

DEFAULT_RULESET_ID = "vn_baseline_v1"
BASELINE_RULESET_ALIAS = "baseline"
DEFAULT_RULESET_VERSION = "v1"
DEFAULT_RULESET_REGION = "vn"
DEFAULT_RULESET_TZ_OFFSET = 7.0
RULESET_SCHEMA_VERSION = "ruleset-descriptor/v1"

VALID_REGIONS = {"vn"}
VALID_METHODS = {"table-lookup", "bai-quyet", "jd-cycle"}
VALID_DIRECTIONS = {
    "Bắc",
    "Đông Bắc",
    "Đông",
    "Đông Nam",
    "Nam",
    "Tây Nam",
    "Tây",
    "Tây Bắc",
}
VALID_STAR_QUALITIES = {"cat", "hung", "binh"}
VALID_DEITY_CLASSES = {"hoang_dao", "hac_dao"}
VALID_SEVERITIES = {"hard", "soft"}
SEXAGENARY_KEYS = frozenset(f"{CAN[i % 10]} {CHI[i % 12]}" for i in range(60))
TABOO_FAMILIES = ("tam_nuong", "nguyet_ky", "sat_chu", "tho_tu")


@dataclass(frozen=True)
class SourceMeta:
    source_id: str
    method: str  # table-lookup | bai-quyet | jd-cycle


@dataclass(frozen=True)
class TravelRule:
    xuat_hanh_huong: str
    tai_than: str
    hy_than: str


@dataclass(frozen=True)
class ConflictRule:
    opposing_chi: str
    sat_huong: str
    cat_tinh: tuple[str, ...]
    sat_tinh: tuple[str, ...]


@dataclass(frozen=True)
class NaAmEntry:
    can: str
    chi: str
    na_am: str
    element: str  # Last word of the na âm name


@dataclass(frozen=True)
class DayStarRule:
    name: str
    quality: str
    meaning: str = ""


@dataclass(frozen=True)
class StarRuleBucket:
    cat_tinh: tuple[str, ...]
    sat_tinh: tuple[str, ...]
    binh_tinh: tuple[str, ...] = ()


@dataclass(frozen=True)
class StarRuleMeta:
    fixed_by_chi: SourceMeta
    fixed_by_canchi: SourceMeta
    by_year: SourceMeta
    by_month: SourceMeta
    by_tiet_khi: SourceMeta


@dataclass(frozen=True)
class DayDeityRule:
    name: str
    classification: str  # hoang_dao | hac_dao


@dataclass(frozen=True)
class DayDeityRuleSet:
    cycle: tuple[DayDeityRule, ...]
    month_group_start_by_chi: Mapping[str, int]


@dataclass(frozen=True)
class TabooDayRule:
    rule_id: str
    name: str
    severity: str
    lunar_days: tuple[int, ...]


@dataclass(frozen=True)
class TabooMonthChiRule:
    rule_id: str
    name: str
    severity: str
    by_lunar_month: Mapping[int, str]


@dataclass(frozen=True)
class TabooRuleSets:
    tam_nuong: TabooDayRule
    nguyet_ky: TabooDayRule
    sat_chu: TabooMonthChiRule
    tho_tu: TabooMonthChiRule


@dataclass(frozen=True)
class AlmanacData:
    """A fully validated rule set, shared read-only between callers."""

    profile: str
    travel_meta: SourceMeta
    conflict_meta: SourceMeta
    na_am_meta: SourceMeta
    star_meta: SourceMeta
    day_deity_meta: SourceMeta
    taboo_rule_meta: Mapping[str, SourceMeta]
    travel_by_can: Mapping[str, TravelRule]
    conflict_by_chi: Mapping[str, ConflictRule]
    sexagenary_na_am: Mapping[str, NaAmEntry]
    nhi_thap_bat_tu: tuple[DayStarRule, ...]
    star_rule_meta: StarRuleMeta
    star_rules_fixed_by_canchi: Mapping[str, StarRuleBucket]
    star_rules_by_year_can: Mapping[str, StarRuleBucket]
    star_rules_by_lunar_month: Mapping[int, StarRuleBucket]
    star_rules_by_tiet_khi: Mapping[str, StarRuleBucket]
    day_deity_rule_set: DayDeityRuleSet
    taboo_rules: TabooRuleSets


@dataclass(frozen=True)
class RulesetDescriptor:
    id: str
    version: str
    region: str
    profile: str
    aliases: tuple[str, ...]
    data_file: str

    def matches_id(self, ruleset_id: str) -> bool:
        return ruleset_id == self.id or ruleset_id in self.aliases

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "version": self.version,
            "region": self.region,
            "profile": self.profile,
            "defaults": {"tz_offset": DEFAULT_RULESET_TZ_OFFSET, "meridian": None},
            "source_notes": [
                {
                    "family": "travel",
                    "source_id": "khcbppt",
                    "note": "Direction table and bai quyet mapping",
                },
                {
                    "family": "taboo_rules",
                    "source_id": "khcbppt",
                    "note": "Tam Nuong/Nguyet Ky/Sat Chu/Tho Tu frozen for v1",
                },
            ],
            "schema_version": RULESET_SCHEMA_VERSION,
        }


RULESET_REGISTRY: tuple[RulesetDescriptor, ...] = (
    RulesetDescriptor(
        id=DEFAULT_RULESET_ID,
        version=DEFAULT_RULESET_VERSION,
        region=DEFAULT_RULESET_REGION,
        profile=BASELINE_RULESET_ALIAS,
        aliases=(BASELINE_RULESET_ALIAS,),
        data_file="almanac.json",
    ),
)

_LOADED: dict[str, AlmanacData] = {}
_LOADED_LOCK = threading.Lock()


def is_valid_method(method: str) -> bool:
    return method in VALID_METHODS


def is_valid_direction(direction: str) -> bool:
    return direction in VALID_DIRECTIONS


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise RuleSetError(message)


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _parse_source_meta(raw: dict[str, Any], path: str) -> SourceMeta:
    source_id = raw["source_id"]
    method = raw["method"]
    _check(_non_empty(source_id), f"{path}.source_id must not be empty")
    _check(is_valid_method(method), f"{path}.method '{method}' is not a valid method token")
    return SourceMeta(source_id=source_id, method=method)


def _parse_travel(raw: dict[str, Any]) -> dict[str, TravelRule]:
    _check(set(raw) == set(CAN), "travel_by_can must contain exactly 10 can")
    rules = {}
    for can, entry in raw.items():
        rule = TravelRule(entry["xuat_hanh_huong"], entry["tai_than"], entry["hy_than"])
        for field in ("xuat_hanh_huong", "tai_than", "hy_than"):
            direction = getattr(rule, field)
            _check(
                is_valid_direction(direction),
                f"invalid direction for travel_by_can[{can}].{field}: {direction}",
            )
        rules[can] = rule
    return rules


def _parse_conflicts(raw: dict[str, Any]) -> dict[str, ConflictRule]:
    _check(set(raw) == set(CHI), "conflict_by_chi must contain exactly 12 chi")
    rules = {}
    for chi, entry in raw.items():
        rule = ConflictRule(
            opposing_chi=entry["opposing_chi"],
            sat_huong=entry["sat_huong"],
            cat_tinh=tuple(entry["cat_tinh"]),
            sat_tinh=tuple(entry["sat_tinh"]),
        )
        _check(
            rule.opposing_chi in CHI,
            f"conflict_by_chi[{chi}].opposing_chi is not a valid chi: {rule.opposing_chi}",
        )
        _check(
            is_valid_direction(rule.sat_huong),
            f"invalid direction for sat_huong: {rule.sat_huong}",
        )
        _check(bool(rule.cat_tinh), f"conflict_by_chi[{chi}].cat_tinh must not be empty")
        _check(bool(rule.sat_tinh), f"conflict_by_chi[{chi}].sat_tinh must not be empty")
        _check_unique_stars((rule.cat_tinh, rule.sat_tinh), f"conflict_by_chi[{chi}]")
        rules[chi] = rule
    return rules


def expand_sexagenary_na_am(na_am_pairs: list[str]) -> dict[str, NaAmEntry]:
    """Expand the 30 na âm names into the 60 sexagenary pairs, two pairs per name."""
    out = {}
    for i in range(60):
        can = CAN[i % 10]
        chi = CHI[i % 12]
        na_am = na_am_pairs[i // 2]
        out[f"{can} {chi}"] = NaAmEntry(can, chi, na_am, na_am.split()[-1])
    return out


def _parse_na_am(raw: list[str]) -> dict[str, NaAmEntry]:
    _check(len(raw) == 30, "na_am_pairs must contain exactly 30 items")
    _check(all(_non_empty(value) for value in raw), "na_am_pairs cannot contain empty")
    return expand_sexagenary_na_am(raw)


def _parse_day_stars(raw: list[dict[str, Any]]) -> tuple[DayStarRule, ...]:
    _check(len(raw) == 28, "nhi_thap_bat_tu must contain exactly 28 stars")
    stars = []
    for entry in raw:
        star = DayStarRule(entry["name"], entry["quality"], entry.get("meaning", ""))
        _check(_non_empty(star.name), "star name cannot be empty")
        _check(
            star.quality in VALID_STAR_QUALITIES, f"invalid star quality: {star.quality}"
        )
        stars.append(star)
    return tuple(stars)


def _check_unique_stars(groups: tuple[tuple[str, ...], ...], path: str) -> None:
    seen: set[str] = set()
    for group in groups:
        for star in group:
            _check(_non_empty(star), f"{path} must not contain empty star names")
            _check(star not in seen, f"{path}: duplicate star across categories: {star}")
            seen.add(star)


def _parse_bucket(raw: dict[str, Any], path: str) -> StarRuleBucket:
    bucket = StarRuleBucket(
        cat_tinh=tuple(raw["cat_tinh"]),
        sat_tinh=tuple(raw["sat_tinh"]),
        binh_tinh=tuple(raw.get("binh_tinh", ())),
    )
    _check_unique_stars((bucket.cat_tinh, bucket.sat_tinh, bucket.binh_tinh), path)
    return bucket


def _parse_month_key(key: str, path: str) -> int:
    _check(key.isdigit(), f"{path} key must be a numeric month string: {key}")
    month = int(key)
    _check(1 <= month <= 12, f"{path} key out of range 1..12: {key}")
    return month


def _parse_star_rule_sets(
    raw: dict[str, Any],
) -> tuple[
    dict[str, StarRuleBucket],
    dict[str, StarRuleBucket],
    dict[int, StarRuleBucket],
    dict[str, StarRuleBucket],
]:
    by_canchi = {}
    for key, bucket in raw["fixed_by_canchi"].items():
        _check(
            key in SEXAGENARY_KEYS,
            f"star_rule_sets.fixed_by_canchi contains invalid canchi key: {key}",
        )
        by_canchi[key] = _parse_bucket(bucket, f"star_rule_sets.fixed_by_canchi[{key}]")

    by_year = {}
    for key, bucket in raw["by_year_can"].items():
        _check(key in CAN, f"star_rule_sets.by_year_can contains invalid can key: {key}")
        by_year[key] = _parse_bucket(bucket, f"star_rule_sets.by_year_can[{key}]")

    by_month = {}
    for key, bucket in raw["by_lunar_month"].items():
        month = _parse_month_key(key, "star_rule_sets.by_lunar_month")
        by_month[month] = _parse_bucket(bucket, f"star_rule_sets.by_lunar_month[{key}]")

    by_term = {}
    for key, bucket in raw["by_tiet_khi"].items():
        _check(
            key in SOLAR_TERM_NAMES,
            f"star_rule_sets.by_tiet_khi contains unknown tiet khi key: {key}",
        )
        by_term[key] = _parse_bucket(bucket, f"star_rule_sets.by_tiet_khi[{key}]")

    return by_canchi, by_year, by_month, by_term


def _parse_day_deity(raw: dict[str, Any]) -> DayDeityRuleSet:
    cycle = tuple(DayDeityRule(e["name"], e["classification"]) for e in raw["cycle"])
    _check(len(cycle) == 12, "day_deity_rule_set.cycle must contain exactly 12 entries")
    for idx, entry in enumerate(cycle):
        _check(
            _non_empty(entry.name), f"day_deity_rule_set.cycle[{idx}].name must not be empty"
        )
        _check(
            entry.classification in VALID_DEITY_CLASSES,
            f"day_deity_rule_set.cycle[{idx}].classification must be hoang_dao|hac_dao",
        )
    starts = raw["month_group_start_by_chi"]
    _check(
        set(starts) == set(CHI),
        "day_deity_rule_set.month_group_start_by_chi must contain all 12 chi keys",
    )
    for chi, start in starts.items():
        _check(
            isinstance(start, int) and 0 <= start < 12,
            f"day_deity_rule_set.month_group_start_by_chi[{chi}] must be in 0..12",
        )
    return DayDeityRuleSet(cycle=cycle, month_group_start_by_chi=MappingProxyType(dict(starts)))


def _check_taboo_common(raw: dict[str, Any], path: str, family: str) -> None:
    _check(raw["rule_id"] == family, f"{path}.rule_id must be '{family}'")
    _check(_non_empty(raw["name"]), f"{path}.name must not be empty")
    _check(
        raw["severity"] in VALID_SEVERITIES,
        f"{path}.severity must be one of 'hard' | 'soft' (got '{raw['severity']}')",
    )


def _parse_taboo_day_rule(raw: dict[str, Any], family: str) -> TabooDayRule:
    path = f"taboo_rule_sets.{family}"
    _check_taboo_common(raw, path, family)
    days = tuple(raw["lunar_days"])
    _check(bool(days), f"{path}.lunar_days must not be empty")
    for day in days:
        _check(
            isinstance(day, int) and 1 <= day <= 30,
            f"{path}.lunar_days contains day out of range 1..30: {day}",
        )
    _check(len(set(days)) == len(days), f"{path}.lunar_days contains duplicates")
    return TabooDayRule(raw["rule_id"], raw["name"], raw["severity"], days)


def _parse_taboo_month_rule(raw: dict[str, Any], family: str) -> TabooMonthChiRule:
    path = f"taboo_rule_sets.{family}"
    _check_taboo_common(raw, path, family)
    by_month = {}
    for key, chi in raw["by_lunar_month"].items():
        month = _parse_month_key(key, f"{path}.by_lunar_month")
        _check(chi in CHI, f"{path}.by_lunar_month[{key}] contains invalid chi: {chi}")
        by_month[month] = chi
    _check(
        set(by_month) == set(range(1, 13)),
        f"{path}.by_lunar_month must define all lunar months 1..12",
    )
    return TabooMonthChiRule(
        raw["rule_id"], raw["name"], raw["severity"], MappingProxyType(by_month)
    )


def parse_almanac_data(raw: dict[str, Any]) -> AlmanacData:
    """Validate a decoded rule set document and build the read-only tables.

    Raises RuleSetError on any missing key or value outside its vocabulary.
    """
    try:
        taboo_meta = raw["taboo_rule_meta"]
        _check(
            set(taboo_meta) == set(TABOO_FAMILIES),
            "taboo_rule_meta must define tam_nuong, nguyet_ky, sat_chu, tho_tu",
        )
        star_meta = raw["star_rule_meta"]
        taboo_sets = raw["taboo_rule_sets"]
        by_canchi, by_year, by_month, by_term = _parse_star_rule_sets(raw["star_rule_sets"])
        _check(_non_empty(raw["profile"]), "profile must not be empty")
        return AlmanacData(
            profile=raw["profile"],
            travel_meta=_parse_source_meta(raw["travel_meta"], "travel_meta"),
            conflict_meta=_parse_source_meta(raw["conflict_meta"], "conflict_meta"),
            na_am_meta=_parse_source_meta(raw["na_am_meta"], "na_am_meta"),
            star_meta=_parse_source_meta(raw["star_meta"], "star_meta"),
            day_deity_meta=_parse_source_meta(raw["day_deity_meta"], "day_deity_meta"),
            taboo_rule_meta=MappingProxyType(
                {
                    family: _parse_source_meta(taboo_meta[family], f"taboo_rule_meta.{family}")
                    for family in TABOO_FAMILIES
                }
            ),
            travel_by_can=MappingProxyType(_parse_travel(raw["travel_by_can"])),
            conflict_by_chi=MappingProxyType(_parse_conflicts(raw["conflict_by_chi"])),
            sexagenary_na_am=MappingProxyType(_parse_na_am(raw["na_am_pairs"])),
            nhi_thap_bat_tu=_parse_day_stars(raw["nhi_thap_bat_tu"]),
            star_rule_meta=StarRuleMeta(
                **{
                    key: _parse_source_meta(star_meta[key], f"star_rule_meta.{key}")
                    for key in (
                        "fixed_by_chi",
                        "fixed_by_canchi",
                        "by_year",
                        "by_month",
                        "by_tiet_khi",
                    )
                }
            ),
            star_rules_fixed_by_canchi=MappingProxyType(by_canchi),
            star_rules_by_year_can=MappingProxyType(by_year),
            star_rules_by_lunar_month=MappingProxyType(by_month),
            star_rules_by_tiet_khi=MappingProxyType(by_term),
            day_deity_rule_set=_parse_day_deity(raw["day_deity_rule_set"]),
            taboo_rules=TabooRuleSets(
                tam_nuong=_parse_taboo_day_rule(taboo_sets["tam_nuong"], "tam_nuong"),
                nguyet_ky=_parse_taboo_day_rule(taboo_sets["nguyet_ky"], "nguyet_ky"),
                sat_chu=_parse_taboo_month_rule(taboo_sets["sat_chu"], "sat_chu"),
                tho_tu=_parse_taboo_month_rule(taboo_sets["tho_tu"], "tho_tu"),
            ),
        )
    except (KeyError, TypeError, AttributeError, IndexError) as error:
        raise RuleSetError(f"malformed almanac data: {error!r}") from error


def load_almanac_data(path: Path) -> AlmanacData:
    """Read, decode and validate a rule set file."""
    try:
        raw = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as error:
        raise RuleSetError(f"invalid JSON in {path.name}: {error}") from error
    except FileNotFoundError as error:
        raise RuleSetError(f"rule set file not found: {path}") from error
    if not isinstance(raw, dict):
        raise RuleSetError(f"{path.name} must contain a JSON object")
    return parse_almanac_data(raw)


def get_ruleset(ruleset_id: str) -> RulesetDescriptor:
    """Look up a registered rule set by canonical id or alias."""
    for descriptor in RULESET_REGISTRY:
        if descriptor.matches_id(ruleset_id):
            return descriptor
    raise UnknownRulesetError(ruleset_id)


def default_ruleset() -> RulesetDescriptor:
    return RULESET_REGISTRY[0]


def get_ruleset_data(ruleset_id: str = DEFAULT_RULESET_ID) -> AlmanacData:
    """Load a rule set once per process; later calls return the same object."""
    descriptor = get_ruleset(ruleset_id)
    data = _LOADED.get(descriptor.id)
    if data is not None:
        return data
    with _LOADED_LOCK:
        data = _LOADED.get(descriptor.id)
        if data is None:
            data = load_almanac_data(DATA_DIR / descriptor.data_file)
            _LOADED[descriptor.id] = data
            log.debug(f"{__name__}: loaded almanac rule set {descriptor.id}")
    return data


def baseline_data() -> AlmanacData:
    return get_ruleset_data(DEFAULT_RULESET_ID)


def validate_ruleset_descriptor(document: dict[str, Any]) -> None:
    """Check a descriptor document, raising RuleSetError on the first problem."""
    for field in ("id", "version", "profile"):
        _check(_non_empty(document.get(field)), f"ruleset descriptor {field} must not be empty")
    _check(
        document.get("region") in VALID_REGIONS,
        f"ruleset descriptor region '{document.get('region')}' is not supported",
    )
    defaults = document.get("defaults") or {}
    tz_offset = defaults.get("tz_offset")
    _check(
        isinstance(tz_offset, (int, float)) and -12.0 <= tz_offset <= 14.0,
        "ruleset descriptor defaults.tz_offset must be in -12..14",
    )
    meridian = defaults.get("meridian")
    if meridian is not None:
        _check(
            _non_empty(meridian),
            "ruleset descriptor defaults.meridian must not be empty when provided",
        )
    _check(
        document.get("schema_version") == RULESET_SCHEMA_VERSION,
        f"ruleset descriptor schema_version must be '{RULESET_SCHEMA_VERSION}'",
    )
    families: set[str] = set()
    for note in document.get("source_notes") or []:
        for field in ("family", "source_id", "note"):
            _check(
                _non_empty(note.get(field)),
                f"ruleset descriptor source note {field} must not be empty",
            )
        _check(
            note["family"] not in families,
            f"ruleset descriptor source notes contain duplicate family: {note['family']}",
        )
        families.add(note["family"])


def get_ruleset_descriptor(ruleset_id: str = DEFAULT_RULESET_ID) -> dict[str, Any]:
    """Descriptor document (id, version, region, defaults, sources) for a rule set."""
    document = get_ruleset(ruleset_id).to_document()
    validate_ruleset_descriptor(document)
    return document
