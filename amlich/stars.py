"""Cát tinh / sát tinh: star rules from several sources, collapsed by precedence.

Category precedence, lower rank wins:

0. BY_TIET_KHI      active during a solar term
1. BY_MONTH         keyed by lunar month number
2. BY_YEAR          keyed by the year's can
3. FIXED_BY_CANCHI  keyed by the full day can chi
4. FIXED_BY_CHI     keyed by the day's chi only (base table)
5. JD_CYCLE         the 28-mansion day star, resolved on its own
"""

from dataclasses import dataclass
from enum import Enum

from amlich.ruleset import AlmanacData, SourceMeta, StarRuleBucket


class StarCategory(Enum):
    BY_TIET_KHI = "by_tiet_khi"
    BY_MONTH = "by_month"
    BY_YEAR = "by_year"
    FIXED_BY_CANCHI = "fixed_by_canchi"
    FIXED_BY_CHI = "fixed_by_chi"
    JD_CYCLE = "jd_cycle"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    @property
    def token(self) -> str:
        return self.value


_PRIORITY = {category: rank for rank, category in enumerate(StarCategory)}


class StarQuality(Enum):
    CAT = "cat"
    HUNG = "hung"
    BINH = "binh"


@dataclass(frozen=True)
class StarRule:
    """One star assignment contributed by one source."""

    name: str
    quality: StarQuality
    category: StarCategory
    source_id: str


def category_priority(category: StarCategory) -> int:
    return category.priority


def category_meta(category: StarCategory, data: AlmanacData) -> SourceMeta:
    """Source descriptor that backs a rule category."""
    if category is StarCategory.JD_CYCLE:
        return data.star_meta
    return getattr(data.star_rule_meta, category.value)


def resolve_rules(rules: list[StarRule]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Collapse candidate rules into sorted (cat_tinh, sat_tinh) name lists.

    For each star name the rule from the lowest-ranked category wins; within
    one category the last rule seen wins. Binh stars are dropped.
    """
    best: dict[str, StarRule] = {}
    for rule in rules:
        current = best.get(rule.name)
        if current is None or rule.category.priority <= current.category.priority:
            best[rule.name] = rule

    cat = sorted(r.name for r in best.values() if r.quality is StarQuality.CAT)
    sat = sorted(r.name for r in best.values() if r.quality is StarQuality.HUNG)
    return tuple(cat), tuple(sat)


def _bucket_rules(
    bucket: StarRuleBucket | None, category: StarCategory, source_id: str
) -> list[StarRule]:
    if bucket is None:
        return []
    rules = [StarRule(name, StarQuality.CAT, category, source_id) for name in bucket.cat_tinh]
    rules += [StarRule(name, StarQuality.HUNG, category, source_id) for name in bucket.sat_tinh]
    rules += [StarRule(name, StarQuality.BINH, category, source_id) for name in bucket.binh_tinh]
    return rules


def get_day_star_rules(
    data: AlmanacData,
    day_chi: str,
    day_canchi: str | None = None,
    year_can: str | None = None,
    lunar_month: int | None = None,
    tiet_khi_name: str | None = None,
) -> list[StarRule]:
    """Collect every star rule that applies to a day, base table first.

    Context keys left as None, or with no bucket in the rule set, contribute nothing.
    """
    rules: list[StarRule] = []
    meta = data.star_rule_meta

    conflict = data.conflict_by_chi.get(day_chi)
    if conflict is not None:
        rules += _bucket_rules(
            StarRuleBucket(conflict.cat_tinh, conflict.sat_tinh),
            StarCategory.FIXED_BY_CHI,
            meta.fixed_by_chi.source_id,
        )
    if day_canchi is not None:
        rules += _bucket_rules(
            data.star_rules_fixed_by_canchi.get(day_canchi),
            StarCategory.FIXED_BY_CANCHI,
            meta.fixed_by_canchi.source_id,
        )
    if year_can is not None:
        rules += _bucket_rules(
            data.star_rules_by_year_can.get(year_can),
            StarCategory.BY_YEAR,
            meta.by_year.source_id,
        )
    if lunar_month is not None:
        rules += _bucket_rules(
            data.star_rules_by_lunar_month.get(lunar_month),
            StarCategory.BY_MONTH,
            meta.by_month.source_id,
        )
    if tiet_khi_name is not None:
        rules += _bucket_rules(
            data.star_rules_by_tiet_khi.get(tiet_khi_name),
            StarCategory.BY_TIET_KHI,
            meta.by_tiet_khi.source_id,
        )
    return rules
