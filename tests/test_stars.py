import pytest

from amlich.canchi import CHI
from amlich.stars import (
    StarCategory,
    StarQuality,
    StarRule,
    category_meta,
    category_priority,
    get_day_star_rules,
    resolve_rules,
)


def rule(name, quality, category):
    return StarRule(name, quality, category, "test")


def test_category_precedence_order():
    ranks = [category_priority(c) for c in StarCategory]
    assert ranks == sorted(ranks)
    assert StarCategory.BY_TIET_KHI.priority == 0
    assert StarCategory.JD_CYCLE.priority == 5
    assert StarCategory.FIXED_BY_CANCHI.token == "fixed_by_canchi"


def test_lower_rank_overrides_quality():
    rules = [
        rule("Thiên Hỷ", StarQuality.CAT, StarCategory.FIXED_BY_CHI),
        rule("Thiên Hỷ", StarQuality.HUNG, StarCategory.BY_MONTH),
    ]
    assert resolve_rules(rules) == ((), ("Thiên Hỷ",))


def test_rule_order_does_not_beat_rank():
    rules = [
        rule("Thiên Hỷ", StarQuality.HUNG, StarCategory.BY_TIET_KHI),
        rule("Thiên Hỷ", StarQuality.CAT, StarCategory.BY_YEAR),
    ]
    assert resolve_rules(rules) == ((), ("Thiên Hỷ",))


def test_same_rank_last_rule_wins():
    rules = [
        rule("Thiên Hỷ", StarQuality.HUNG, StarCategory.BY_MONTH),
        rule("Thiên Hỷ", StarQuality.CAT, StarCategory.BY_MONTH),
    ]
    assert resolve_rules(rules) == (("Thiên Hỷ",), ())


def test_binh_winner_is_dropped():
    rules = [
        rule("Nguyệt Đức Hợp", StarQuality.CAT, StarCategory.FIXED_BY_CHI),
        rule("Nguyệt Đức Hợp", StarQuality.BINH, StarCategory.FIXED_BY_CANCHI),
    ]
    assert resolve_rules(rules) == ((), ())


def test_results_are_sorted():
    rules = [
        rule("Tục Thế", StarQuality.CAT, StarCategory.FIXED_BY_CHI),
        rule("Ích Hậu", StarQuality.CAT, StarCategory.FIXED_BY_CHI),
        rule("Cô Thần", StarQuality.HUNG, StarCategory.FIXED_BY_CHI),
        rule("Bạch Hổ", StarQuality.HUNG, StarCategory.FIXED_BY_CHI),
    ]
    cat, sat = resolve_rules(rules)
    assert list(cat) == sorted(cat)
    assert list(sat) == sorted(sat)
    assert resolve_rules(list(reversed(rules))) == (cat, sat)


def test_empty_rules():
    assert resolve_rules([]) == ((), ())


@pytest.mark.parametrize("chi", CHI)
def test_base_table_covers_every_chi(data, chi):
    cat, sat = resolve_rules(get_day_star_rules(data, chi))
    assert cat
    assert sat


def test_ty_base_rules(data):
    rules = get_day_star_rules(data, "Tý")
    assert {r.category for r in rules} == {StarCategory.FIXED_BY_CHI}
    cat, sat = resolve_rules(rules)
    assert "Thiên Đức" in cat
    assert "Nguyệt Đức" in cat
    assert "Thiên Hình" in sat


def test_context_buckets_are_collected(data):
    rules = get_day_star_rules(
        data,
        "Thìn",
        day_canchi="Giáp Thìn",
        year_can="Giáp",
        lunar_month=1,
        tiet_khi_name="Lập Xuân",
    )
    assert {r.category for r in rules} == {
        StarCategory.FIXED_BY_CHI,
        StarCategory.FIXED_BY_CANCHI,
        StarCategory.BY_YEAR,
        StarCategory.BY_MONTH,
        StarCategory.BY_TIET_KHI,
    }
    cat, sat = resolve_rules(rules)
    assert cat == tuple(
        sorted(["Thiên Tài", "Địa Tài", "Thiên Phúc", "Tuế Đức", "Thiên Quan", "Tứ Tướng"])
    )
    assert sat == tuple(sorted(["Nguyệt Hư", "Thiên Tặc", "Tuế Phá", "Nguyệt Sát", "Tứ Tuyệt"]))
    assert "Nguyệt Đức Hợp" not in cat + sat


def test_missing_context_bucket_contributes_nothing(data):
    base = get_day_star_rules(data, "Dần")
    assert get_day_star_rules(data, "Dần", year_can="Bính", tiet_khi_name="Cốc Vũ") == base


def test_category_meta(data):
    assert category_meta(StarCategory.JD_CYCLE, data).method == "jd-cycle"
    assert category_meta(StarCategory.BY_MONTH, data).method == "bai-quyet"
    assert category_meta(StarCategory.FIXED_BY_CHI, data).source_id == "khcbppt"
