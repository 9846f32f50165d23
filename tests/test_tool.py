import logging

import orjson
import pytest

from amlich.lunar import lunar_month_length
from amlich.tool import (
    date_conversion_tool,
    get_number_of_days,
    split_date,
    to_json,
    validate_date,
)


def test_solar_to_lunar():
    result = date_conversion_tool("s2l", "2024-02-10")
    assert result["mode"] == "s2l"
    assert result["solar_date"] == "2024-02-10"
    assert result["lunar_date"] == "2024-01-01"
    assert result["weekday"] == "Thứ Bảy"
    assert result["can_chi"]["day"] == "Giáp Thìn"
    assert result["can_chi"]["con_giap"] == "Thìn (Rồng)"
    assert result["solar_term"]["name"] == "Lập Xuân"
    assert len(result["auspicious_hours"]["hours"]) == 6
    assert result["twelve_day_officer"]["name"] == "Mãn"
    assert result["ruleset"] == {"id": "vn_baseline_v1", "version": "v1"}
    assert result["locale"] == "vi-VN"
    assert result["time_zone"] == 7.0
    assert result["difference_direction"] in ("days_remaining", "days_elapsed")


def test_lunar_to_solar():
    result = date_conversion_tool("l2s", "2024-01-01")
    assert result["mode"] == "l2s"
    assert result["solar_date"] == "2024-02-10"


def test_lunar_to_solar_leap_month():
    result = date_conversion_tool("l2s", "2023-02-01", leap_month=True)
    assert result["solar_date"] == "2023-03-22"
    assert result["lunar_date_meta"]["leap_month"] is True
    assert result["lunar_date_meta"]["month_name"] == "Hai nhuận"


def test_english_labels():
    result = date_conversion_tool("s2l", "2024-02-10", lang="en")
    assert result["weekday"] == "Saturday"
    assert result["locale"] == "en-US"
    assert result["twelve_day_officer"]["quality_label"] == "Inauspicious"


def test_result_is_json_ready():
    result = date_conversion_tool("s2l", "2024-02-14")
    assert orjson.loads(to_json(result)) == result
    assert [t["rule_id"] for t in result["taboos"]] == ["nguyet_ky"]


@pytest.mark.parametrize(
    "args, kwargs, message",
    [
        (("", "2024-02-10"), {}, "Missing one or more required arguments"),
        (("x2y", "2024-02-10"), {}, "Wrong Conversion Type"),
        (("s2l", "2024-02-30"), {}, "Invalid date format"),
        (("s2l", "10/02/2024"), {}, "Invalid date format"),
        (("s2l", "20240210"), {}, "Invalid date format"),
        (("s2l", "2024-W06-6"), {}, "Invalid date format"),
        (("s2l", 20240210), {}, "Invalid date format"),
        (("l2s", "20240101"), {}, "Invalid date format"),
        (("l2s", "2024-13-01"), {}, "Lunar month must be between 1 and 12"),
        (("l2s", "2024-01-31"), {}, "Lunar day must be between 1 and 30"),
        (("l2s", "2024-1-1"), {}, "Invalid date format"),
        (("s2l", "2024-02-10"), {"lang": "fr"}, "Wrong language"),
        (("s2l", "2024-02-10"), {"time_zone": "east"}, "Invalid time_zone"),
        (("s2l", "2024-02-10"), {"time_zone": 15}, "Invalid time_zone"),
        (("l2s", "2023-03-01"), {"leap_month": True}, "does not exist"),
    ],
)
def test_errors(args, kwargs, message):
    result = date_conversion_tool(*args, **kwargs)
    assert set(result) == {"error"}
    assert message in result["error"]


def test_day_thirty_of_short_month():
    month = next(m for m in range(1, 13) if lunar_month_length(m, 2024) == 29)
    result = date_conversion_tool("l2s", f"2024-{month:02d}-30")
    assert "does not exist" in result["error"]


def test_unknown_ruleset_is_logged(caplog):
    with caplog.at_level(logging.ERROR, logger="amlich.tool"):
        result = date_conversion_tool("s2l", "2024-02-10", ruleset="nope")
    assert "unknown almanac ruleset id: nope" in result["error"]
    assert "unknown almanac ruleset id: nope" in caplog.text


def test_split_date():
    assert split_date("2024-02-10") == (10, 2, 2024)
    with pytest.raises(ValueError):
        split_date("2024/02/10")


def test_number_of_days_is_relative_to_today():
    import datetime

    today = datetime.date.today()
    assert get_number_of_days(today.day, today.month, today.year) == 0


@pytest.mark.parametrize("date", ["2024-02-10", "2024-02-30", "20240210", "2024-W06-6", "2024-2-10"])
def test_validate_date_is_strict(date):
    assert validate_date(date) is (date == "2024-02-10")
