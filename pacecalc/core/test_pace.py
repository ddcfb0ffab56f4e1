import math

import pytest

from pacecalc.core.models import PLACEHOLDER
from pacecalc.core.pace import (
    PACE_MATCHERS,
    format_pace,
    format_speed,
    kph_from_pace,
    leading_float,
    pace_from_kph,
    parse_pace,
    parse_speed,
)


@pytest.mark.parametrize("text, expected", [
    ("6:00", 360),
    ("5:30", 330),
    ("5:3", 303),
    ("05:07", 307),
    ("5m30", 330),
    ("5M30", 330),
    ("5 m 30", 330),
    ("  4:45  ", 285),
    ("330", 330),
    ("330.5", 330.5),
    ("0", 0),
    ("5 30", 330),
    ("5'30\"", 330),
    ("123:45", 123 * 60 + 45),
])
def test_parse_pace_accepted_forms(text, expected):
    assert parse_pace(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "-5", "5:30:10", "1.2.3", "+5", None])
def test_parse_pace_rejects_to_nan(text):
    assert math.isnan(parse_pace(text))


def test_parse_pace_numbers_pass_through():
    assert parse_pace(360) == 360.0
    assert parse_pace(327.5) == 327.5
    assert parse_pace(-5) == -5.0


def test_parse_pace_ignores_non_ascii_digits():
    assert math.isnan(parse_pace("٥:٣٠"))


def test_matchers_are_independent():
    pure, min_sec, two_numbers = PACE_MATCHERS
    assert pure("300") == 300.0
    assert pure("5:00") is None
    assert min_sec("5:00") == 300
    assert min_sec("5 00") is None
    assert two_numbers("5 00") == 300
    assert two_numbers("5") is None


def test_format_pace_examples():
    assert format_pace(360) == "6:00 /km"
    assert format_pace(300) == "5:00 /km"
    assert format_pace(327.27) == "5:27 /km"
    assert format_pace(288) == "4:48 /km"


def test_format_pace_rounds_half_up_before_splitting():
    assert format_pace(359.5) == "6:00 /km"
    assert format_pace(359.49) == "5:59 /km"
    assert format_pace(330.5) == "5:31 /km"  # round() would give 330


@pytest.mark.parametrize("value", [0, -1, -360, float("nan"), float("inf"), None, "6:00"])
def test_format_pace_placeholder(value):
    assert format_pace(value) == PLACEHOLDER


def test_format_then_parse_recovers_whole_seconds():
    for seconds in [1, 59.6, 60, 299.5, 327.27, 360, 3599.4, 7322.8]:
        text = format_pace(seconds)
        assert parse_pace(text[:-len(" /km")]) == math.floor(seconds + 0.5)


def test_speed_pace_conversion():
    assert pace_from_kph(12.0) == 300
    assert pace_from_kph(10.0) == 360
    assert kph_from_pace("6:00") == 10.0
    assert kph_from_pace(300) == 12.0
    for s in [150.0, 287.3, 360.0, 600.0]:
        assert 3600 / (3600 / s) == pytest.approx(s)
        assert pace_from_kph(3600 / s) == pytest.approx(s)


@pytest.mark.parametrize("kph", [0, -3, float("nan")])
def test_pace_from_degenerate_speed(kph):
    assert math.isnan(pace_from_kph(kph))
    assert format_pace(pace_from_kph(kph)) == PLACEHOLDER


@pytest.mark.parametrize("pace", ["", "abc", "0", "0:00", "-5"])
def test_speed_from_unusable_pace(pace):
    assert math.isnan(kph_from_pace(pace))
    assert format_speed(kph_from_pace(pace)) == PLACEHOLDER


def test_format_speed():
    assert format_speed(10.0) == "10.0"
    assert format_speed(12.5) == "12.5"
    assert format_speed(11.000000000000002) == "11.0"
    assert format_speed(3600 / 327) == "11.0"
    assert format_speed(10.25) == "10.3"
    assert format_speed(float("nan")) == PLACEHOLDER
    assert format_speed(float("inf")) == PLACEHOLDER


def test_leading_float_reads_like_a_browser():
    assert leading_float("12.5km") == 12.5
    assert leading_float(" 1e2") == 100.0
    assert leading_float(".5") == 0.5
    assert leading_float("-3") == -3.0
    assert leading_float("Infinity") == math.inf
    assert math.isnan(leading_float("abc"))
    assert math.isnan(leading_float("infinity"))


def test_parse_speed_falls_back_to_zero():
    assert parse_speed("12.5") == 12.5
    assert parse_speed("10 km/h") == 10.0
    assert parse_speed("") == 0.0
    assert parse_speed("fast") == 0.0
    assert parse_speed(None) == 0.0
    assert parse_speed(9) == 9.0
    assert parse_speed(float("nan")) == 0.0


@pytest.mark.parametrize("text", ["1" * 400 + ":30", "1" * 5000 + " 30", "5:" + "9" * 400, "9" * 400])
def test_parse_pace_huge_digit_runs_are_infinite(text):
    seconds = parse_pace(text)
    assert seconds == math.inf
    assert format_pace(seconds) == PLACEHOLDER
    assert math.isnan(kph_from_pace(text))


def test_huge_integers_do_not_overflow():
    huge = 10 ** 400
    assert parse_pace(huge) == math.inf
    assert format_pace(huge) == PLACEHOLDER
    assert format_speed(huge) == PLACEHOLDER
    assert pace_from_kph(huge) == 0.0
    assert parse_speed(huge) == math.inf
