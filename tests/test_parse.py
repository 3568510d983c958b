import pytest

from stocknest.parse import parse_advanced_length, parse_fraction, pretty_len


@pytest.mark.parametrize(
    "text, expected",
    [("1/2", 0.5), ("0.125", 0.125), ("3/16", 3 / 16), ("288", 288.0)],
)
def test_parse_fraction_documented_examples(text, expected):
    assert parse_fraction(text) == expected


def test_parse_fraction_ignores_surrounding_whitespace():
    assert parse_fraction("  3 / 16  ") == parse_fraction("3/16")
    assert parse_fraction("\t0.125\n") == parse_fraction("0.125")


@pytest.mark.parametrize(
    "text", ["", "   ", "abc", "12abc", "1/0", "1/2/3", "-1/2", "1e400", "a/b"]
)
def test_parse_fraction_failures_give_zero(text):
    assert parse_fraction(text) == 0.0


def test_parse_fraction_decimal_fraction_parts():
    assert parse_fraction("1.5/3") == parse_fraction("1/2")


def test_parse_advanced_length_documented_examples():
    assert parse_advanced_length("24'") == 288.0
    assert parse_advanced_length("288") == 288.0


def test_parse_advanced_length_feet_and_inches_forms_agree():
    forms = ["7'6\"", "7' 6\"", "7' 6", "  7'6  "]
    values = {parse_advanced_length(form) for form in forms}
    assert values == {parse_advanced_length("90")}


def test_parse_advanced_length_fraction_forms_agree():
    expected = parse_advanced_length("90") + parse_fraction("1/2")
    assert parse_advanced_length("7' 6 1/2\"") == expected
    assert parse_advanced_length("7' 6\" 1/2") == expected
    assert parse_advanced_length("90 1/2") == expected


def test_parse_advanced_length_mixed_number():
    assert parse_advanced_length("110 1/8") == 110 + parse_fraction("1/8")
    assert parse_advanced_length("110.125") == parse_advanced_length("110 1/8")


def test_parse_advanced_length_just_fraction_and_inch_mark():
    assert parse_advanced_length("1/2") == 0.5
    assert parse_advanced_length('6"') == parse_advanced_length("6")


@pytest.mark.parametrize("text", ["", "   ", "abc"])
def test_parse_advanced_length_invalid_gives_zero(text):
    assert parse_advanced_length(text) == 0.0


def test_pretty_len_documented_examples():
    assert pretty_len(100.5) == "8' 4 1/2\""
    assert pretty_len(288.0) == "24'"


def test_pretty_len_near_zero():
    assert pretty_len(0.0) == '0"'
    assert pretty_len(0.001) == '0"'
    assert pretty_len(-0.001) == '0"'


def test_pretty_len_negative_has_sign_prefix():
    assert pretty_len(-100.5) == "-" + pretty_len(100.5)


@pytest.mark.parametrize("k", list(range(1, 32 * 30, 7)))
def test_pretty_len_round_trips_through_parser(k):
    inches = k / 32
    assert parse_advanced_length(pretty_len(inches)) == inches


def test_pretty_len_rounds_to_thirty_seconds():
    assert pretty_len(100.5 + 0.001) == pretty_len(100.5)


def test_pretty_len_whole_feet_have_no_inch_mark():
    for feet in range(1, 10):
        text = pretty_len(feet * 12.0)
        assert text.endswith("'")
        assert '"' not in text